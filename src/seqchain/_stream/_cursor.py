from __future__ import annotations

from collections.abc import Generator, Iterator
from enum import StrEnum, auto
from typing import cast

from .._core import Pipeable
from .._results import DONE, Step, Yielded


class CursorState(StrEnum):
    """Lifecycle of a `Cursor`.

    `NOT_STARTED` moves to `ACTIVE` on the first pull. `EXHAUSTED` is terminal.
    """

    NOT_STARTED = auto()
    ACTIVE = auto()
    EXHAUSTED = auto()


class Cursor[T](Pipeable, Iterator[T]):
    """A single consumption session over a `Stream`.

    Created by `Stream.cursor()` or `iter(stream)`. A `Cursor` owns the per-session state of the whole pipeline below it.

    It implements the `Iterator` Protocol, so it can be used in a for-loop, but `Cursor.pull()` exposes the raw `Step` instead of raising `StopIteration`.

    Once a pull returned `DONE`, or raised, every later pull returns `DONE` without touching the pipeline again.

    Args:
        session (Iterator[T]): The iterator opened for this session.
        two_way (bool): Whether **session** is a generator accepting resume values. Defaults to False.
    """

    __slots__ = ("_inner", "_state", "_two_way")

    def __init__(self, session: Iterator[T], *, two_way: bool = False) -> None:
        self._inner = session
        self._state = CursorState.NOT_STARTED
        self._two_way = two_way

    def __repr__(self) -> str:
        return f"Cursor({self._state.name})"

    def __next__(self) -> T:
        match self.pull():
            case Yielded(value):
                return value
            case _:
                raise StopIteration

    @property
    def state(self) -> CursorState:
        """The current `CursorState` of the session."""
        return self._state

    def is_exhausted(self) -> bool:
        """Check whether the session reached its terminal state.

        Returns:
            bool: True once a pull returned `DONE` or raised.

        Example:
        ```python
        >>> import seqchain as sc
        >>> cursor = sc.Stream.once(1).cursor()
        >>> cursor.is_exhausted()
        False
        >>> cursor.pull(), cursor.pull()
        (Yielded(1), DONE)
        >>> cursor.is_exhausted()
        True

        ```
        """
        return self._state is CursorState.EXHAUSTED

    def pull(self, resume: object = None) -> Step[T]:
        """Request the next value of the session.

        **resume** is sent into the underlying generator when the stream was built with `Stream.from_generator()` and the session already started.

        It is ignored on the first pull, since no `yield` is waiting for it yet, and by every other source.

        Any exception raised by a callback of the pipeline propagates unchanged, and leaves the cursor exhausted.

        This includes `KeyboardInterrupt` and other `BaseException` subclasses.

        Args:
            resume (object): Value to send into a two-way generator. Defaults to None.

        Returns:
            Step[T]: `Yielded(value)`, or `DONE` once the session is exhausted.

        Example:
        ```python
        >>> import seqchain as sc
        >>> def echo():
        ...     received = yield "ready"
        ...     while received is not None:
        ...         received = yield received.upper()
        >>> cursor = sc.Stream.from_generator(echo).cursor()
        >>> cursor.pull("ignored")
        Yielded('ready')
        >>> cursor.pull("hello")
        Yielded('HELLO')
        >>> cursor.pull()
        DONE
        >>> cursor.pull("too late")
        DONE

        ```
        """
        if self._state is CursorState.EXHAUSTED:
            return DONE
        try:
            if self._state is CursorState.ACTIVE and self._two_way:
                value = cast("Generator[T, object, object]", self._inner).send(resume)
            else:
                value = next(self._inner)
        except StopIteration:
            self._state = CursorState.EXHAUSTED
            return DONE
        except BaseException:
            self._state = CursorState.EXHAUSTED
            raise
        self._state = CursorState.ACTIVE
        return Yielded(value)
