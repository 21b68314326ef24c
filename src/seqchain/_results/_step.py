from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Never, TypeIs

from .._core import SeqchainError


class StepUnwrapError(SeqchainError, RuntimeError): ...


class Step[T](ABC):
    """The outcome of a single pull on a `Cursor`.

    A `Step` is either `Yielded(value)`, carrying the next value of the session, or `DONE`, signaling exhaustion.
    """

    __slots__ = ()

    @abstractmethod
    def has_value(self) -> TypeIs[Yielded[T]]:  # type: ignore[misc]
        """
        Returns `True` if the step carries a value.

        Returns:
            `True` for a `Yielded` step, `False` for `DONE`.

        Example:
            ```python
            >>> from seqchain import Yielded, DONE
            >>> Yielded(2).has_value()
            True
            >>> DONE.has_value()
            False

            ```
        """
        ...

    @abstractmethod
    def is_done(self) -> TypeIs[Done]:  # type: ignore[misc]
        """
        Returns `True` if the step signals exhaustion.

        Returns:
            `True` for `DONE`, `False` for a `Yielded` step.

        Example:
            ```python
            >>> from seqchain import Yielded, DONE
            >>> Yielded(2).is_done()
            False
            >>> DONE.is_done()
            True

            ```
        """
        ...

    @abstractmethod
    def unwrap(self) -> T:
        """
        Returns the carried value.

        Returns:
            The value of a `Yielded` step.

        Raises:
            StepUnwrapError: If the step is `DONE`.

        Example:
            ```python
            >>> from seqchain import Yielded, DONE
            >>> Yielded("car").unwrap()
            'car'
            >>> DONE.unwrap()
            Traceback (most recent call last):
                ...
            seqchain._results._step.StepUnwrapError: called `unwrap` on `DONE`

            ```
        """
        ...

    def expect(self, msg: str) -> T:
        """
        Returns the carried value, or raises with a provided message if the step is `DONE`.

        Args:
            msg: The message to include in the exception.

        Returns:
            The value of a `Yielded` step.

        Raises:
            StepUnwrapError: If the step is `DONE`.

        Example:
            ```python
            >>> from seqchain import Yielded, DONE
            >>> Yielded("value").expect("stream should not be empty")
            'value'
            >>> DONE.expect("stream should not be empty")
            Traceback (most recent call last):
                ...
            seqchain._results._step.StepUnwrapError: stream should not be empty (called `expect` on `DONE`)

            ```
        """
        if self.has_value():
            return self.unwrap()
        msg = f"{msg} (called `expect` on `DONE`)"
        raise StepUnwrapError(msg)

    def unwrap_or(self, default: T) -> T:
        """
        Returns the carried value or a provided default.

        Example:
            ```python
            >>> from seqchain import Yielded, DONE
            >>> Yielded(1).unwrap_or(0)
            1
            >>> DONE.unwrap_or(0)
            0

            ```
        """
        return self.unwrap() if self.has_value() else default

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        """
        Returns the carried value or computes one from a function.

        Example:
            ```python
            >>> from seqchain import Yielded, DONE
            >>> Yielded(4).unwrap_or_else(lambda: 20)
            4
            >>> DONE.unwrap_or_else(lambda: 20)
            20

            ```
        """
        return self.unwrap() if self.has_value() else f()

    def map[U](self, f: Callable[[T], U]) -> Step[U]:
        """
        Applies a function to the carried value, leaving `DONE` untouched.

        Args:
            f: The function to apply to the value.

        Returns:
            A new `Yielded` step with the mapped value, or `DONE`.

        Example:
            ```python
            >>> from seqchain import Yielded, DONE
            >>> Yielded("Hello, World!").map(len)
            Yielded(13)
            >>> DONE.map(len)
            DONE

            ```
        """
        if self.has_value():
            return Yielded(f(self.unwrap()))
        return DONE


@dataclass(slots=True)
class Yielded[T](Step[T]):
    value: T

    def __repr__(self) -> str:
        return f"Yielded({self.value!r})"

    def has_value(self) -> TypeIs[Yielded[T]]:  # type: ignore[misc]
        return True

    def is_done(self) -> TypeIs[Done]:  # type: ignore[misc]
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(slots=True)
class Done(Step[Any]):
    def __repr__(self) -> str:
        return "DONE"

    def has_value(self) -> TypeIs[Yielded[Any]]:  # type: ignore[misc]
        return False

    def is_done(self) -> TypeIs[Done]:  # type: ignore[misc]
        return True

    def unwrap(self) -> Never:
        raise StepUnwrapError("called `unwrap` on `DONE`")


DONE: Step[Any] = Done()
