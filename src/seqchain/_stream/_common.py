from __future__ import annotations

import warnings
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING, Any

from .._core import Pipeable, UnboundedConsumptionWarning, get_config
from ._cursor import Cursor

if TYPE_CHECKING:
    from ._main import Stream


class StreamBase[T](Pipeable, Iterable[T]):
    """Node of a lazy pipeline.

    Holds a session opener, the upstream nodes it owns, the rendered pipeline used by `repr`, and whether the node is known to be infinite.

    Only `from_generator()` nodes are two-way: their cursors send resume values into the session.
    """

    _open: Callable[[], Iterator[T]]
    _label: str
    _upstream: tuple[StreamBase[Any], ...]
    _unbounded: bool
    _two_way: bool

    __slots__ = ("_label", "_open", "_two_way", "_unbounded", "_upstream")

    @classmethod
    def _node[U](
        cls,
        opener: Callable[[], Iterator[U]],
        label: str,
        upstream: tuple[StreamBase[Any], ...] = (),
        *,
        unbounded: bool = False,
        two_way: bool = False,
    ) -> Stream[U]:
        node = cls.__new__(cls)
        node._open = opener  # type: ignore[assignment]
        node._label = label
        node._upstream = upstream
        node._unbounded = unbounded
        node._two_way = two_way
        return node  # type: ignore[return-value]

    def _derive[U](
        self,
        label: str,
        opener: Callable[[], Iterator[U]],
        *,
        unbounded: bool | None = None,
    ) -> Stream[U]:
        return self._node(
            opener,
            f"{self._label}.{label}",
            (self,),
            unbounded=self._unbounded if unbounded is None else unbounded,
        )

    def _session(self) -> Iterator[T]:
        return self._open()

    def _warn_if_unbounded(self, operation: str) -> None:
        if self._unbounded and get_config().warn_unbounded:
            msg = (
                f"`{operation}()` on an unbounded stream never returns, "
                f"bound it with `take()` first: {self!r}"
            )
            warnings.warn(msg, UnboundedConsumptionWarning, stacklevel=3)

    def __iter__(self) -> Cursor[T]:
        return self.cursor()

    def __repr__(self) -> str:
        return get_config().stream_repr(self._label)

    def cursor(self) -> Cursor[T]:
        """Open a new consumption session.

        Restartable streams give independent cursors, each one starting from the first value.

        Returns:
            Cursor[T]: A fresh session over the stream.

        Example:
        ```python
        >>> import seqchain as sc
        >>> stream = sc.Stream.from_collection(["a", "b"])
        >>> first, second = stream.cursor(), stream.cursor()
        >>> first.pull(), first.pull(), second.pull()
        (Yielded('a'), Yielded('b'), Yielded('a'))

        ```
        """
        return Cursor(self._session(), two_way=self._two_way)

    def upstream(self) -> tuple[Stream[Any], ...]:
        """Return the nodes owned by this one.

        Sources own nothing, most combinators own one node, `chain` owns each of its inputs.

        Returns:
            tuple[Stream[Any], ...]: The upstream nodes, in input order.

        Example:
        ```python
        >>> import seqchain as sc
        >>> source = sc.Stream.from_range(0, 3)
        >>> source.map(str).upstream()[0] is source
        True
        >>> source.upstream()
        ()

        ```
        """
        return self._upstream  # type: ignore[return-value]

    def is_unbounded(self) -> bool:
        """Check whether the stream is known to be infinite.

        `False` means either finite or unknown, e.g. a `filter()` of a finite stream, or a `from_fn()` producer.

        Returns:
            bool: True if fully consuming the stream would never return.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.count().map(str).is_unbounded()
        True
        >>> sc.Stream.count().take(3).is_unbounded()
        False

        ```
        """
        return self._unbounded
