from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

import cytoolz as cz
import more_itertools as mit

from .._core import InvalidArgumentError, call_repr
from .._types import Enumerated
from ._common import StreamBase

if TYPE_CHECKING:
    from ._main import Stream


def _check_size(name: str, size: int) -> None:
    if size < 1:
        msg = f"`{name}()` expects a size of at least 1, got {size!r}"
        raise InvalidArgumentError(msg)


class BaseMap[T](StreamBase[T]):
    __slots__ = ()

    def map[R](self, func: Callable[[T], R]) -> Stream[R]:
        """Apply a function to each value.

        Each pull on the result pulls exactly one value upstream.

        Exceptions raised by **func** propagate to the caller of the pull.

        Args:
            func (Callable[[T], R]): Function to apply to each value.

        Returns:
            Stream[R]: A stream of transformed values, in upstream order.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_collection([1, 2, 3]).map(lambda x: x * 2).collect()
        (2, 4, 6)

        ```
        """

        def _map() -> Iterator[R]:
            return map(func, self._session())

        return self._derive(call_repr("map", func), _map)

    def inspect_each(self, func: Callable[[T], Any]) -> Stream[T]:
        """Call **func** on each value as it is pulled, and yield the value unchanged.

        Useful to observe a pipeline without altering it.

        See Also:
            `Pipeable.inspect()`, which receives the whole `Stream` instead.

        Args:
            func (Callable[[T], Any]): Function called for its side effects.

        Returns:
            Stream[T]: The same values as upstream.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_range(0, 10).inspect_each(print).take(2).collect()
        0
        1
        (0, 1)

        ```
        """

        def _inspect_each() -> Iterator[T]:
            return mit.side_effect(func, self._session())

        return self._derive(call_repr("inspect_each", func), _inspect_each)

    def enumerate(self, start: int = 0) -> Stream[Enumerated[T]]:
        """Pair each value with its index.

        Args:
            start (int): Index of the first value. Defaults to 0.

        Returns:
            Stream[Enumerated[T]]: A stream of `(idx, value)` named tuples.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_collection(["a", "b"]).enumerate(1).collect()
        ((1, 'a'), (2, 'b'))

        ```
        """

        def _enumerate() -> Iterator[Enumerated[T]]:
            return itertools.starmap(Enumerated, enumerate(self._session(), start))

        return self._derive(call_repr("enumerate", start), _enumerate)

    def chunks(self, size: int) -> Stream[tuple[T, ...]]:
        """Group consecutive values into tuples of **size** values.

        The last chunk is shorter if there are not enough values left.

        Args:
            size (int): Number of values in each chunk.

        Returns:
            Stream[tuple[T, ...]]: A stream of chunks.

        Raises:
            InvalidArgumentError: If **size** is lower than 1.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_range(0, 7).chunks(3).collect()
        ((0, 1, 2), (3, 4, 5), (6,))

        ```
        """
        _check_size("chunks", size)

        def _chunks() -> Iterator[tuple[T, ...]]:
            return cz.itertoolz.partition_all(size, self._session())

        return self._derive(call_repr("chunks", size), _chunks)

    def windows(self, size: int) -> Stream[tuple[T, ...]]:
        """Yield overlapping tuples of **size** consecutive values.

        Nothing is yielded if upstream has fewer than **size** values.

        Args:
            size (int): Number of values in each window.

        Returns:
            Stream[tuple[T, ...]]: A stream of windows.

        Raises:
            InvalidArgumentError: If **size** is lower than 1.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_range(0, 4).windows(2).collect()
        ((0, 1), (1, 2), (2, 3))

        ```
        """
        _check_size("windows", size)

        def _windows() -> Iterator[tuple[T, ...]]:
            return cz.itertoolz.sliding_window(size, self._session())

        return self._derive(call_repr("windows", size), _windows)
