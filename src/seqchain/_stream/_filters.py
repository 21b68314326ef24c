from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

import cytoolz as cz

from .._core import InvalidArgumentError, call_repr
from ._common import StreamBase

if TYPE_CHECKING:
    from ._main import Stream


def _check_count(name: str, n: int) -> None:
    if n < 0:
        msg = f"`{name}()` expects a non-negative count, got {n!r}"
        raise InvalidArgumentError(msg)


class BaseFilter[T](StreamBase[T]):
    __slots__ = ()

    def filter(self, predicate: Callable[[T], bool]) -> Stream[T]:
        """Keep the values for which **predicate** returns True.

        A single pull may consume the whole upstream if no value matches.

        Args:
            predicate (Callable[[T], bool]): Function to evaluate each value.

        Returns:
            Stream[T]: A stream of the matching values, in upstream order.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_collection([1, 2, 3, 4, 5, 6]).filter(lambda x: x % 2 == 0).collect()
        (2, 4, 6)

        ```
        """

        def _filter() -> Iterator[T]:
            return filter(predicate, self._session())

        return self._derive(call_repr("filter", predicate), _filter)

    def take(self, n: int) -> Stream[T]:
        """Yield at most **n** values.

        Once **n** values have been yielded, the stream is exhausted without pulling upstream again.

        `take(0)` never opens the upstream session at all.

        This is the way to bound an infinite stream before consuming it.

        Args:
            n (int): Maximum number of values to yield.

        Returns:
            Stream[T]: A bounded stream.

        Raises:
            InvalidArgumentError: If **n** is negative.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.count().take(5).collect()
        (0, 1, 2, 3, 4)
        >>> sc.Stream.from_collection([1, 2]).take(10).collect()
        (1, 2)

        ```
        """
        _check_count("take", n)

        def _take() -> Iterator[T]:
            if n == 0:
                return iter(())
            return cz.itertoolz.take(n, self._session())

        return self._derive(call_repr("take", n), _take, unbounded=False)

    def skip(self, n: int) -> Stream[T]:
        """Drop the first **n** values.

        Args:
            n (int): Number of values to drop.

        Returns:
            Stream[T]: A stream of the remaining values.

        Raises:
            InvalidArgumentError: If **n** is negative.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_range(0, 6).skip(4).collect()
        (4, 5)

        ```
        """
        _check_count("skip", n)

        def _skip() -> Iterator[T]:
            return cz.itertoolz.drop(n, self._session())

        return self._derive(call_repr("skip", n), _skip)

    def take_while(self, predicate: Callable[[T], bool]) -> Stream[T]:
        """Yield values while **predicate** holds, then stop.

        The first failing value is pulled from upstream and discarded.

        Args:
            predicate (Callable[[T], bool]): Function to evaluate each value.

        Returns:
            Stream[T]: A stream of the leading matching values.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.count(1).take_while(lambda x: x * x < 30).collect()
        (1, 2, 3, 4, 5)

        ```
        """

        def _take_while() -> Iterator[T]:
            return itertools.takewhile(predicate, self._session())

        return self._derive(
            call_repr("take_while", predicate), _take_while, unbounded=False
        )

    def skip_while(self, predicate: Callable[[T], bool]) -> Stream[T]:
        """Drop values while **predicate** holds, then yield everything else.

        Args:
            predicate (Callable[[T], bool]): Function to evaluate each value.

        Returns:
            Stream[T]: A stream starting at the first failing value.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_collection([1, 3, 4, 5, 2]).skip_while(lambda x: x % 2 == 1).collect()
        (4, 5, 2)

        ```
        """

        def _skip_while() -> Iterator[T]:
            return itertools.dropwhile(predicate, self._session())

        return self._derive(call_repr("skip_while", predicate), _skip_while)
