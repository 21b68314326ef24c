from __future__ import annotations

import functools
from collections.abc import Callable, Iterable
from typing import Any, Final, overload

import more_itertools as mit

from .._core import InvalidArgumentError
from .._results import DONE, Err, Ok, Result, Step, Yielded
from .._types import Partial
from ._common import StreamBase

type Collector[T] = (
    Callable[[Iterable[T]], tuple[T, ...]]
    | Callable[[Iterable[T]], list[T]]
    | Callable[[Iterable[T]], Any]
)
"""Represent a function that collects an Iterable into a collection."""

_MISSING: Final = object()


def _to_step[T](value: T | object) -> Step[T]:
    if value is _MISSING:
        return DONE
    return Yielded(value)  # type: ignore[arg-type]


class BaseEager[T](StreamBase[T]):
    __slots__ = ()

    @overload
    def collect(self) -> tuple[T, ...]: ...
    @overload
    def collect(self, collector: Callable[[Iterable[T]], list[T]]) -> list[T]: ...
    @overload
    def collect[C](self, collector: Callable[[Iterable[T]], C]) -> C: ...
    def collect(self, collector: Collector[T] = tuple) -> Any:
        """Pull every value of a new session into a collection.

        Values are collected in yield order. By default, into a `tuple`.

        **Warning** ⚠️
            An infinite stream never finishes collecting.
            Bound it with `take()` first. Streams known to be infinite emit an `UnboundedConsumptionWarning`.

        If a callback fails midway, its exception propagates and the values pulled so far are lost.

        Use `try_collect()` to keep them.

        Args:
            collector (Collector[T]): Function|type building the collection. Defaults to `tuple`.

        Returns:
            Any: The collection built by **collector**.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_range(0, 5).collect()
        (0, 1, 2, 3, 4)
        >>> sc.Stream.from_range(0, 5).collect(list)
        [0, 1, 2, 3, 4]
        >>> sc.Stream.from_collection("abc").collect("-".join)
        'a-b-c'

        ```
        """
        self._warn_if_unbounded("collect")
        return collector(self._session())

    def try_collect(self) -> Result[tuple[T, ...], Partial[T]]:
        """Pull every value of a new session into a tuple, keeping partial results on failure.

        If a callback of the pipeline raises an `Exception`, collection stops and the values yielded so far are returned alongside the exception.

        Returns:
            Result[tuple[T, ...], Partial[T]]: `Ok(values)`, or `Err(Partial(values, error))`.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_collection([4, 2, 1]).map(lambda x: 8 // x).try_collect()
        Ok((2, 4, 8))
        >>> res = sc.Stream.from_collection([4, 2, 0, 1]).map(lambda x: 8 // x).try_collect()
        >>> res.unwrap_err().values
        (2, 4)
        >>> type(res.unwrap_err().error).__name__
        'ZeroDivisionError'

        ```
        """
        self._warn_if_unbounded("try_collect")
        session = self._session()
        values: list[T] = []
        try:
            for value in session:
                values.append(value)
        except Exception as error:  # noqa: BLE001
            return Err(Partial(tuple(values), error))
        return Ok(tuple(values))

    def first(self) -> Step[T]:
        """Return the first value of a new session.

        Only one value is pulled.

        Returns:
            Step[T]: `Yielded(value)`, or `DONE` if the stream is empty.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.count(10).first()
        Yielded(10)
        >>> sc.Stream.empty().first()
        DONE

        ```
        """
        return self.cursor().pull()

    def last(self) -> Step[T]:
        """Return the last value of a new session.

        Returns:
            Step[T]: `Yielded(value)`, or `DONE` if the stream is empty.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_range(0, 10, 3).last()
        Yielded(9)

        ```
        """
        self._warn_if_unbounded("last")
        return _to_step(mit.last(self._session(), _MISSING))

    def nth(self, n: int) -> Step[T]:
        """Return the value at index **n** of a new session.

        Args:
            n (int): Zero-based index of the value.

        Returns:
            Step[T]: `Yielded(value)`, or `DONE` if the stream is shorter.

        Raises:
            InvalidArgumentError: If **n** is negative.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.count().map(lambda x: x * x).nth(4)
        Yielded(16)
        >>> sc.Stream.from_collection([1]).nth(3)
        DONE

        ```
        """
        if n < 0:
            msg = f"`nth()` expects a non-negative index, got {n!r}"
            raise InvalidArgumentError(msg)
        return _to_step(mit.nth(self._session(), n, _MISSING))

    def fold[U](self, init: U, func: Callable[[U, T], U]) -> U:
        """Reduce the stream to a single value, from left to right.

        Args:
            init (U): Initial accumulator.
            func (Callable[[U, T], U]): Function combining the accumulator with each value.

        Returns:
            U: The final accumulator.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_range(1, 5).fold(1, lambda acc, x: acc * x)
        24

        ```
        """
        self._warn_if_unbounded("fold")
        return functools.reduce(func, self._session(), init)

    def length(self) -> int:
        """Count the values of a new session.

        Returns:
            int: Number of values yielded.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_range(0, 10).filter(lambda x: x % 3 == 0).length()
        4

        ```
        """
        self._warn_if_unbounded("length")
        return mit.ilen(self._session())

    def for_each(self, func: Callable[[T], Any]) -> None:
        """Consume a new session by applying **func** to each value.

        Args:
            func (Callable[[T], Any]): Function called for its side effects.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_collection([1, 2]).for_each(print)
        1
        2

        ```
        """
        self._warn_if_unbounded("for_each")
        for value in self._session():
            func(value)
