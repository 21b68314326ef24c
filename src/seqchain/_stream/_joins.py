from __future__ import annotations

import itertools
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING

from .._core import call_repr
from ._common import StreamBase

if TYPE_CHECKING:
    from ._main import Stream


def open_nested[U](nested: Iterable[U]) -> Iterator[U]:
    match nested:
        case StreamBase():
            return nested._session()
        case _:
            return iter(nested)


def chain_sessions[U](streams: Iterable[StreamBase[U]]) -> Iterator[U]:
    return itertools.chain.from_iterable(map(open_nested, streams))


class BaseJoins[T](StreamBase[T]):
    __slots__ = ()

    def chain(self, *others: Stream[T]) -> Stream[T]:
        """Concatenate **others** after this stream.

        Each stream is fully exhausted before the next one is opened.

        Args:
            *others (Stream[T]): Streams to append, in order.

        Returns:
            Stream[T]: A stream of all the values, in input order.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_collection([1, 2]).chain(sc.Stream.from_collection([3, 4])).collect()
        (1, 2, 3, 4)

        ```
        """
        streams = (self, *others)

        def _chain() -> Iterator[T]:
            return chain_sessions(streams)

        return self._node(
            _chain,
            f"{self._label}.chain({', '.join(s._label for s in others)})",
            streams,
            unbounded=any(s._unbounded for s in streams),
        )

    def flatten[U](self: BaseJoins[Iterable[U]]) -> Stream[U]:
        """Flatten one level of nesting.

        Upstream values may be `Stream` instances or any `Iterable`, each one being chained in the order it is produced.

        Returns:
            Stream[U]: A stream of the nested values.

        Example:
        ```python
        >>> import seqchain as sc
        >>> nested = sc.Stream.from_collection([sc.Stream.from_range(0, 2), [7], ()])
        >>> nested.flatten().collect()
        (0, 1, 7)

        ```
        """

        def _flatten() -> Iterator[U]:
            return chain_sessions(self._session())  # type: ignore[arg-type]

        return self._derive("flatten()", _flatten)

    def flat_map[R](self, func: Callable[[T], Iterable[R]]) -> Stream[R]:
        """Map each value to a stream or iterable, then flatten the result by one level.

        **func** may return streams that are themselves built with `flat_map()`, which allows to walk arbitrarily deep structures.

        Args:
            func (Callable[[T], Iterable[R]]): Function returning the values to emit for each upstream value.

        Returns:
            Stream[R]: A stream of the emitted values.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_collection([1, 2, 3]).flat_map(lambda x: sc.Stream.repeat(x, x)).collect()
        (1, 2, 2, 3, 3, 3)
        >>> tree = {"value": 1, "children": [{"value": 2, "children": []}]}
        >>> def walk(node):
        ...     children = sc.Stream.from_collection(node["children"])
        ...     return sc.Stream.once(node["value"]).chain(children.flat_map(walk))
        >>> walk(tree).collect()
        (1, 2)

        ```
        """

        def _flat_map() -> Iterator[R]:
            return chain_sessions(map(func, self._session()))  # type: ignore[arg-type]

        return self._derive(call_repr("flat_map", func), _flat_map)

