from __future__ import annotations

import itertools
import math
from collections.abc import Callable, Collection, Generator, Iterable, Iterator
from typing import Any, overload

import cytoolz as cz

from .._core import InvalidArgumentError, StreamConsumedError, call_repr
from .._results import Step
from ._eager import BaseEager
from ._filters import BaseFilter
from ._joins import BaseJoins, chain_sessions
from ._maps import BaseMap
from ._sources import producer_session, range_session, tree_session, unfold_session


class Stream[T](BaseFilter[T], BaseMap[T], BaseJoins[T], BaseEager[T]):
    """A lazy, composable sequence of values.

    A `Stream` is a description of a pipeline: a source adapter, followed by any number of combinators.

    Nothing is computed when it is built. Values are only produced when a consumer pulls them, through a `Cursor` (`Stream.cursor()`, `iter(stream)`) or a terminal method like `collect()`.

    Each consumption opens a new session. Streams built from collections, ranges, trees, `unfold()` or `from_generator()` are restartable: every session starts over from the first value.

    Streams built from `from_fn()` are one-shot, since the producer keeps its own state.

    Each combinator owns the stream it was called on, so pipelines form a tree of nodes.

    - To instantiate from an ordered collection, simply pass it to the standard constructor.
    - To instantiate from unpacked values, use the `from_` class method.

    Args:
        data (Collection[T]): A re-iterable collection of values.

    Raises:
        InvalidArgumentError: If **data** is a one-shot `Iterator`.
    """

    __slots__ = ()

    def __init__(self, data: Collection[T]) -> None:
        if isinstance(data, Iterator):
            msg = (
                f"{type(data).__name__} can only be iterated once, "
                "use `Stream.from_fn()` or `Stream.from_generator()` instead"
            )
            raise InvalidArgumentError(msg)

        def _collection() -> Iterator[T]:
            return iter(data)

        self._open = _collection
        self._label = call_repr("from_collection", data)
        self._upstream = ()
        self._unbounded = False
        self._two_way = False

    @staticmethod
    def from_collection[U](items: Collection[U]) -> Stream[U]:
        """Create a restartable `Stream` over an ordered collection.

        Each session yields every element once, in collection order.

        Args:
            items (Collection[U]): The collection to read from.

        Returns:
            Stream[U]: A stream of the collection's elements.

        Example:
        ```python
        >>> import seqchain as sc
        >>> stream = sc.Stream.from_collection([1, 2, 3])
        >>> stream.collect()
        (1, 2, 3)
        >>> stream.collect()
        (1, 2, 3)
        >>> sc.Stream.from_collection([]).collect()
        ()

        ```
        """
        return Stream(items)

    @overload
    @staticmethod
    def from_[U](data: Iterable[U]) -> Stream[U]: ...
    @overload
    @staticmethod
    def from_[U](data: U, *more_data: U) -> Stream[U]: ...
    @staticmethod
    def from_[U](data: Iterable[U] | U, *more_data: U) -> Stream[U]:
        """Create a `Stream` from any Iterable, or from unpacked values.

        The values are materialized into a `tuple` first, so the result is always restartable.

        Prefer `from_collection()` when you already hold a collection.

        Args:
            data (Iterable[U] | U): Iterable to read from, or a single value.
            *more_data (U): Additional values to include if **data** is not an Iterable.

        Returns:
            Stream[U]: A new Stream instance containing the provided data.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_(1, 2, 3).collect()
        (1, 2, 3)
        >>> sc.Stream.from_(x * 2 for x in range(3)).collect()
        (0, 2, 4)

        ```
        """
        if cz.itertoolz.isiterable(data):
            return Stream(tuple(data))  # type: ignore[arg-type]
        return Stream((data, *more_data))

    @staticmethod
    def from_range(start: float, end: float = math.inf, step: float = 1) -> Stream[Any]:
        """Create an arithmetic `Stream`.

        Yields `start, start + step, start + 2 * step, ...` while the value is lower than **end** (positive **step**), or greater than **end** (negative **step**).

        Each value is computed from its index, so floating steps do not accumulate rounding errors.

        **Warning** ⚠️
            With the default **end**, or any infinite **end** in the direction of **step**, this creates an infinite stream.
            Be sure to use `Stream.take()` to limit the number of values taken.

        Args:
            start (float): First value.
            end (float): Exclusive bound. Defaults to `math.inf`.
            step (float): Difference between consecutive values. Defaults to 1.

        Returns:
            Stream[Any]: A restartable stream of numbers.

        Raises:
            InvalidArgumentError: If **step** is zero.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.from_range(0, 10, 3).collect()
        (0, 3, 6, 9)
        >>> sc.Stream.from_range(3, 0, -1).collect()
        (3, 2, 1)
        >>> sc.Stream.from_range(0).take(5).collect()
        (0, 1, 2, 3, 4)

        ```
        """
        if step == 0:
            msg = "`from_range()` expects a non-zero step"
            raise InvalidArgumentError(msg)

        def _range() -> Iterator[Any]:
            return range_session(start, end, step)

        return Stream._node(
            _range,
            call_repr("from_range", start, end, step),
            unbounded=math.isinf(end) and (end > 0) == (step > 0),
        )

    @staticmethod
    def from_tree[N](root: N, children_of: Callable[[N], Iterable[N]]) -> Stream[N]:
        """Create a pre-order, depth-first traversal of a recursive structure.

        Yields the node, then the traversal of each of its children, in the order given by **children_of**.

        **children_of** is called once per visited node, when the traversal reaches it.

        The structure is assumed to be acyclic: a cycle makes the traversal infinite.

        Args:
            root (N): The node to start from.
            children_of (Callable[[N], Iterable[N]]): Function returning the ordered children of a node.

        Returns:
            Stream[N]: A stream of nodes.

        Example:
        ```python
        >>> import seqchain as sc
        >>> children = {1: [2, 3], 2: [4, 5]}
        >>> sc.Stream.from_tree(1, lambda n: children.get(n, [])).collect()
        (1, 2, 4, 5, 3)

        ```
        """

        def _tree() -> Iterator[N]:
            return tree_session(root, children_of)

        return Stream._node(_tree, call_repr("from_tree", root, children_of))

    @staticmethod
    def from_fn[U](producer: Callable[[], Step[U]]) -> Stream[U]:
        """Create a one-shot `Stream` driven by a producer function.

        **producer** takes no argument and returns `Yielded(value)` to emit a value, or `DONE` to stop.

        It is expected to close over its own mutable state, which is why the stream can only be consumed once.

        **Warning** ⚠️
            If **producer** never returns `DONE`, it creates an infinite stream.
            Be sure to use `Stream.take()` to limit the number of values taken.

        Args:
            producer (Callable[[], Step[U]]): Function returning the next `Step`.

        Returns:
            Stream[U]: A one-shot stream.

        Raises:
            StreamConsumedError: When a second session is opened, directly or through a combinator.

        Example:
        ```python
        >>> import seqchain as sc
        >>> def fibonacci():
        ...     a, b = 0, 1
        ...     def _next():
        ...         nonlocal a, b
        ...         value, a, b = a, b, a + b
        ...         return sc.Yielded(value)
        ...     return _next
        >>> stream = sc.Stream.from_fn(fibonacci()).take(8)
        >>> stream.collect()
        (0, 1, 1, 2, 3, 5, 8, 13)
        >>> stream.collect()
        Traceback (most recent call last):
            ...
        seqchain._core._errors.StreamConsumedError: from_fn(_next) can only be consumed once

        ```
        """
        consumed = False
        label = call_repr("from_fn", producer)

        def _producer() -> Iterator[U]:
            nonlocal consumed
            if consumed:
                msg = f"{label} can only be consumed once"
                raise StreamConsumedError(msg)
            consumed = True
            return producer_session(producer)

        return Stream._node(_producer, label)

    @staticmethod
    def from_generator[U](
        func: Callable[..., Generator[U, Any, Any]], *args: Any, **kwargs: Any
    ) -> Stream[U]:
        """Create a restartable `Stream` from a generator function.

        Every session calls `func(*args, **kwargs)` again, so sessions never share state.

        Cursors opened on this stream are two-way: see `Cursor.pull()`.

        Args:
            func (Callable[..., Generator[U, Any, Any]]): The generator function.
            *args (Any): Positional arguments for **func**.
            **kwargs (Any): Keyword arguments for **func**.

        Returns:
            Stream[U]: A stream of the generated values.

        Example:
        ```python
        >>> import seqchain as sc
        >>> def countdown(n: int):
        ...     while n > 0:
        ...         yield n
        ...         n -= 1
        >>> stream = sc.Stream.from_generator(countdown, 3)
        >>> stream.collect(), stream.collect()
        ((3, 2, 1), (3, 2, 1))

        ```
        """

        def _generator() -> Iterator[U]:
            return func(*args, **kwargs)

        return Stream._node(
            _generator, call_repr("from_generator", func, *args), two_way=True
        )

    @staticmethod
    def unfold[S, V](state: S, step: Callable[[S], Step[tuple[V, S]]]) -> Stream[V]:
        """Create a `Stream` by repeatedly applying **step** to an initial **state**.

        **step** takes the current state and must return:

        - `Yielded((value, new_state))` to emit **value** and continue with **new_state**.
        - `DONE` to stop.

        Each session starts over from the initial **state**, so the stream is restartable as long as **step** is pure.

        Args:
            state (S): Initial state.
            step (Callable[[S], Step[tuple[V, S]]]): Function computing the next value and state.

        Returns:
            Stream[V]: A stream of the emitted values.

        Example:
        ```python
        >>> import seqchain as sc
        >>> def fib(state: tuple[int, int]):
        ...     a, b = state
        ...     if a > 20:
        ...         return sc.DONE
        ...     return sc.Yielded((a, (b, a + b)))
        >>> sc.Stream.unfold((0, 1), fib).collect()
        (0, 1, 1, 2, 3, 5, 8, 13)

        ```
        """

        def _unfold() -> Iterator[V]:
            return unfold_session(state, step)

        return Stream._node(_unfold, call_repr("unfold", state, step))

    @staticmethod
    def count(start: int = 0, step: int = 1) -> Stream[int]:
        """Create an infinite `Stream` of evenly spaced values.

        **Warning** ⚠️
            This creates an infinite stream.
            Be sure to use `Stream.take()` to limit the number of values taken.

        Args:
            start (int): Starting value. Defaults to 0.
            step (int): Difference between consecutive values. Defaults to 1.

        Returns:
            Stream[int]: An unbounded stream.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.count(10, 2).take(3).collect()
        (10, 12, 14)

        ```
        """

        def _count() -> Iterator[int]:
            return itertools.count(start, step)

        return Stream._node(_count, call_repr("count", start, step), unbounded=True)

    @staticmethod
    def repeat[U](value: U, times: int | None = None) -> Stream[U]:
        """Create a `Stream` repeating **value**.

        Args:
            value (U): The value to repeat.
            times (int | None): Number of repetitions. Defaults to None, repeating forever.

        Returns:
            Stream[U]: A stream of the same value.

        Raises:
            InvalidArgumentError: If **times** is negative.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.repeat("x", 3).collect()
        ('x', 'x', 'x')
        >>> sc.Stream.repeat(0).is_unbounded()
        True

        ```
        """
        if times is None:

            def _forever() -> Iterator[U]:
                return itertools.repeat(value)

            return Stream._node(_forever, call_repr("repeat", value), unbounded=True)
        if times < 0:
            msg = f"`repeat()` expects a non-negative count, got {times!r}"
            raise InvalidArgumentError(msg)

        def _repeat() -> Iterator[U]:
            return itertools.repeat(value, times)

        return Stream._node(_repeat, call_repr("repeat", value, times))

    @staticmethod
    def once[U](value: U) -> Stream[U]:
        """Create a `Stream` yielding a single value.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.once(42).collect()
        (42,)

        ```
        """
        return Stream((value,))

    @staticmethod
    def empty() -> Stream[Any]:
        """Create a `Stream` yielding nothing.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Stream.empty().collect()
        ()

        ```
        """
        return Stream(())


def chain[T](*streams: Stream[T]) -> Stream[T]:
    """Concatenate **streams** end to end.

    Each stream is fully exhausted before the next one is opened, and element order is preserved across boundaries.

    Args:
        *streams (Stream[T]): Streams to concatenate, in order.

    Returns:
        Stream[T]: A stream of all the values. Exhausted immediately if no stream is given.

    Example:
    ```python
    >>> import seqchain as sc
    >>> sc.chain(sc.Stream.from_collection([1, 2]), sc.Stream.from_collection([3, 4])).collect()
    (1, 2, 3, 4)
    >>> sc.chain().collect()
    ()

    ```
    """

    def _chain() -> Iterator[T]:
        return chain_sessions(streams)

    return Stream._node(
        _chain,
        f"chain({', '.join(s._label for s in streams)})",
        streams,
        unbounded=any(s._unbounded for s in streams),
    )
