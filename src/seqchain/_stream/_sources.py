"""Session factories of the source adapters.

Each function opens one consumption session and returns a plain iterator.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterable, Iterator

from .._results import Step, Yielded


def range_session(start: float, end: float, step: float) -> Iterator[float]:
    values = (start + idx * step for idx in itertools.count())
    if step > 0:
        return itertools.takewhile(lambda v: v < end, values)
    return itertools.takewhile(lambda v: v > end, values)


def tree_session[N](root: N, children_of: Callable[[N], Iterable[N]]) -> Iterator[N]:
    yield root
    stack = [iter(children_of(root))]
    while stack:
        for child in stack[-1]:
            yield child
            stack.append(iter(children_of(child)))
            break
        else:
            stack.pop()


def producer_session[T](producer: Callable[[], Step[T]]) -> Iterator[T]:
    while True:
        match producer():
            case Yielded(value):
                yield value
            case _:
                return


def unfold_session[S, V](
    state: S, step: Callable[[S], Step[tuple[V, S]]]
) -> Iterator[V]:
    current = state
    while True:
        match step(current):
            case Yielded((value, current)):
                yield value
            case _:
                return
