"""Shared fixtures for seqchain tests."""

import itertools
from collections.abc import Iterable

import pytest

import seqchain as sc

collect_ignore = ["main.py", "_performance.py"]


class PullCounter:
    """Producer for `Stream.from_fn` that records how many times it was pulled."""

    def __init__(self, values: Iterable[int]) -> None:
        self._values = iter(values)
        self.pulls = 0

    def __call__(self) -> sc.Step[int]:
        self.pulls += 1
        for value in self._values:
            return sc.Yielded(value)
        return sc.DONE


@pytest.fixture
def counter() -> PullCounter:
    """A producer over 0..9."""
    return PullCounter(range(10))


@pytest.fixture
def endless_counter() -> PullCounter:
    """A producer that never returns `DONE`."""
    return PullCounter(itertools.count())
