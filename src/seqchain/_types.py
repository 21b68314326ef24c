from __future__ import annotations

from typing import NamedTuple


class Enumerated[T](NamedTuple):
    """Represents a value with its associated index in an enumeration.

    See `Stream.enumerate()` for details.
    """

    idx: int
    """The index of the value in the enumeration."""
    value: T
    """The value itself."""

    def __repr__(self) -> str:
        return f"({self.idx}, {self.value.__repr__()})"


class Partial[T](NamedTuple):
    """Represents the outcome of a collection interrupted by a failing callback.

    See `Stream.try_collect()` for details.
    """

    values: tuple[T, ...]
    """The values accumulated before the failure, in yield order."""
    error: Exception
    """The exception raised by the callback."""
