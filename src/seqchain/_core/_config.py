from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, fields
from typing import Any

from ._errors import InvalidArgumentError
from ._format import shorten


@dataclass(slots=True)
class Config:
    """Process-wide settings of seqchain.

    Attributes:
        warn_unbounded (bool): Emit `UnboundedConsumptionWarning` before fully consuming a `Stream` known to be infinite.
        repr_width (int): Maximum width of the pipeline shown by `repr(Stream)`.
    """

    warn_unbounded: bool = True
    repr_width: int = 80

    def stream_repr(self, pipeline: str) -> str:
        return f"Stream({shorten(pipeline, self.repr_width)})"


_CONFIG = Config()


def get_config() -> Config:
    """Return the active `Config` instance.

    Returns:
        Config: The shared configuration.

    Example:
    ```python
    >>> import seqchain as sc
    >>> sc.get_config().repr_width
    80

    ```
    """
    return _CONFIG


@contextmanager
def config_context(**overrides: Any) -> Iterator[Config]:
    """Temporarily override fields of the active `Config`.

    Previous values are restored on exit, even if the block raises.

    Args:
        **overrides (Any): Field names and their temporary values.

    Returns:
        Iterator[Config]: A context manager yielding the active configuration.

    Raises:
        InvalidArgumentError: If a name is not a field of `Config`.

    Example:
    ```python
    >>> import seqchain as sc
    >>> stream = sc.Stream.from_range(0, 100).map(str)
    >>> with sc.config_context(repr_width=20):
    ...     stream
    Stream(from_range(0, 100...)
    >>> stream
    Stream(from_range(0, 100, 1).map(str))

    ```
    """
    cfg = get_config()
    known = {field.name for field in fields(cfg)}
    unknown = sorted(overrides.keys() - known)
    if unknown:
        msg = f"Unknown config field(s): {', '.join(unknown)}"
        raise InvalidArgumentError(msg)
    previous = {name: getattr(cfg, name) for name in overrides}
    for name, value in overrides.items():
        setattr(cfg, name, value)
    try:
        yield cfg
    finally:
        for name, value in previous.items():
            setattr(cfg, name, value)
