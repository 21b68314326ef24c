from ._core import (
    Config,
    InvalidArgumentError,
    SeqchainError,
    StreamConsumedError,
    UnboundedConsumptionWarning,
    config_context,
    get_config,
)
from ._results import (
    DONE,
    Done,
    Err,
    Ok,
    Result,
    ResultUnwrapError,
    Step,
    StepUnwrapError,
    Yielded,
)
from ._stream import Cursor, CursorState, Stream, chain
from ._types import Enumerated, Partial

__all__ = [
    "DONE",
    "Config",
    "Cursor",
    "CursorState",
    "Done",
    "Enumerated",
    "Err",
    "InvalidArgumentError",
    "Ok",
    "Partial",
    "Result",
    "ResultUnwrapError",
    "SeqchainError",
    "Step",
    "StepUnwrapError",
    "Stream",
    "StreamConsumedError",
    "UnboundedConsumptionWarning",
    "Yielded",
    "chain",
    "config_context",
    "get_config",
]
