from ._config import Config, config_context, get_config
from ._errors import (
    InvalidArgumentError,
    SeqchainError,
    StreamConsumedError,
    UnboundedConsumptionWarning,
)
from ._format import call_repr
from ._main import Pipeable

__all__ = [
    "Config",
    "InvalidArgumentError",
    "Pipeable",
    "SeqchainError",
    "StreamConsumedError",
    "UnboundedConsumptionWarning",
    "call_repr",
    "config_context",
    "get_config",
]
