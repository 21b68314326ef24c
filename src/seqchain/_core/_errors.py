class SeqchainError(Exception):
    """Base class of every exception raised by seqchain."""


class InvalidArgumentError(SeqchainError, ValueError):
    """A constructor or combinator received a malformed parameter.

    Raised synchronously, before any value is pulled.
    """


class StreamConsumedError(SeqchainError, RuntimeError):
    """A second session was opened on a one-shot `Stream`."""


class UnboundedConsumptionWarning(RuntimeWarning):
    """A `Stream` known to be infinite is being fully consumed."""
