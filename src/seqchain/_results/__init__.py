from ._result import Err, Ok, Result, ResultUnwrapError
from ._step import DONE, Done, Step, StepUnwrapError, Yielded

__all__ = [
    "DONE",
    "Done",
    "Err",
    "Ok",
    "Result",
    "ResultUnwrapError",
    "Step",
    "StepUnwrapError",
    "Yielded",
]
