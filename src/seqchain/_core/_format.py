import reprlib
from collections.abc import Callable

_ARG_REPR = reprlib.Repr(maxlevel=2, maxlist=6, maxtuple=6, maxset=6, maxstring=24)


def arg_repr(arg: object) -> str:
    match arg:
        case Callable() if hasattr(arg, "__name__"):
            return arg.__name__
        case _:
            return _ARG_REPR.repr(arg)


def call_repr(name: str, *args: object) -> str:
    return f"{name}({', '.join(map(arg_repr, args))})"


def shorten(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: max(width - 3, 0)] + "..."
