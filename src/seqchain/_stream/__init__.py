from ._cursor import Cursor, CursorState
from ._main import Stream, chain

__all__ = ["Cursor", "CursorState", "Stream", "chain"]
