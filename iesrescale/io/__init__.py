"""
Byte-level collaborators: an in-memory line cursor and file-backed read/write.
"""

from iesrescale.io.cursor import ByteCursor
from iesrescale.io.files import acquire, persist, read_cursor

__all__ = ["ByteCursor", "acquire", "persist", "read_cursor"]
