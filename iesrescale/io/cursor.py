from __future__ import annotations

from typing import Optional


class ByteCursor:
    """
    Sequential line reader over an immutable byte buffer.

    Lines are LF-terminated; a trailing CR is stripped. Bytes that are not valid
    UTF-8 survive as surrogate escapes so labels can be written back unchanged.
    ``next_line`` returns None once the buffer is exhausted, and ``rewind``
    restarts from the first byte (needed once, when the first line turns out
    not to be a dialect tag).
    """

    def __init__(self, data: bytes, name: str = "") -> None:
        self._data = bytes(data)
        self._pos = 0
        self.name = name
        self.line_no = 0  # 1-indexed number of the last line returned

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def next_line(self) -> Optional[str]:
        if self.at_end:
            return None
        end = self._data.find(b"\n", self._pos)
        if end < 0:
            raw = self._data[self._pos :]
            self._pos = len(self._data)
        else:
            raw = self._data[self._pos : end]
            self._pos = end + 1
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        self.line_no += 1
        return raw.decode("utf-8", errors="surrogateescape")

    def rewind(self) -> None:
        self._pos = 0
        self.line_no = 0
