from __future__ import annotations

import re
from enum import Enum
from typing import Iterable, List, Sequence, Tuple, Union

from iesrescale.io.cursor import ByteCursor
from iesrescale.parser.errors import ParseError

Number = Union[int, float]


class TokenKind(Enum):
    INT = "int"
    FLOAT = "float"


INT = TokenKind.INT
FLOAT = TokenKind.FLOAT

_TOKEN_RE = {
    TokenKind.INT: re.compile(r"-?\d+"),
    TokenKind.FLOAT: re.compile(r"-?(?:\d+\.?\d*|\.\d+)"),
}
_DELIMITERS = frozenset(" \t\r\f\v,")


def skip_delimiters(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _DELIMITERS:
        pos += 1
    return pos


def scan_token(text: str, pos: int, kind: TokenKind) -> Tuple[Number, int]:
    """
    Parse the longest numeric prefix of `kind` at text[pos:].
    Returns (value, next_pos). Raises ValueError when no such prefix exists.
    """
    m = _TOKEN_RE[kind].match(text, pos)
    if m is None:
        raise ValueError(f"expected {kind.value} at column {pos + 1}, got '{text[pos:pos + 12]}'")
    tok = m.group(0)
    value: Number = int(tok) if kind is TokenKind.INT else float(tok)
    return value, m.end()


def _read_tokens(cursor: ByteCursor, kinds: Iterable[TokenKind], total: int, what: str) -> List[Number]:
    # Every read starts on a fresh line; leftovers of the previous line are never reused.
    text = cursor.next_line()
    if text is None:
        raise ParseError(f"Unexpected end of input while reading {what}", line_no=cursor.line_no)
    pos = skip_delimiters(text, 0)
    if pos >= len(text):
        raise ParseError(f"Expected {what}, got a blank line", line_no=cursor.line_no, snippet=text)

    values: List[Number] = []
    for kind in kinds:
        while pos >= len(text):
            text = cursor.next_line()
            if text is None:
                raise ParseError(
                    f"Unexpected end of input after {len(values)} of {total} values of {what}",
                    line_no=cursor.line_no,
                )
            if not text:
                raise ParseError(
                    f"Unexpected empty line after {len(values)} of {total} values of {what}",
                    line_no=cursor.line_no,
                )
            pos = skip_delimiters(text, 0)
        try:
            value, pos = scan_token(text, pos, kind)
        except ValueError as e:
            raise ParseError(
                f"Invalid value #{len(values) + 1} of {total} in {what}: {e}",
                line_no=cursor.line_no,
                snippet=text,
            ) from e
        values.append(value)
        pos = skip_delimiters(text, pos)
    return values


def read_fields(cursor: ByteCursor, kinds: Sequence[TokenKind], what: str = "fields") -> List[Number]:
    """Read one value per entry of `kinds`, in order, continuing across lines as needed."""
    if not kinds:
        return []
    return _read_tokens(cursor, kinds, len(kinds), what)


def read_array(cursor: ByteCursor, count: int, what: str = "array") -> List[float]:
    if count <= 0:
        raise ParseError(f"Cannot read {what}: count must be > 0, got {count}", line_no=cursor.line_no)
    # Generated lazily: an oversized declared count fails at end of input.
    kinds = (TokenKind.FLOAT for _ in range(count))
    return [float(x) for x in _read_tokens(cursor, kinds, count, what)]
