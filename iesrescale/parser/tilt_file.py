from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from iesrescale.core.config import TILT_INCLUDE, TILT_NONE
from iesrescale.io.cursor import ByteCursor
from iesrescale.io.files import acquire
from iesrescale.models.tilt import Orientation, TiltData
from iesrescale.parser.errors import ParseError
from iesrescale.parser.tokenizer import INT, read_array, read_fields

logger = logging.getLogger(__name__)

ByteSource = Callable[[str], Optional[bytes]]


class TiltFileError(ParseError):
    pass


def read_tilt(cursor: ByteCursor) -> TiltData:
    """
    Read a TILT block: orientation line, pair count line and, for a positive
    count, the angle array followed by the multiplying factor array.

    Works on the main document (TILT=INCLUDE) and on a standalone tilt file alike.
    """
    (code,) = read_fields(cursor, [INT], what="tilt lamp-to-luminaire geometry")
    try:
        orientation = Orientation(int(code))
    except ValueError as e:
        raise ParseError(
            f"Unsupported lamp-to-luminaire geometry {code} (expected 1, 2 or 3)",
            line_no=cursor.line_no,
        ) from e

    (num_pairs,) = read_fields(cursor, [INT], what="tilt pair count")
    num_pairs = int(num_pairs)
    if num_pairs <= 0:
        return TiltData(orientation=orientation, num_pairs=num_pairs)

    angles = read_array(cursor, num_pairs, what="tilt angles")
    factors = read_array(cursor, num_pairs, what="tilt multiplying factors")
    return TiltData(
        orientation=orientation,
        num_pairs=num_pairs,
        angles=tuple(angles),
        mult_factors=tuple(factors),
    )


def _candidate_paths(tilt_ref: str, base_dir: Optional[Path]) -> list[str]:
    if base_dir is None or Path(tilt_ref).is_absolute():
        return [tilt_ref]
    return [str(base_dir / tilt_ref), tilt_ref]


def resolve_tilt(
    tilt_ref: str,
    cursor: ByteCursor,
    source: ByteSource = acquire,
    base_dir: Optional[Path] = None,
) -> Optional[TiltData]:
    """
    Interpret the value of the TILT= line.

    NONE yields no tilt data, INCLUDE reads the block from `cursor` right after
    the TILT line, and any other value names an external tilt resource fetched
    through `source` (tried next to the main document first when `base_dir` is known).
    """
    if tilt_ref == TILT_NONE:
        return None
    if tilt_ref == TILT_INCLUDE:
        logger.debug("Reading included tilt data at line %d", cursor.line_no + 1)
        return read_tilt(cursor)

    for candidate in _candidate_paths(tilt_ref, base_dir):
        data = source(candidate)
        if data is None:
            continue
        logger.debug("Reading tilt data from %s", candidate)
        tilt_cursor = ByteCursor(data, name=candidate)
        try:
            return read_tilt(tilt_cursor)
        except ParseError as e:
            raise TiltFileError(e.message, line_no=e.line_no, snippet=e.snippet, filename=candidate) from e
    raise TiltFileError(f"Tilt file not found or empty: {tilt_ref}", line_no=cursor.line_no)
