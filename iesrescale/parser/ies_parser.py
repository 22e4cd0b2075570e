from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from iesrescale.core.config import DIALECT_TAGS, TILT_PREFIX
from iesrescale.io.cursor import ByteCursor
from iesrescale.io.files import acquire, read_cursor
from iesrescale.models.photometry import (
    Dimensions,
    Electrical,
    FileFormat,
    FileMeta,
    GonioType,
    LampData,
    Photometry,
    Units,
)
from iesrescale.models.record import PhotometricRecord
from iesrescale.models.tilt import TiltData
from iesrescale.parser.errors import ParseError
from iesrescale.parser.tilt_file import ByteSource, resolve_tilt
from iesrescale.parser.tokenizer import FLOAT, INT, read_array, read_fields

logger = logging.getLogger(__name__)

_HEADER_KINDS = [INT, FLOAT, FLOAT, INT, INT, INT, INT, FLOAT, FLOAT, FLOAT]
_ELECTRICAL_KINDS = [FLOAT, FLOAT, FLOAT]


def resolve_format(cursor: ByteCursor) -> FileFormat:
    """
    Pick the dialect from the first line. Tagged dialects consume their tag
    line; an untagged (LM-63-1986) file is rewound so that its first line is
    read again as a label or TILT line.
    """
    first = cursor.next_line()
    if not first:
        raise ParseError("Empty file", line_no=1)
    fmt = DIALECT_TAGS.get(first)
    if fmt is not None:
        return fmt
    cursor.rewind()
    return FileFormat.LM63_1986


def parse_labels(cursor: ByteCursor) -> Tuple[List[str], str]:
    """
    Collect label lines up to the TILT= line. Returns (labels, tilt reference).
    An empty line inside the label section is an error.
    """
    labels: List[str] = []
    while True:
        line = cursor.next_line()
        if line is None:
            raise ParseError("Missing TILT= line before end of file", line_no=cursor.line_no)
        if not line:
            raise ParseError("Empty line in label section", line_no=cursor.line_no)
        if line.startswith(TILT_PREFIX):
            return labels, line[len(TILT_PREFIX) :]
        labels.append(line)


def parse_photometry(
    cursor: ByteCursor, tilt_ref: str, tilt: Optional[TiltData]
) -> Tuple[LampData, Units, Dimensions, Electrical, Photometry]:
    """Read the photometric block that follows the TILT section."""
    header = read_fields(cursor, _HEADER_KINDS, what="photometric header")
    header_line_no = cursor.line_no
    (
        num_lamps,
        lumens_per_lamp,
        multiplier,
        num_vert,
        num_horz,
        gonio_code,
        units_code,
        width,
        length,
        height,
    ) = header

    try:
        gonio_type = GonioType(gonio_code)
    except ValueError as e:
        raise ParseError(
            f"Unsupported photometric_type={gonio_code} (expected 1=C, 2=B, 3=A)",
            line_no=header_line_no,
        ) from e
    try:
        units = Units(units_code)
    except ValueError as e:
        raise ParseError(
            f"Unsupported units_type={units_code} (expected 1=feet, 2=meters)",
            line_no=header_line_no,
        ) from e
    if num_vert <= 0 or num_horz <= 0:
        raise ParseError(
            f"Angle counts must be > 0 (vertical={num_vert}, horizontal={num_horz})",
            line_no=header_line_no,
        )

    ballast_factor, ballast_lamp_factor, input_watts = read_fields(cursor, _ELECTRICAL_KINDS, what="electrical line")

    vert = read_array(cursor, num_vert, what="vertical angles")
    horz = read_array(cursor, num_horz, what="horizontal angles")
    candelas = []
    for i in range(num_horz):
        row = read_array(cursor, num_vert, what=f"candela row {i + 1} of {num_horz}")
        candelas.append(tuple(row))

    logger.debug("Read %dx%d candela table (H x V)", num_horz, num_vert)
    return (
        LampData(
            num_lamps=int(num_lamps),
            lumens_per_lamp=float(lumens_per_lamp),
            multiplier=float(multiplier),
            tilt_ref=tilt_ref,
            tilt=tilt,
        ),
        units,
        Dimensions(width=float(width), length=float(length), height=float(height)),
        Electrical(
            ballast_factor=float(ballast_factor),
            ballast_lamp_factor=float(ballast_lamp_factor),
            input_watts=float(input_watts),
        ),
        Photometry(
            gonio_type=gonio_type,
            num_vert_angles=num_vert,
            num_horz_angles=num_horz,
            vert_angles=tuple(vert),
            horz_angles=tuple(horz),
            candelas=tuple(candelas),
        ),
    )


def parse_cursor(cursor: ByteCursor, name: str = "", source: ByteSource = acquire) -> PhotometricRecord:
    """
    Parse a whole LM-63 document from `cursor`.

    `name` is kept on the record and used to locate external tilt files next to
    the document. `source` fetches external tilt files (defaults to the file system).
    Raises ParseError on the first problem; no partial record is ever returned.
    """
    name = name or cursor.name
    base_dir = Path(name).expanduser().parent if name else None
    try:
        fmt = resolve_format(cursor)
        logger.debug("Resolved dialect %s", fmt.value)
        labels, tilt_ref = parse_labels(cursor)
        tilt = resolve_tilt(tilt_ref, cursor, source=source, base_dir=base_dir)
        lamp, units, dims, elec, photo = parse_photometry(cursor, tilt_ref, tilt)
        return PhotometricRecord(
            file_meta=FileMeta(format=fmt, name=name),
            labels=tuple(labels),
            lamp=lamp,
            units=units,
            dimensions=dims,
            electrical=elec,
            photometry=photo,
        )
    except ParseError as e:
        if e.filename is None and name:
            e.filename = name
        raise


def parse_ies_bytes(data: bytes, name: str = "", source: ByteSource = acquire) -> PhotometricRecord:
    return parse_cursor(ByteCursor(data, name=name), name=name, source=source)


def parse_ies_text(text: str, name: str = "", source: ByteSource = acquire) -> PhotometricRecord:
    return parse_ies_bytes(text.encode("utf-8", errors="surrogateescape"), name=name, source=source)


def parse_ies_file(path: str | Path, source: ByteSource = acquire) -> PhotometricRecord:
    cursor = read_cursor(path, source=source)
    if cursor is None:
        raise ParseError("File not found, unreadable or empty", filename=str(path))
    return parse_cursor(cursor, source=source)
