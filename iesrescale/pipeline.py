from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from iesrescale.export.ies_writer import SerializeError, serialize_record
from iesrescale.io.files import acquire, persist, read_cursor
from iesrescale.models.record import PhotometricRecord
from iesrescale.parser.errors import ParseError
from iesrescale.parser.ies_parser import parse_cursor
from iesrescale.parser.tilt_file import ByteSource
from iesrescale.photometry.rescale import RescaleError, rescale_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RescaleResult:
    source: PhotometricRecord
    rescaled: PhotometricRecord
    output: bytes


def load_ies(path: str | Path, source: ByteSource = acquire) -> Optional[PhotometricRecord]:
    """Read and parse a profile. Returns None when the file is missing or malformed."""
    cursor = read_cursor(path, source=source)
    if cursor is None:
        logger.warning("Could not read IES profile %s", path)
        return None
    try:
        return parse_cursor(cursor, source=source)
    except ParseError as e:
        logger.warning("Failed to parse IES profile: %s", e)
        return None


def try_rescale(
    record: PhotometricRecord, cone_angle_deg: float, preserve_intensity: bool = False
) -> Optional[PhotometricRecord]:
    try:
        return rescale_record(record, cone_angle_deg, preserve_intensity=preserve_intensity)
    except RescaleError as e:
        logger.warning("Failed to rescale %s: %s", record.file_meta.name or "<unnamed>", e)
        return None


def try_serialize(record: PhotometricRecord) -> Optional[bytes]:
    try:
        return serialize_record(record)
    except SerializeError as e:
        logger.warning("Failed to serialize %s: %s", record.file_meta.name or "<unnamed>", e)
        return None


def rescale_profile(
    path_in: str | Path,
    cone_angle_deg: float,
    preserve_intensity: bool = False,
    source: ByteSource = acquire,
) -> Optional[RescaleResult]:
    record = load_ies(path_in, source=source)
    if record is None:
        return None
    rescaled = try_rescale(record, cone_angle_deg, preserve_intensity=preserve_intensity)
    if rescaled is None:
        return None
    output = try_serialize(rescaled)
    if output is None:
        return None
    return RescaleResult(source=record, rescaled=rescaled, output=output)


def rescale_ies_file(
    path_in: str | Path,
    path_out: str | Path,
    cone_angle_deg: float,
    preserve_intensity: bool = False,
    source: ByteSource = acquire,
) -> bool:
    """Read, rescale and write a profile in one go. True on success."""
    result = rescale_profile(path_in, cone_angle_deg, preserve_intensity=preserve_intensity, source=source)
    if result is None:
        return False
    if not persist(path_out, result.output):
        return False
    logger.info(
        "Rescaled %s to a %g degree cone -> %s",
        path_in,
        cone_angle_deg,
        path_out,
    )
    return True

