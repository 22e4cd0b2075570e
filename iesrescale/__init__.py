from __future__ import annotations

from typing import Any

__version__ = "0.1.0"

__all__ = [
    "PhotometricRecord",
    "ParseError",
    "TiltFileError",
    "RescaleError",
    "SerializeError",
    "parse_ies_bytes",
    "parse_ies_text",
    "parse_ies_file",
    "serialize_record",
    "rescale_record",
    "load_ies",
    "rescale_ies_file",
]


def __getattr__(name: str) -> Any:
    if name == "PhotometricRecord":
        from iesrescale.models.record import PhotometricRecord
        return PhotometricRecord
    if name in {"ParseError", "parse_ies_bytes", "parse_ies_text", "parse_ies_file"}:
        from iesrescale.parser.errors import ParseError
        from iesrescale.parser.ies_parser import parse_ies_bytes, parse_ies_file, parse_ies_text
        return {
            "ParseError": ParseError,
            "parse_ies_bytes": parse_ies_bytes,
            "parse_ies_text": parse_ies_text,
            "parse_ies_file": parse_ies_file,
        }[name]
    if name == "TiltFileError":
        from iesrescale.parser.tilt_file import TiltFileError
        return TiltFileError
    if name in {"SerializeError", "serialize_record"}:
        from iesrescale.export.ies_writer import SerializeError, serialize_record
        return {"SerializeError": SerializeError, "serialize_record": serialize_record}[name]
    if name in {"RescaleError", "rescale_record"}:
        from iesrescale.photometry.rescale import RescaleError, rescale_record
        return {"RescaleError": RescaleError, "rescale_record": rescale_record}[name]
    if name in {"load_ies", "rescale_ies_file"}:
        from iesrescale.pipeline import load_ies, rescale_ies_file
        return {"load_ies": load_ies, "rescale_ies_file": rescale_ies_file}[name]
    raise AttributeError(name)
