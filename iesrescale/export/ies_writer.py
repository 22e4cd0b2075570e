from __future__ import annotations

from typing import Iterable, List

from iesrescale.core.config import FLOAT_PRECISION, OUTPUT_TAGS, TILT_INCLUDE, TILT_NONE, TILT_PREFIX
from iesrescale.models.record import PhotometricRecord


class SerializeError(ValueError):
    pass


def format_float(value: float, precision: int = FLOAT_PRECISION) -> str:
    """Fixed-point with `precision` decimals, minus trailing zeros and a dangling point: 12.50 -> 12.5, 12.00 -> 12."""
    s = f"{float(value):.{precision}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _float_line(values: Iterable[float]) -> str:
    return " ".join(format_float(v) for v in values)


def record_to_lines(record: PhotometricRecord) -> List[str]:
    tag = OUTPUT_TAGS.get(record.file_meta.format)
    if tag is None:
        raise SerializeError(f"Unsupported file format: {record.file_meta.format!r}")

    lines: List[str] = [tag]
    lines.extend(record.labels)

    lamp = record.lamp
    if lamp.tilt_ref == TILT_NONE:
        lines.append(TILT_PREFIX + TILT_NONE)
    else:
        # External tilt files are not written back; their data is always embedded.
        tilt = lamp.tilt
        if tilt is None:
            raise SerializeError(f"TILT={lamp.tilt_ref} record has no tilt data to embed")
        lines.append(TILT_PREFIX + TILT_INCLUDE)
        lines.append(str(int(tilt.orientation)))
        lines.append(str(int(tilt.num_pairs)))
        if tilt.angles:
            lines.append(_float_line(tilt.angles))
        if tilt.mult_factors:
            lines.append(_float_line(tilt.mult_factors))

    photo = record.photometry
    dims = record.dimensions
    lines.append(
        " ".join(
            [
                str(int(lamp.num_lamps)),
                format_float(lamp.lumens_per_lamp),
                format_float(lamp.multiplier),
                str(int(photo.num_vert_angles)),
                str(int(photo.num_horz_angles)),
                str(int(photo.gonio_type)),
                str(int(record.units)),
                format_float(dims.width),
                format_float(dims.length),
                format_float(dims.height),
            ]
        )
    )
    elec = record.electrical
    lines.append(_float_line([elec.ballast_factor, elec.ballast_lamp_factor, elec.input_watts]))
    lines.append(_float_line(photo.vert_angles))
    lines.append(_float_line(photo.horz_angles))
    for row in photo.candelas:
        lines.append(_float_line(row))
    return lines


def serialize_record(record: PhotometricRecord) -> bytes:
    """Canonical LM-63 bytes for `record`: LF line endings, every line terminated."""
    return "".join(line + "\n" for line in record_to_lines(record)).encode("utf-8", errors="surrogateescape")
