from __future__ import annotations

from dataclasses import dataclass

from iesrescale.models.photometry import FileFormat

# First-line tags. LM-63-1986 files carry no tag; "IESNA86" is written on output only.
DIALECT_TAGS = {
    "IESNA:LM-63-1995": FileFormat.LM63_1995,
    "IESNA:LM-63-2002": FileFormat.LM63_2002,
    "IESNA91": FileFormat.LM63_1991,
}
OUTPUT_TAGS = {
    FileFormat.LM63_1986: "IESNA86",
    FileFormat.LM63_1991: "IESNA91",
    FileFormat.LM63_1995: "IESNA:LM-63-1995",
    FileFormat.LM63_2002: "IESNA:LM-63-2002",
}

TILT_PREFIX = "TILT="
TILT_NONE = "NONE"
TILT_INCLUDE = "INCLUDE"

FLOAT_PRECISION = 2

# Samples within this many degrees of 90 are kept in place by the rescale transform.
NEAR_HORIZONTAL_GUARD_DEG = 1.0
MIN_CONE_ANGLE_DEG = 0.0
MAX_CONE_ANGLE_DEG = 180.0


@dataclass(frozen=True)
class RescaleOptions:
    cone_angle_deg: float
    preserve_intensity: bool = False

    def validate(self) -> None:
        a = float(self.cone_angle_deg)
        if not (MIN_CONE_ANGLE_DEG <= a <= MAX_CONE_ANGLE_DEG):
            raise ValueError(
                f"Cone angle must be within [{MIN_CONE_ANGLE_DEG:g}, {MAX_CONE_ANGLE_DEG:g}] degrees, got {a:g}"
            )
