from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Tuple

from iesrescale.models.tilt import TiltData


class FileFormat(Enum):
    LM63_1986 = "LM-63-1986"
    LM63_1991 = "LM-63-1991"
    LM63_1995 = "LM-63-1995"
    LM63_2002 = "LM-63-2002"


class Units(IntEnum):
    FEET = 1
    METERS = 2


class GonioType(IntEnum):
    TYPE_C = 1
    TYPE_B = 2
    TYPE_A = 3


@dataclass(frozen=True)
class FileMeta:
    format: FileFormat
    # Informational only; identical profiles loaded from different paths compare equal.
    name: str = field(default="", compare=False)


@dataclass(frozen=True)
class LampData:
    num_lamps: int
    lumens_per_lamp: float
    multiplier: float
    tilt_ref: str
    tilt: Optional[TiltData] = None


@dataclass(frozen=True)
class Dimensions:
    width: float
    length: float
    height: float


@dataclass(frozen=True)
class Electrical:
    ballast_factor: float
    ballast_lamp_factor: float
    input_watts: float


@dataclass(frozen=True)
class Photometry:
    gonio_type: GonioType
    num_vert_angles: int
    num_horz_angles: int
    vert_angles: Tuple[float, ...]
    horz_angles: Tuple[float, ...]
    # Shape: [H][V], outer index = horizontal angle, inner index = vertical angle
    candelas: Tuple[Tuple[float, ...], ...]

    def __post_init__(self) -> None:
        if len(self.vert_angles) != self.num_vert_angles:
            raise ValueError(
                f"Vertical angle count {len(self.vert_angles)} does not match declared {self.num_vert_angles}"
            )
        if len(self.horz_angles) != self.num_horz_angles:
            raise ValueError(
                f"Horizontal angle count {len(self.horz_angles)} does not match declared {self.num_horz_angles}"
            )
        if len(self.candelas) != self.num_horz_angles:
            raise ValueError(f"Candela table has {len(self.candelas)} rows, expected {self.num_horz_angles}")
        for i, row in enumerate(self.candelas):
            if len(row) != self.num_vert_angles:
                raise ValueError(f"Candela row {i} has {len(row)} values, expected {self.num_vert_angles}")
