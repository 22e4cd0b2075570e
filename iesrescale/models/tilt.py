from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple


class Orientation(IntEnum):
    """Lamp-to-luminaire geometry code of a TILT block."""
    VERTICAL = 1    # lamp vertical, base up or down
    HORIZONTAL = 2  # lamp horizontal
    TILTED = 3      # lamp tilted


@dataclass(frozen=True)
class TiltData:
    orientation: Orientation
    num_pairs: int
    angles: Tuple[float, ...] = ()
    mult_factors: Tuple[float, ...] = ()

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.num_pairs <= 0:
            if self.angles or self.mult_factors:
                raise ValueError("Tilt arrays must be empty when the pair count is not positive")
            return
        if len(self.angles) != self.num_pairs:
            raise ValueError(f"Tilt angle count {len(self.angles)} does not match pair count {self.num_pairs}")
        if len(self.mult_factors) != self.num_pairs:
            raise ValueError(
                f"Tilt multiplying factor count {len(self.mult_factors)} does not match pair count {self.num_pairs}"
            )
