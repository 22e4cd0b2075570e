from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from iesrescale.core.config import TILT_NONE
from iesrescale.models.photometry import Dimensions, Electrical, FileMeta, LampData, Photometry, Units


@dataclass(frozen=True)
class PhotometricRecord:
    """A fully parsed LM-63 document. Built once; derive new records with dataclasses.replace."""

    file_meta: FileMeta
    labels: Tuple[str, ...]
    lamp: LampData
    units: Units
    dimensions: Dimensions
    electrical: Electrical
    photometry: Photometry

    def __post_init__(self) -> None:
        if self.lamp.tilt_ref == TILT_NONE and self.lamp.tilt is not None:
            raise ValueError("TILT=NONE record must not carry tilt data")
        if self.lamp.tilt_ref != TILT_NONE and self.lamp.tilt is None:
            raise ValueError(f"TILT={self.lamp.tilt_ref} record is missing its tilt data")

    @property
    def peak_candela(self) -> float:
        return max((x for row in self.photometry.candelas for x in row), default=0.0)
