from __future__ import annotations

import math
from dataclasses import replace
from typing import Tuple

import numpy as np

from iesrescale.core.config import NEAR_HORIZONTAL_GUARD_DEG, RescaleOptions
from iesrescale.models.record import PhotometricRecord


class RescaleError(ValueError):
    pass


def near_horizontal_threshold(guard_deg: float = NEAR_HORIZONTAL_GUARD_DEG) -> float:
    """|cos| below which a folded vertical angle counts as horizontal (within guard_deg of 90)."""
    return abs(math.cos(math.radians(90.0 + guard_deg)))


def _rescale_cells(
    vert_deg: np.ndarray,
    candela: np.ndarray,
    x_scale: float,
    preserve_intensity: bool,
    threshold: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Remap every cell of the [H][V] candela table.
    Returns (angle_deg, candela) arrays of shape [H][V]; the caller decides which cells are kept.
    """
    top = vert_deg > 90.0
    folded = np.where(top, 180.0 - vert_deg, vert_deg)
    rad = np.radians(folded)
    cos_v = np.cos(rad)
    near_horizontal = np.abs(cos_v) <= threshold

    y0 = candela * cos_v
    x0 = candela * np.sin(rad)
    x_scaled = x0 * x_scale

    with np.errstate(divide="ignore", invalid="ignore"):
        if preserve_intensity:
            angle = np.degrees(np.arcsin(x_scaled / candela))
            magnitude = np.where(near_horizontal, x_scaled, candela)
        else:
            angle = np.degrees(np.arctan(x_scaled / y0))
            magnitude = np.sqrt(y0 * y0 + x_scaled * x_scaled)
    angle = np.where(near_horizontal, folded, angle)
    angle = np.where(top, 180.0 - angle, angle)
    return angle, magnitude


def rescale_record(record: PhotometricRecord, cone_angle_deg: float, preserve_intensity: bool = False) -> PhotometricRecord:
    """
    Fit a profile measured over the full [0, 180] vertical range into a cone of
    `cone_angle_deg` degrees.

    Each positive candela sample is folded into the lower hemisphere, split into
    vertical and horizontal components, and the horizontal component is scaled
    by sin(cone/2). The default mode recomputes the magnitude from the scaled
    components; `preserve_intensity` keeps the original magnitude (except for
    samples within the near-horizontal guard band, which keep their angle and
    shrink to the scaled horizontal component).

    Samples <= 0 are left untouched. The vertical angle array is shared by all
    horizontal planes, so each index ends up with the value written by the last
    plane (in file order) whose sample at that index was remapped.
    """
    options = RescaleOptions(cone_angle_deg=cone_angle_deg, preserve_intensity=preserve_intensity)
    try:
        options.validate()
    except ValueError as e:
        raise RescaleError(str(e)) from e

    photo = record.photometry
    x_scale = math.sin(math.radians(float(cone_angle_deg) * 0.5))
    threshold = near_horizontal_threshold()

    vert = np.asarray(photo.vert_angles, dtype=float)
    candela = np.asarray(photo.candelas, dtype=float).reshape(photo.num_horz_angles, photo.num_vert_angles)
    angle, magnitude = _rescale_cells(vert[np.newaxis, :], candela, x_scale, bool(preserve_intensity), threshold)

    active = candela > 0.0
    new_candela = np.where(active, magnitude, candela)

    # Last-write-wins across horizontal planes for the shared vertical axis.
    H = photo.num_horz_angles
    written = active.any(axis=0)
    last_row = (H - 1) - np.argmax(active[::-1, :], axis=0)
    cols = np.arange(photo.num_vert_angles)
    new_vert = np.where(written, angle[last_row, cols], vert)

    new_photo = replace(
        photo,
        vert_angles=tuple(float(v) for v in new_vert),
        candelas=tuple(tuple(float(x) for x in row) for row in new_candela),
    )
    return replace(record, photometry=new_photo)
