from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import matplotlib
matplotlib.use("Agg")  # headless-safe for servers/CI
import matplotlib.pyplot as plt  # noqa: E402

from iesrescale.models.record import PhotometricRecord  # noqa: E402


@dataclass(frozen=True)
class PlotPaths:
    intensity_png: Path
    polar_png: Path


def _choose_plane_indices(horizontal_deg: Sequence[float], max_planes: int = 4) -> List[int]:
    """
    Pick up to max_planes horizontal planes spaced across available angles.
    Deterministic: first, last, and evenly spaced in-between.
    """
    H = len(horizontal_deg)
    if H <= max_planes:
        return list(range(H))
    idxs = [0]
    for k in range(1, max_planes - 1):
        idxs.append(round(k * (H - 1) / (max_planes - 1)))
    idxs.append(H - 1)
    return sorted(set(int(i) for i in idxs))


def _planes(record: PhotometricRecord, plane_indices: Optional[Iterable[int]]) -> List[int]:
    H = record.photometry.num_horz_angles
    if plane_indices is None:
        return _choose_plane_indices(record.photometry.horz_angles)
    return [i for i in plane_indices if 0 <= i < H]


def plot_intensity_curves(
    records: Sequence[PhotometricRecord],
    outpath: Path,
    titles: Sequence[str] = (),
    plane_indices: Optional[Iterable[int]] = None,
) -> Path:
    """Candela vs vertical angle for selected horizontal planes, one line style per record."""
    styles = ["-", "--", ":", "-."]
    fig = plt.figure()
    ax = fig.add_subplot(111)
    for n, record in enumerate(records):
        photo = record.photometry
        title = titles[n] if n < len(titles) else f"#{n + 1}"
        for hi in _planes(record, plane_indices):
            ax.plot(
                photo.vert_angles,
                photo.candelas[hi],
                styles[n % len(styles)],
                label=f"{title} H={photo.horz_angles[hi]:g}°",
            )
    ax.set_xlabel("Vertical angle (deg)")
    ax.set_ylabel("Candela (cd)")
    ax.set_title("Intensity curves (candela vs vertical angle)")
    ax.legend(loc="best", fontsize="small")
    fig.tight_layout()
    fig.savefig(outpath, dpi=200)
    plt.close(fig)
    return outpath


def plot_polar(
    records: Sequence[PhotometricRecord],
    outpath: Path,
    titles: Sequence[str] = (),
    plane_indices: Optional[Iterable[int]] = None,
) -> Path:
    """
    Polar plot with theta = vertical angle, nadir pointing down, so a rescaled
    profile can be compared against its source cone.
    """
    styles = ["-", "--", ":", "-."]
    fig = plt.figure()
    ax = fig.add_subplot(111, projection="polar")
    ax.set_theta_zero_location("S")
    for n, record in enumerate(records):
        photo = record.photometry
        title = titles[n] if n < len(titles) else f"#{n + 1}"
        theta = [math.radians(x) for x in photo.vert_angles]
        for hi in _planes(record, plane_indices):
            ax.plot(theta, photo.candelas[hi], styles[n % len(styles)], label=f"{title} H={photo.horz_angles[hi]:g}°")
    ax.set_title("Polar intensity plot (theta = vertical angle)")
    ax.legend(loc="best", bbox_to_anchor=(1.15, 1.05), fontsize="small")
    fig.tight_layout()
    fig.savefig(outpath, dpi=200)
    plt.close(fig)
    return outpath


def save_comparison_plots(
    before: PhotometricRecord,
    after: PhotometricRecord,
    outdir: Path,
    stem: str = "iesrescale",
) -> PlotPaths:
    outdir.mkdir(parents=True, exist_ok=True)
    intensity_png = outdir / f"{stem}_intensity.png"
    polar_png = outdir / f"{stem}_polar.png"
    titles = ("source", "rescaled")
    plot_intensity_curves([before, after], intensity_png, titles=titles)
    plot_polar([before, after], polar_png, titles=titles)
    return PlotPaths(intensity_png=intensity_png, polar_png=polar_png)
