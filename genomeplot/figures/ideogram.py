"""Cytoband ideogram geometry and appearance.

A chromosome with a centromere is drawn as two arms, ``[0, cen.start)`` and
``[cen.end, length)``; without one it is a single arm.  A chromosome with no
cytobands at all has no arms and is drawn as a flat bar instead.

Each non-``acen`` band overlapping an arm becomes a ``BandFill`` whose
opacity comes from its Giemsa stain:

  gneg              0
  gpos<NN>          NN / 100, clamped to [0, 1]
  gpos100, gvar     1
  stalk             0.75
  anything else     0

``gvar`` and ``stalk`` bands also get a hatch overlay.  All positions are in
bin units (base pairs / scale), the same space the dataset tracks use.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..chromosome import Chromosome, Cytoband
from ..interval import Interval

_GPOS_RE = re.compile(r"^gpos(\d+)")
_HATCHED_STAINS = {"gvar", "stalk"}


@dataclass(frozen=True)
class BandFill:
    band: Cytoband
    x: float
    width: float
    opacity: float
    hatch: bool


def band_opacity(stain: str) -> float:
    if stain == "stalk":
        return 0.75
    if stain in ("gpos100", "gvar"):
        return 1.0
    if stain == "gneg":
        return 0.0
    match = _GPOS_RE.match(stain)
    if not match:
        return 0.0
    return min(max(float(match.group(1)) / 100, 0.0), 1.0)


def has_hatch(stain: str) -> bool:
    return stain in _HATCHED_STAINS


def split_arms(chromosome: Chromosome) -> list[Interval]:
    """Return the arms to draw, or ``[]`` when the chromosome has no cytobands."""
    if not chromosome.cytobands:
        return []
    cen = chromosome.centromere
    if cen is None:
        return [Interval(chromosome.name, 0, chromosome.length, f"{chromosome.name}_arm_1")]
    return [
        Interval(chromosome.name, 0, cen.start, f"{chromosome.name}_arm_1"),
        Interval(chromosome.name, cen.end, chromosome.length, f"{chromosome.name}_arm_2"),
    ]


def arm_geometry(arm: Interval, scale: float) -> tuple[float, float]:
    """``(x, width)`` of an arm in bin units."""
    return arm.start / scale, arm.length / scale


def resolve_bands(chromosome: Chromosome, arm: Interval, scale: float) -> list[BandFill]:
    """Fill instructions for every band overlapping *arm*; centromere bands are skipped."""
    return [
        BandFill(
            band=band,
            x=band.start / scale,
            width=(band.end - band.start) / scale,
            opacity=band_opacity(band.stain),
            hatch=has_hatch(band.stain),
        )
        for band in chromosome.cytobands
        if not band.is_centromere and arm.overlaps(band.interval)
    ]
