"""Chromosome model: cytobands, centromere and per-dataset occupancy bins.

A ``Genome`` is built in a single ingestion phase through a
``GenomeBuilder`` and then frozen.  After freezing, the chromosome set,
lengths and cytobands no longer change; only the per-label bin arrays are
filled in by the rasterizer.
"""

from __future__ import annotations

import bisect
import math
import re
import sys
from dataclasses import dataclass, replace

import numpy as np

from .interval import Interval

_NUMBERED_RE = re.compile(r"chr[0-9]+", re.IGNORECASE)
_NON_REGULAR_RE = re.compile(r"(chrUn)|_|(chrM)")
_MITO_RE = re.compile(r"chrM", re.IGNORECASE)


def round_half_up(x):
    """Round halves away from zero for non-negative input (2.5 -> 3, not 2)."""
    return np.floor(np.asarray(x, dtype=float) + 0.5).astype(np.int64)


@dataclass(frozen=True)
class Cytoband:
    """A Giemsa-stained band: an interval plus its stain code."""

    interval: Interval
    stain: str

    @property
    def chrom(self) -> str:
        return self.interval.chrom

    @property
    def start(self) -> int:
        return self.interval.start

    @property
    def end(self) -> int:
        return self.interval.end

    @property
    def name(self) -> str | None:
        return self.interval.name

    @property
    def is_centromere(self) -> bool:
        return self.stain == "acen"

    def sort_key(self) -> tuple:
        return self.interval.sort_key()


class Chromosome:
    """One chromosome or contig with its bands and rasterized datasets."""

    def __init__(self, name: str, length: int):
        if length < 0:
            raise ValueError(f"chromosome {name!r} has negative length {length}")
        self.name = name
        self.length = length
        self.cytobands: list[Cytoband] = []
        self.centromere: Cytoband | None = None
        self.data: dict[str, np.ndarray] = {}

    def __repr__(self):
        return f"Chromosome({self.name!r}, {self.length})"

    # ── Classifiers ───────────────────────────────────────────────────────────

    @property
    def is_numbered(self) -> bool:
        return _NUMBERED_RE.search(self.name) is not None

    @property
    def is_regular(self) -> bool:
        """False for unplaced (chrUn), alt/random (contains '_') and chrM."""
        return _NON_REGULAR_RE.search(self.name) is None

    @property
    def is_mitochondrial(self) -> bool:
        return _MITO_RE.fullmatch(self.name) is not None

    def as_interval(self) -> Interval:
        return Interval(self.name, 0, self.length, self.name)

    def sort_key(self) -> tuple:
        return self.as_interval().sort_key()

    # ── Bands ─────────────────────────────────────────────────────────────────

    def add_cytoband(self, band: Cytoband):
        """Insert *band* in sorted position and update centromere and length.

        Every ``acen`` band is folded into a single centromere spanning
        ``[min(starts), max(ends)]``, whatever order the bands arrive in.
        """
        keys = [b.sort_key() for b in self.cytobands]
        self.cytobands.insert(bisect.bisect_right(keys, band.sort_key()), band)

        if band.is_centromere:
            if self.centromere is None:
                self.centromere = band
            else:
                merged = Interval(
                    self.name,
                    min(self.centromere.start, band.start),
                    max(self.centromere.end, band.end),
                    self.centromere.name,
                )
                self.centromere = replace(self.centromere, interval=merged)

        if band.end > self.length:
            self.length = band.end

    # ── Rasterized data ───────────────────────────────────────────────────────

    def n_bins(self, scale: float) -> int:
        return math.ceil(self.length / scale) + 1

    def init_label(self, label: str, scale: float, warn: bool = True):
        """Allocate an empty bin array for *label*; repeated calls are no-ops."""
        if label in self.data:
            if warn:
                print(f'Warning: data already existed for label "{label}" on {self.name}.', file=sys.stderr)
            return
        self.data[label] = np.zeros(self.n_bins(scale), dtype=np.int64)

    def add_interval(self, label: str, interval: Interval, scale: float):
        """Count *interval* into every bin it touches, ends inclusive."""
        if interval.chrom != self.name:
            return
        self.add_intervals(label, [interval.start], [interval.end], scale)

    def add_intervals(self, label: str, starts, ends, scale: float):
        """Vectorized ``add_interval`` for intervals already known to be on this chromosome.

        Bins ``round(start / scale)`` to ``round(end / scale)`` are each
        incremented by one.  Bins past the end of the chromosome are dropped.
        """
        bins = self.data[label]
        n = len(bins)
        lo = round_half_up(np.asarray(starts, dtype=float) / scale)
        hi = np.minimum(round_half_up(np.asarray(ends, dtype=float) / scale), n - 1)
        keep = lo <= hi
        lo, hi = lo[keep], hi[keep]
        if len(lo) == 0:
            return

        # Difference array: +1 at each first bin, -1 just past each last bin
        diff = np.zeros(n + 1, dtype=np.int64)
        np.add.at(diff, lo, 1)
        np.add.at(diff, hi + 1, -1)
        bins += np.cumsum(diff[:-1])

    def bins(self, label: str) -> np.ndarray:
        return self.data[label]


class Genome:
    """Read-only, insertion-ordered collection of chromosomes keyed by name."""

    def __init__(self, chromosomes: list[Chromosome], has_cytobands: bool = False):
        self._chromosomes = tuple(chromosomes)
        self._by_name = {c.name: c for c in self._chromosomes}
        self.has_cytobands = has_cytobands

    def __iter__(self):
        return iter(self._chromosomes)

    def __len__(self):
        return len(self._chromosomes)

    def __contains__(self, name):
        return name in self._by_name

    def __getitem__(self, name: str) -> Chromosome:
        return self._by_name[name]

    def get(self, name: str, default=None):
        return self._by_name.get(name, default)

    @property
    def names(self) -> list[str]:
        return [c.name for c in self._chromosomes]


class GenomeBuilder:
    """Mutable collection used while annotation files are parsed.

    The ordered list and the name index are only ever updated together.
    """

    def __init__(self):
        self._chromosomes: list[Chromosome] = []
        self._by_name: dict[str, Chromosome] = {}
        self._has_cytobands = False
        self._frozen = False

    def __contains__(self, name):
        return name in self._by_name

    def __len__(self):
        return len(self._chromosomes)

    def _check_open(self):
        if self._frozen:
            raise RuntimeError("genome has been frozen; no further annotation can be added")

    def get(self, name: str) -> Chromosome | None:
        return self._by_name.get(name)

    def add_chromosome(self, name: str, length: int) -> Chromosome:
        """Return the chromosome called *name*, creating it if unseen.

        An existing chromosome keeps its first declared length.
        """
        self._check_open()
        chrom = self._by_name.get(name)
        if chrom is None:
            chrom = Chromosome(name, length)
            self._chromosomes.append(chrom)
            self._by_name[name] = chrom
        return chrom

    def add_cytoband(self, band: Cytoband):
        self._check_open()
        chrom = self.add_chromosome(band.chrom, band.end)
        chrom.add_cytoband(band)
        self._has_cytobands = True

    def freeze(self) -> Genome:
        self._frozen = True
        return Genome(self._chromosomes, has_cytobands=self._has_cytobands)
