from __future__ import annotations

import re
from dataclasses import dataclass


def natsort_key(s: str) -> list:
    """Natural sort key: splits on digit runs so 'chr10' sorts after 'chr9'."""
    return [(0, int(c), "") if c.isdigit() else (1, 0, c.lower()) for c in re.split(r"(\d+)", s)]


@dataclass(frozen=True)
class Interval:
    """A genomic range ``[start, end)`` on ``chrom``, optionally named."""

    chrom: str
    start: int
    end: int
    name: str | None = None

    def __post_init__(self):
        if self.start < 0:
            raise ValueError(f"interval start must be >= 0, got {self.start}")
        if self.end < self.start:
            raise ValueError(f"interval end {self.end} precedes start {self.start}")

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, other: Interval) -> bool:
        return self.chrom == other.chrom and self.start < other.end and other.start < self.end

    def sort_key(self) -> tuple:
        return (natsort_key(self.chrom), self.start, self.end)
