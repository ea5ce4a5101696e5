"""Canvas sizing and per-chromosome placement.

All sizes are computed analytically before anything is drawn.  Label widths
use a fixed average glyph width (``TEXT_RATIO`` x text size) instead of real
font metrics, so layout needs no measurement surface.

Coordinates are in output units; one unit along a chromosome is ``scale``
base pairs, which is also the raster bin width.
"""

from __future__ import annotations

from dataclasses import dataclass

TEXT_RATIO = 0.6
BORDER_GAP = 1


@dataclass
class PlotParams:
    scale: float = 100000         # bp per unit (and per raster bin)
    height: float = 5             # height of one dataset track
    cytoband_height: float = 10
    chromosome_bar_height: float = 1
    gap: float = 15               # vertical gap between stacks
    in_gap: float = 2             # vertical gap between dataset tracks
    horizontal_gap: float = 50    # gap between the two columns of a stack
    text_size: float = 16
    text_gap: float = 10          # gap between label and chromosome
    stacked: bool = False
    with_borders: bool = False

    def __post_init__(self):
        if not self.scale > 0:
            raise ValueError(f"scale must be positive, got {self.scale}")


@dataclass(frozen=True)
class Placement:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class LayoutResult:
    """Canvas size plus everything needed to place each stack entry."""

    width: float
    height: float
    label_widths: tuple
    entry_height: float
    chromosome_y: float
    params: PlotParams

    def row_y(self, stack_index: int) -> float:
        return stack_index * (self.entry_height + 2 * BORDER_GAP + self.params.gap)

    def track_y(self, label_index: int) -> float:
        return label_index * (self.params.height + self.params.in_gap)

    def placement(self, stack_index: int, column: int, chromosome) -> Placement:
        """Sub-canvas for *chromosome* in column 0 (left) or 1 (right-aligned)."""
        entry_width = chromosome.length / self.params.scale + 1
        if column == 0:
            x = self.label_widths[0] + self.params.text_gap
        else:
            x = self.width - self.label_widths[column] - self.params.text_gap - entry_width
        return Placement(x, self.row_y(stack_index), entry_width, self.entry_height)

    def label_anchor(self, stack_index: int, column: int) -> tuple[float, float, str]:
        """``(x, y, text_anchor)`` for the name label of a stack entry."""
        y = self.row_y(stack_index) + self.entry_height / 2 + self.params.text_size / 2
        if column == 0:
            return self.label_widths[0], y, "end"
        return self.width - self.label_widths[column], y, "start"


def label_width(name: str, text_size: float) -> float:
    return len(name) * TEXT_RATIO * text_size


def compute_layout(stacks: list, params: PlotParams, dataset_count: int, has_cytobands: bool) -> LayoutResult:
    """Size the canvas for *stacks*.

    Args:
        stacks: Sequence of 1- or 2-chromosome stacks, one per row.
        params: Plot dimensions and scale.
        dataset_count: Number of datasets that loaded successfully.
        has_cytobands: Whether chromosomes are drawn as ideograms rather than bars.
    """
    label_widths = [0.0, 0.0] if params.stacked else [0.0]
    max_internal = 0.0
    for stack in stacks:
        internal = 0.0
        for column, chrom in enumerate(stack):
            if column < len(label_widths):
                label_widths[column] = max(label_widths[column], label_width(chrom.name, params.text_size))
            internal += chrom.length / params.scale
            if column > 0:
                internal += params.horizontal_gap
        max_internal = max(max_internal, internal)

    width = max_internal + params.text_gap + label_widths[0] + 2 * BORDER_GAP
    if params.stacked and label_widths[1] > 0:
        width += params.text_gap + label_widths[1] + 2 * BORDER_GAP

    bar_height = params.cytoband_height if has_cytobands else params.chromosome_bar_height
    entry_height = dataset_count * (params.height + params.in_gap) + bar_height
    height = max(len(stacks) * (entry_height + 2 * BORDER_GAP + params.gap) - params.gap, 0)

    return LayoutResult(
        width=width,
        height=height,
        label_widths=tuple(label_widths),
        entry_height=entry_height,
        chromosome_y=entry_height - bar_height,
        params=params,
    )
