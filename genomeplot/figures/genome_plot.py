"""Genome-wide plot of binned interval data.

Each stack entry gets its own sub-canvas holding one track per dataset
(one unit-wide rectangle per occupied bin) above the chromosome itself,
drawn either as a cytoband ideogram or as a flat bar.  The chromosome name
is written outside the sub-canvas, right-aligned for the left column and
left-aligned for the right column.
"""

from __future__ import annotations

from ..layout import LayoutResult, PlotParams
from . import ideogram
from .base import (
    ARM_BACKGROUND,
    ARM_CORNER_RATIO,
    BAR_COLOR,
    CYTOBAND_COLOR,
    HATCH_ID,
    OUTLINE_COLOR,
    PALETTE,
)
from .surface import SvgSurface


def draw_data(surface: SvgSurface, chromosome, label: str, label_index: int, layout: LayoutResult):
    """Draw one dataset track: a 1-unit rectangle for every bin with a count."""
    params = layout.params
    color = PALETTE[label_index % len(PALETTE)]
    y = layout.track_y(label_index)
    bins = chromosome.data.get(label)
    if bins is None:
        return
    for index in bins.nonzero()[0]:
        if params.with_borders:
            surface.rect(index, y, 1, params.height, fill=color, stroke=color, stroke_width=1)
        else:
            surface.rect(index, y, 1, params.height, fill=color)


def draw_arm(surface: SvgSurface, chromosome, arm, y: float, params: PlotParams, hatch_fill: str):
    """Draw one arm: white rounded background, clipped bands, then the outline."""
    x, width = ideogram.arm_geometry(arm, params.scale)
    height = params.cytoband_height
    radius = height * ARM_CORNER_RATIO
    clip_id = surface.unique_id(arm.name)

    surface.rect(x, y, width, height, fill=ARM_BACKGROUND, radius=radius)
    surface.clip_region(clip_id, x, y, width, height, radius=radius)
    for band in ideogram.resolve_bands(chromosome, arm, params.scale):
        surface.rect(band.x, y, band.width, height, fill=CYTOBAND_COLOR,
                     opacity=band.opacity, stroke="none", clip=clip_id)
        if band.hatch:
            surface.rect(band.x, y, band.width, height, fill=hatch_fill,
                         stroke="none", clip=clip_id)
    surface.rect(x, y, width, height, fill="none", stroke=OUTLINE_COLOR,
                 stroke_width=1, radius=radius)


def draw_chromosome(surface: SvgSurface, chromosome, y: float, params: PlotParams, hatch_fill: str):
    arms = ideogram.split_arms(chromosome)
    if not arms:
        surface.rect(0, y, chromosome.length / params.scale, params.chromosome_bar_height, fill=BAR_COLOR)
        return
    for arm in arms:
        draw_arm(surface, chromosome, arm, y, params, hatch_fill)


def draw_stack(surface: SvgSurface, stack, stack_index: int, labels: list, layout: LayoutResult, hatch_fill: str):
    params = layout.params
    for column, chromosome in enumerate(stack):
        place = layout.placement(stack_index, column, chromosome)
        sub = surface.region(
            place.x, place.y, place.width + 2, place.height + 2,
            viewbox=(-1, -1, place.width + 1, place.height + 1),
        )
        for label_index, label in enumerate(labels):
            draw_data(sub, chromosome, label, label_index, layout)
        draw_chromosome(sub, chromosome, layout.chromosome_y, params, hatch_fill)

        x, y, anchor = layout.label_anchor(stack_index, column)
        surface.text(x, y, chromosome.name, anchor=anchor, size=params.text_size)


def make_plot(stacks: list, labels: list, layout: LayoutResult) -> SvgSurface:
    """Return the SVG surface for the whole figure.

    Args:
        stacks: Rows of 1 or 2 chromosomes, already rasterized for ``labels``.
        labels: Labels of the datasets that loaded, in track order.
        layout: Result of ``compute_layout`` for the same stacks and labels.
    """
    surface = SvgSurface(layout.width, layout.height)
    hatch_fill = surface.hatch_pattern(HATCH_ID)
    for stack_index, stack in enumerate(stacks):
        draw_stack(surface, stack, stack_index, labels, layout, hatch_fill)
    return surface
