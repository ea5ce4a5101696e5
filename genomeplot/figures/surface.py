"""SVG drawing surface.

The plot code only uses the small capability set below (rectangles, clip
regions, text, a hatch pattern and nested sub-canvases) and never asks the
surface for measurements.  ``SvgSurface`` implements it with svgwrite.
"""

from __future__ import annotations

import re

import svgwrite

from .base import FONT_FAMILY, OUTLINE_COLOR

_ID_UNSAFE = re.compile(r"[^A-Za-z0-9_.-]")


def safe_id(name: str) -> str:
    """Turn an arbitrary name into a usable XML id."""
    ident = _ID_UNSAFE.sub("_", name)
    return ident if ident[:1].isalpha() or ident[:1] == "_" else f"_{ident}"


class SvgSurface:
    """A canvas (the document, or a nested ``<svg>``) that elements are added to."""

    def __init__(self, width: float, height: float, drawing=None, container=None, used_ids=None):
        self.width = width
        self.height = height
        # ids are shared by every surface of one document
        self.used_ids = used_ids if used_ids is not None else set()
        if drawing is None:
            drawing = svgwrite.Drawing(size=(_num(width), _num(height)), profile="full", debug=False)
        self.drawing = drawing
        self.container = container if container is not None else drawing

    def unique_id(self, name: str) -> str:
        """A document-unique id derived from *name*; repeats get a numeric suffix."""
        base = ident = safe_id(name)
        n = 1
        while ident in self.used_ids:
            n += 1
            ident = f"{base}_{n}"
        self.used_ids.add(ident)
        return ident

    def rect(self, x, y, width, height, fill="none", opacity=None, stroke=None,
             stroke_width=None, radius=None, clip=None):
        extra = {"fill": fill}
        if opacity is not None:
            extra["fill_opacity"] = _num(opacity)
        if stroke is not None:
            extra["stroke"] = stroke
        if stroke_width is not None:
            extra["stroke_width"] = _num(stroke_width)
        if radius is not None:
            extra["rx"] = extra["ry"] = _num(radius)
        if clip is not None:
            extra["clip_path"] = f"url(#{clip})"
        element = self.drawing.rect(
            insert=(_num(x), _num(y)), size=(_num(width), _num(height)), **extra
        )
        self.container.add(element)
        return element

    def clip_region(self, clip_id, x, y, width, height, radius=None):
        """Define a clip path named *clip_id* covering the given (rounded) box."""
        clip = self.drawing.clipPath(id=clip_id)
        shape = {}
        if radius is not None:
            shape["rx"] = shape["ry"] = _num(radius)
        clip.add(self.drawing.rect(insert=(_num(x), _num(y)), size=(_num(width), _num(height)), **shape))
        self.container.add(clip)
        return clip_id

    def text(self, x, y, content, anchor="start", size=16):
        element = self.drawing.text(
            content,
            insert=(_num(x), _num(y)),
            text_anchor=anchor,
            style=f"font-family: {FONT_FAMILY}; font-size: {_num(size)}px",
        )
        self.container.add(element)
        return element

    def hatch_pattern(self, pattern_id, size=8, stripe=2, angle=60):
        """Add a repeating diagonal hatch to ``<defs>``; returns its fill value."""
        pattern = self.drawing.pattern(
            id=pattern_id,
            size=(size, size),
            patternUnits="userSpaceOnUse",
            patternTransform=f"rotate({angle})",
        )
        pattern.add(self.drawing.rect(insert=(0, 0), size=(stripe, size), fill=OUTLINE_COLOR))
        self.drawing.defs.add(pattern)
        self.used_ids.add(pattern_id)
        return f"url(#{pattern_id})"

    def region(self, x, y, width, height, viewbox=None) -> SvgSurface:
        """Nested sub-canvas at (x, y); ``viewbox`` is ``(minx, miny, w, h)``."""
        sub = self.drawing.svg(insert=(_num(x), _num(y)), size=(_num(width), _num(height)))
        if viewbox is not None:
            sub.viewbox(*(_num(v) for v in viewbox))
        self.container.add(sub)
        return SvgSurface(width, height, drawing=self.drawing, container=sub, used_ids=self.used_ids)

    def tostring(self) -> str:
        return self.drawing.tostring()


def _num(value):
    """Plain Python number for svgwrite (numpy scalars are not accepted everywhere)."""
    value = float(value)
    return int(value) if value.is_integer() else round(value, 4)
