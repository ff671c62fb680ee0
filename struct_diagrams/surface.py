# struct_diagrams/surface.py
"""
DRAWING SURFACE: What the Renderer Draws On
===========================================

The renderer never talks to a plotting library directly. It needs a
small set of 2D drawing calls in pixel coordinates (origin top-left,
y downward, units are CSS pixels before the pixel-ratio scaling):

- size the canvas for the display's pixel density
- save / restore the drawing state, clip to a rectangle
- stroke polylines, fill polygons, rectangles and circles
- draw text (optionally with a contrasting outline) and measure it

``DrawingSurface`` is that capability. ``MatplotlibSurface`` implements
it on an Agg figure so diagrams can be written to PNG from scripts and
from the API; tests use a recording fake.
"""

import io
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, Tuple

import matplotlib.patheffects as path_effects
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.font_manager import FontProperties
from matplotlib.lines import Line2D
from matplotlib.patches import Circle, Polygon, Rectangle

from .layout import TextMetrics

Point = Tuple[float, float]

# Canvas-style alignment names -> matplotlib text alignment
_HALIGN = {"center": "center", "left": "left", "start": "left", "right": "right", "end": "right"}
_VALIGN = {"middle": "center", "alphabetic": "baseline", "top": "top", "bottom": "bottom"}

# 1 pt == 1 CSS pixel when the figure dpi is 72 * pixel_ratio
POINTS_PER_INCH = 72.0


class DrawingSurface(Protocol):
    """2D drawing capability consumed by the diagram renderer."""

    def set_size(self, width: float, height: float, pixel_ratio: float = 1.0) -> None: ...

    def clear(self) -> None: ...

    def save(self) -> None: ...

    def restore(self) -> None: ...

    def clip_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def stroke_path(self, points: Sequence[Point], color: str, width: float = 1.0) -> None: ...

    def fill_polygon(self, points: Sequence[Point], color: str, alpha: float = 1.0) -> None: ...

    def fill_rect(self, x: float, y: float, width: float, height: float,
                  color: str, alpha: float = 1.0) -> None: ...

    def stroke_rect(self, x: float, y: float, width: float, height: float,
                    color: str, line_width: float = 1.0) -> None: ...

    def fill_circle(self, cx: float, cy: float, radius: float,
                    color: str, alpha: float = 1.0) -> None: ...

    def stroke_circle(self, cx: float, cy: float, radius: float,
                      color: str, line_width: float = 1.0) -> None: ...

    def draw_text(self, text: str, x: float, y: float, color: str, size: float,
                  bold: bool = False, align: str = "center", baseline: str = "alphabetic",
                  outline: Optional[str] = None, outline_width: float = 0.0) -> None: ...

    def measure_text(self, text: str, size: float, bold: bool = False) -> TextMetrics: ...


@dataclass
class _Clip:
    x: float
    y: float
    width: float
    height: float

    def intersect(self, other: "_Clip") -> "_Clip":
        x1 = max(self.x, other.x)
        y1 = max(self.y, other.y)
        x2 = min(self.x + self.width, other.x + other.width)
        y2 = min(self.y + self.height, other.y + other.height)
        return _Clip(x1, y1, max(0.0, x2 - x1), max(0.0, y2 - y1))


class MatplotlibSurface:
    """
    ``DrawingSurface`` backed by a matplotlib Agg figure.

    Parameters:
    -----------
    width, height : float
        Initial canvas size in CSS pixels. The renderer resizes it.
    pixel_ratio : float
        Device pixels per CSS pixel (2.0 for a retina-style export).
    background : str
        Colour used when the image is saved. The canvas itself starts
        transparent, like a cleared HTML canvas.
    """

    def __init__(self, width: float = 1.0, height: float = 1.0,
                 pixel_ratio: float = 1.0, background: str = "white"):
        self.background = background
        self.figure: Optional[Figure] = None
        self.ax = None
        self._clip: Optional[_Clip] = None
        self._clip_stack: List[Optional[_Clip]] = []
        self._zorder = 0
        self.set_size(width, height, pixel_ratio)

    # -------------------------------------------------------------------------
    # Canvas
    # -------------------------------------------------------------------------

    def set_size(self, width: float, height: float, pixel_ratio: float = 1.0) -> None:
        if self.figure is not None:
            self.close()
        self.width = float(width)
        self.height = float(height)
        self.pixel_ratio = float(pixel_ratio) if pixel_ratio and pixel_ratio > 0 else 1.0

        self.figure = Figure(
            figsize=(self.width / POINTS_PER_INCH, self.height / POINTS_PER_INCH),
            dpi=POINTS_PER_INCH * self.pixel_ratio,
        )
        FigureCanvasAgg(self.figure)
        self.figure.patch.set_alpha(0.0)
        self.ax = self.figure.add_axes([0, 0, 1, 1])
        self._reset_axes()

    def _reset_axes(self) -> None:
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)  # pixel y grows downward
        self.ax.set_axis_off()
        self._clip = None
        self._clip_stack = []
        self._zorder = 0

    def clear(self) -> None:
        self.ax.cla()
        self._reset_axes()

    def close(self) -> None:
        if self.figure is not None:
            self.figure.clear()
        self.figure = None
        self.ax = None

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    def save(self) -> None:
        self._clip_stack.append(self._clip)

    def restore(self) -> None:
        if self._clip_stack:
            self._clip = self._clip_stack.pop()

    def clip_rect(self, x: float, y: float, width: float, height: float) -> None:
        clip = _Clip(x, y, width, height)
        self._clip = clip if self._clip is None else self._clip.intersect(clip)

    def _add(self, artist):
        """Stack artists in call order and apply the active clip."""
        self._zorder += 1
        artist.set_zorder(self._zorder)
        if self._clip is not None:
            clip_patch = Rectangle(
                (self._clip.x, self._clip.y), self._clip.width, self._clip.height,
                transform=self.ax.transData,
            )
            artist.set_clip_on(True)
            artist.set_clip_path(clip_patch)
        return artist

    # -------------------------------------------------------------------------
    # Shapes
    # -------------------------------------------------------------------------

    def stroke_path(self, points: Sequence[Point], color: str, width: float = 1.0) -> None:
        if len(points) < 2:
            return
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        line = Line2D(xs, ys, color=color, linewidth=width,
                      solid_joinstyle="miter", solid_capstyle="butt")
        self.ax.add_line(line)
        self._add(line)

    def fill_polygon(self, points: Sequence[Point], color: str, alpha: float = 1.0) -> None:
        if len(points) < 3:
            return
        patch = Polygon(list(points), closed=True, facecolor=color,
                        edgecolor="none", alpha=alpha)
        self.ax.add_patch(patch)
        self._add(patch)

    def fill_rect(self, x: float, y: float, width: float, height: float,
                  color: str, alpha: float = 1.0) -> None:
        patch = Rectangle((x, y), width, height, facecolor=color,
                          edgecolor="none", alpha=alpha)
        self.ax.add_patch(patch)
        self._add(patch)

    def stroke_rect(self, x: float, y: float, width: float, height: float,
                    color: str, line_width: float = 1.0) -> None:
        patch = Rectangle((x, y), width, height, facecolor="none",
                          edgecolor=color, linewidth=line_width)
        self.ax.add_patch(patch)
        self._add(patch)

    def fill_circle(self, cx: float, cy: float, radius: float,
                    color: str, alpha: float = 1.0) -> None:
        patch = Circle((cx, cy), radius, facecolor=color, edgecolor="none", alpha=alpha)
        self.ax.add_patch(patch)
        self._add(patch)

    def stroke_circle(self, cx: float, cy: float, radius: float,
                      color: str, line_width: float = 1.0) -> None:
        patch = Circle((cx, cy), radius, facecolor="none", edgecolor=color,
                       linewidth=line_width)
        self.ax.add_patch(patch)
        self._add(patch)

    # -------------------------------------------------------------------------
    # Text
    # -------------------------------------------------------------------------

    @staticmethod
    def _font(size: float, bold: bool) -> FontProperties:
        return FontProperties(size=size, weight="bold" if bold else "normal")

    def draw_text(self, text: str, x: float, y: float, color: str, size: float,
                  bold: bool = False, align: str = "center", baseline: str = "alphabetic",
                  outline: Optional[str] = None, outline_width: float = 0.0) -> None:
        artist = self.ax.text(
            x, y, text,
            color=color,
            fontproperties=self._font(size, bold),
            ha=_HALIGN.get(align, "left"),
            va=_VALIGN.get(baseline, "baseline"),
        )
        if outline and outline_width > 0:
            artist.set_path_effects([
                path_effects.withStroke(linewidth=outline_width, foreground=outline),
            ])
        self._add(artist)

    def measure_text(self, text: str, size: float, bold: bool = False) -> TextMetrics:
        renderer = self.figure.canvas.get_renderer()
        width, height, descent = renderer.get_text_width_height_descent(
            text, self._font(size, bold), ismath=False,
        )
        # Renderer works in device pixels
        scale = self.pixel_ratio
        return TextMetrics(
            width=width / scale,
            ascent=(height - descent) / scale,
            descent=descent / scale,
        )

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def savefig(self, outpath: str) -> None:
        self.figure.savefig(outpath, dpi=self.figure.dpi, facecolor=self.background)

    def to_png_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.figure.savefig(buffer, format="png", dpi=self.figure.dpi,
                            facecolor=self.background)
        return buffer.getvalue()
