# File: tests/conftest.py
"""
Shared fixtures: small models and a drawing surface that records calls.

RecordingSurface implements the DrawingSurface protocol without any
plotting backend, so renderer tests can assert on what was drawn (and
where) instead of on pixels.
"""

import pytest

from struct_diagrams.layout import TextMetrics


class RecordingSurface:
    """DrawingSurface that stores every call as (name, kwargs)."""

    CHAR_WIDTH = 0.6  # fraction of the font size per character

    def __init__(self):
        self.calls = []
        self.size = None
        self.depth = 0
        self.max_depth = 0

    def _record(self, name, **kwargs):
        self.calls.append((name, kwargs))

    def names(self):
        return [name for name, _ in self.calls]

    def of(self, name):
        return [kwargs for call, kwargs in self.calls if call == name]

    def texts(self):
        return [kwargs["text"] for kwargs in self.of("draw_text")]

    # DrawingSurface -------------------------------------------------------

    def set_size(self, width, height, pixel_ratio=1.0):
        self.size = (width, height, pixel_ratio)
        self._record("set_size", width=width, height=height, pixel_ratio=pixel_ratio)

    def clear(self):
        self._record("clear")

    def save(self):
        self.depth += 1
        self.max_depth = max(self.max_depth, self.depth)
        self._record("save")

    def restore(self):
        self.depth -= 1
        self._record("restore")

    def clip_rect(self, x, y, width, height):
        self._record("clip_rect", x=x, y=y, width=width, height=height)

    def stroke_path(self, points, color, width=1.0):
        self._record("stroke_path", points=list(points), color=color, width=width)

    def fill_polygon(self, points, color, alpha=1.0):
        self._record("fill_polygon", points=list(points), color=color, alpha=alpha)

    def fill_rect(self, x, y, width, height, color, alpha=1.0):
        self._record("fill_rect", x=x, y=y, width=width, height=height, color=color, alpha=alpha)

    def stroke_rect(self, x, y, width, height, color, line_width=1.0):
        self._record("stroke_rect", x=x, y=y, width=width, height=height, color=color,
                     line_width=line_width)

    def fill_circle(self, cx, cy, radius, color, alpha=1.0):
        self._record("fill_circle", cx=cx, cy=cy, radius=radius, color=color, alpha=alpha)

    def stroke_circle(self, cx, cy, radius, color, line_width=1.0):
        self._record("stroke_circle", cx=cx, cy=cy, radius=radius, color=color,
                     line_width=line_width)

    def draw_text(self, text, x, y, color, size, bold=False, align="center",
                  baseline="alphabetic", outline=None, outline_width=0.0):
        self._record("draw_text", text=text, x=x, y=y, color=color, size=size, bold=bold,
                     align=align, baseline=baseline, outline=outline,
                     outline_width=outline_width)

    def measure_text(self, text, size, bold=False):
        return TextMetrics(width=len(text) * size * self.CHAR_WIDTH,
                           ascent=size * 0.75, descent=size * 0.25)


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def beam_2d():
    """4 m beam along x on z=0, node 1 moves 10 mm in y (dof=3)."""
    nodes = [{"x": 0.0, "y": 0.0, "z": 0.0}, {"x": 4.0, "y": 0.0, "z": 0.0}]
    members = [{"i": 0, "j": 1}]
    displacements = [0.0, 0.0, 0.0, 0.0, 0.01, 0.0]
    return nodes, members, displacements


@pytest.fixture
def portal_2d():
    """
    Fixed-base portal: 4 m columns, 6 m beam with 10 kN/m.

    Returns nodes, members, displacements (dof=3), member forces and
    section checks.
    """
    nodes = [
        {"x": 0.0, "y": 0.0},
        {"x": 0.0, "y": 4.0},
        {"x": 6.0, "y": 4.0},
        {"x": 6.0, "y": 0.0},
    ]
    members = [{"i": 0, "j": 1}, {"i": 1, "j": 2}, {"i": 2, "j": 3}]
    displacements = [
        0.0, 0.0, 0.0,
        0.0042, -0.0003, -0.0021,
        0.0040, -0.0003, 0.0019,
        0.0, 0.0, 0.0,
    ]
    member_forces = [
        {"N_i": -30.0, "N_j": -30.0, "Q_i": 7.5, "Q_j": 7.5, "M_i": 10.0, "M_j": -20.0},
        {"N_i": -7.5, "N_j": -7.5, "Q_i": 30.0, "Q_j": -30.0, "M_i": -20.0, "M_j": -20.0, "w": 10.0},
        {"N_i": -30.0, "N_j": -30.0, "Q_i": -7.5, "Q_j": -7.5, "M_i": -20.0, "M_j": 10.0},
    ]
    section_checks = [
        {"ratios": [0.31, 0.22, 0.18, 0.35, 0.52], "max_ratio": 0.52},
        {"ratios": [0.52, 0.41, 1.10, 0.41, 0.52], "max_ratio": 1.10},
        {"ratios": [0.52, 0.35, 0.18, 0.22, 0.31], "max_ratio": 0.52},
    ]
    return nodes, members, displacements, member_forces, section_checks
