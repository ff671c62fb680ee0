# struct_diagrams/layout.py
"""
LABEL LAYOUT ENGINE: Greedy Callout Placement
=============================================

Node numbers, member numbers and value callouts are placed one at a
time. Each label tries a fixed, ordered list of candidate offsets around
its anchor and takes the first whose rectangle overlaps nothing placed
so far:

        (-20,-20)  (0,-26)  (20,-20)
                      │
        (-26, 0) ─── anchor ─── (26, 0)
                      │
        (-20, 20)  (0, 26)  (20, 20)

If every candidate collides, the label falls back onto the anchor
itself (overlap is possible in dense regions).

OBSTACLES ARE A VALUE, NOT A LIST THAT GROWS:
---------------------------------------------
``place_label`` returns the placement *and* a new obstacle tuple with the
label's rectangle appended. Callers thread that tuple through their
placements in order (nodes first, then members), so the result depends
only on the inputs and each frame starts from its own empty tuple.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

Offset = Tuple[float, float]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned pixel rectangle (y grows downward)."""
    x1: float
    y1: float
    x2: float
    y2: float

    def overlaps(self, other: "Rect") -> bool:
        """Closed-interval test: touching edges count as overlap."""
        return not (
            self.x2 < other.x1 or self.x1 > other.x2
            or self.y2 < other.y1 or self.y1 > other.y2
        )

    @classmethod
    def from_center(cls, cx: float, cy: float, width: float, height: float,
                    padding: float = 2.0) -> "Rect":
        return cls(
            cx - width / 2 - padding,
            cy - height / 2 - padding,
            cx + width / 2 + padding,
            cy + height / 2 + padding,
        )

    @property
    def width(self) -> float:
        return self.x2 - self.x1

    @property
    def height(self) -> float:
        return self.y2 - self.y1


Obstacles = Tuple[Rect, ...]


@dataclass(frozen=True)
class TextMetrics:
    """Measured text bounds in pixels."""
    width: float
    ascent: float = 10.0
    descent: float = 4.0

    @property
    def height(self) -> float:
        return self.ascent + self.descent


@dataclass(frozen=True)
class Placement:
    cx: float
    cy: float
    rect: Rect
    fallback: bool = False


# Cardinal, diagonal, then far variants
DEFAULT_OFFSETS: Tuple[Offset, ...] = (
    (0, -26), (26, 0), (0, 26), (-26, 0),
    (20, -20), (-20, -20), (20, 20), (-20, 20),
    (0, -40), (32, -18), (-32, -18), (32, 18), (-32, 18),
)

# Node number circles (below first); the deformation diagram keeps them
# a little further from its larger node markers
NODE_LABEL_OFFSETS: Tuple[Offset, ...] = (
    (0, 28), (26, 12), (-26, 12), (0, -32), (32, -16), (-32, -16),
)
FORCE_NODE_LABEL_OFFSETS: Tuple[Offset, ...] = (
    (0, 26), (24, 0), (-24, 0), (0, -28), (28, -18), (-28, -18),
)

PLACEMENT_PADDING = 3.0


def member_label_offsets(
    tangent: Offset,
    normal: Offset,
    across: float = 28.0,
    along: float = 32.0,
    far: float = 42.0,
) -> Tuple[Offset, ...]:
    """
    Candidates for a member-number square at the member midpoint: either
    side of the member, then along it, then further out on either side.
    """
    tx, ty = tangent
    nx, ny = normal
    return (
        (nx * across, ny * across),
        (-nx * across, -ny * across),
        (tx * along, ty * along),
        (-tx * along, -ty * along),
        (nx * far, ny * far),
        (-nx * far, -ny * far),
    )


def find_label_placement(
    x: float,
    y: float,
    size: float,
    obstacles: Iterable[Rect],
    offsets: Optional[Sequence[Offset]] = None,
) -> Placement:
    """
    First candidate around (x, y) whose ``size``×``size`` box is clear of
    every obstacle; the anchor itself if none is.
    """
    obstacles = tuple(obstacles)
    for dx, dy in (offsets if offsets is not None else DEFAULT_OFFSETS):
        cx, cy = x + dx, y + dy
        rect = Rect.from_center(cx, cy, size, size, PLACEMENT_PADDING)
        if not any(obstacle.overlaps(rect) for obstacle in obstacles):
            return Placement(cx, cy, rect)
    return Placement(x, y, Rect.from_center(x, y, size, size, PLACEMENT_PADDING), fallback=True)


def place_label(
    x: float,
    y: float,
    size: float,
    obstacles: Obstacles,
    offsets: Optional[Sequence[Offset]] = None,
    footprint: Optional[Callable[[Placement], Rect]] = None,
) -> Tuple[Placement, Obstacles]:
    """
    Place one label and return the obstacles with its rectangle added.

    ``footprint`` maps the placement to the rectangle actually occupied
    (e.g. the text bounds); by default the candidate box is used.
    """
    placement = find_label_placement(x, y, size, obstacles, offsets)
    occupied = footprint(placement) if footprint is not None else placement.rect
    return placement, tuple(obstacles) + (occupied,)


def place_labels(
    anchors: Iterable[Tuple[float, float, float, Optional[Sequence[Offset]]]],
    obstacles: Obstacles = (),
) -> Tuple[List[Placement], Obstacles]:
    """
    Fold ``place_label`` over (x, y, size, offsets) anchors in order.
    """
    placements = []
    for x, y, size, offsets in anchors:
        placement, obstacles = place_label(x, y, size, obstacles, offsets)
        placements.append(placement)
    return placements, obstacles


def label_size(metrics: TextMetrics, padding: float) -> float:
    """Side of the square (or circle diameter) that encloses the text."""
    return max(metrics.width, metrics.height) + padding


def text_obstacle(
    metrics: TextMetrics,
    x: float,
    y: float,
    align: str = "center",
    baseline: str = "alphabetic",
    padding: float = 4.0,
) -> Rect:
    """Bounding rectangle of text drawn at (x, y) with the given alignment."""
    if align == "center":
        x1 = x - metrics.width / 2
    elif align in ("right", "end"):
        x1 = x - metrics.width
    else:
        x1 = x

    if baseline == "middle":
        top = y - metrics.height / 2
    elif baseline in ("alphabetic", "ideographic"):
        top = y - metrics.ascent
    else:
        top = y

    return Rect(
        x1 - padding,
        top - padding,
        x1 + metrics.width + padding,
        top + metrics.height + padding,
    )


def circle_obstacle(cx: float, cy: float, radius: float, padding: float = 4.0) -> Rect:
    return Rect(cx - radius - padding, cy - radius - padding,
                cx + radius + padding, cy + radius + padding)
