# struct_diagrams/frames.py
"""
PLANE GROUPER: Which Structural Planes Get a Diagram
====================================================

A 3D skeletal model is drawn as a set of flat "frames", one per distinct
plane coordinate that actually carries members and a non-zero response:

    Z
    ↑   ●───────●───────●        xz frame at y = 0
    │   │       │       │        xz frame at y = 6
    │   │       │       │        yz frames at x = 0, 5, 10
    │   ●       ●       ●        xy frame at z = 3.5 (the roof)
    └──────────────────────→ X

For every plane (xy, xz, yz) the distinct out-of-plane coordinates are
collected on a 0.01 grid. A candidate is kept when

1. at least one member has both end nodes in the plane (within tolerance)
2. the diagram's response is non-trivial somewhere in the plane

Each kept frame carries its visible nodes/members, the bounding box of
their 2D projection, its center and the base geometric scale (pixels per
metre) that fits the model into the drawable area.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .components import axis_for_plane
from .config import CONFIG, DiagramConfig
from .kinds import StressKind
from .model import DisplacementField, Member, MemberForce, Node, SectionCheck
from .projection import PLANES, PlaneMode, out_of_plane, plane_coordinates, project

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaneFrame:
    """One projection plane instance selected for display."""
    plane: PlaneMode
    coordinate: float
    node_indices: Tuple[int, ...]
    member_indices: Tuple[int, ...]
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    scale: float
    frame_width: float
    frame_height: float

    @property
    def center(self) -> Tuple[float, float]:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    @property
    def axis(self) -> str:
        """Bending axis of force diagrams drawn in this frame."""
        return axis_for_plane(self.plane.value)

    @property
    def title(self) -> str:
        axis_name = self.plane.normal_axis.upper()
        return f"{self.plane.value.upper()} plane ({axis_name}={self.coordinate:.2f}m)"

    def to_pixel(
        self,
        px: float,
        py: float,
        origin: Tuple[float, float] = (0.0, 0.0),
    ) -> Tuple[float, float]:
        """
        Map projected model coordinates to canvas pixels.

        ``origin`` is the frame's top-left corner on the canvas; with the
        default the result is frame-local. Pixel y grows downward.
        """
        cx, cy = self.center
        return (
            origin[0] + self.frame_width / 2 + (px - cx) * self.scale,
            origin[1] + self.frame_height / 2 - (py - cy) * self.scale,
        )

    def project_to_pixel(self, point, origin: Tuple[float, float] = (0.0, 0.0)) -> Tuple[float, float]:
        px, py = project(point, self.plane)
        return self.to_pixel(px, py, origin)


def base_scale(width: float, height: float, config: DiagramConfig = CONFIG) -> float:
    """
    Pixels per model unit so the bounding box fills ``fill_fraction`` of
    the drawable area. A zero extent (a straight member) does not
    constrain the scale; with no extent at all the scale is 1.
    """
    limits = []
    if width > 0:
        limits.append(config.draw_width / width)
    if height > 0:
        limits.append(config.draw_height / height)
    if not limits:
        return 1.0
    return min(limits) * config.fill_fraction


def frame_geometry(
    nodes: Sequence[Node],
    members: Sequence[Member],
    plane: PlaneMode,
    coordinate: float,
    config: DiagramConfig = CONFIG,
) -> Optional[PlaneFrame]:
    """
    Build the frame for ``plane`` at ``coordinate``; ``None`` when no
    member lies in it.
    """
    tol = config.coord_tolerance
    visible_nodes = [
        idx for idx, node in enumerate(nodes)
        if abs(out_of_plane(node, plane) - coordinate) < tol
    ]
    node_set = set(visible_nodes)
    visible_members = [
        idx for idx, m in enumerate(members)
        if m.i in node_set and m.j in node_set
    ]
    if not visible_members:
        return None

    xs, ys = [], []
    for idx in visible_members:
        m = members[idx]
        for end in (m.i, m.j):
            px, py = project(nodes[end], plane)
            xs.append(px)
            ys.append(py)

    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)

    return PlaneFrame(
        plane=plane,
        coordinate=coordinate,
        node_indices=tuple(visible_nodes),
        member_indices=tuple(visible_members),
        min_x=min_x,
        max_x=max_x,
        min_y=min_y,
        max_y=max_y,
        scale=base_scale(max_x - min_x, max_y - min_y, config),
        frame_width=config.frame_width,
        frame_height=config.frame_height,
    )


def group_frames(
    nodes: Sequence[Node],
    members: Sequence[Member],
    qualifies: Callable[[PlaneFrame], bool],
    config: DiagramConfig = CONFIG,
) -> List[PlaneFrame]:
    """
    All frames (planes xy, xz, yz; coordinates ascending) that contain
    members and pass ``qualifies``.
    """
    frames: List[PlaneFrame] = []
    if not nodes or not members:
        return frames

    for plane in PLANES:
        for coordinate in plane_coordinates(nodes, plane, config.coord_tolerance):
            frame = frame_geometry(nodes, members, plane, coordinate, config)
            if frame is None:
                continue
            if not qualifies(frame):
                logger.debug("Skipping %s=%.2f: response below threshold", plane.value, coordinate)
                continue
            frames.append(frame)
    return frames


def displacement_frames(
    nodes: Sequence[Node],
    members: Sequence[Member],
    field: DisplacementField,
    config: DiagramConfig = CONFIG,
) -> List[PlaneFrame]:
    """Frames in which some node moves more than ``disp_threshold_mm``."""
    if field.is_empty:
        return []

    def qualifies(frame: PlaneFrame) -> bool:
        return any(
            field.magnitude(idx) * config.length_to_mm > config.disp_threshold_mm
            for idx in frame.node_indices
        )

    return group_frames(nodes, members, qualifies, config)


def stress_frames(
    nodes: Sequence[Node],
    members: Sequence[Member],
    member_forces: Sequence[Optional[MemberForce]],
    kind: StressKind,
    config: DiagramConfig = CONFIG,
) -> List[PlaneFrame]:
    """Frames in which some member's end value exceeds ``stress_threshold``."""

    def qualifies(frame: PlaneFrame) -> bool:
        axis = frame.axis
        for idx in frame.member_indices:
            force = member_forces[idx] if idx < len(member_forces) else None
            if force is not None and kind.end_peak(force, axis) > config.stress_threshold:
                return True
        return False

    return group_frames(nodes, members, qualifies, config)


def ratio_frames(
    nodes: Sequence[Node],
    members: Sequence[Member],
    checks: Sequence[Optional[SectionCheck]],
    config: DiagramConfig = CONFIG,
) -> List[PlaneFrame]:
    """Frames in which some member's capacity ratio exceeds ``ratio_threshold``."""

    def qualifies(frame: PlaneFrame) -> bool:
        for idx in frame.member_indices:
            check = checks[idx] if idx < len(checks) else None
            if check is not None and check.peak > config.ratio_threshold:
                return True
        return False

    return group_frames(nodes, members, qualifies, config)
