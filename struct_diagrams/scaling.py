# struct_diagrams/scaling.py
"""
SCALE SOLVER: How Big to Draw the Response
==========================================

Two kinds of scale are resolved before anything is drawn.

1. DISPLACEMENT SCALE (dimensionless magnification)
   -------------------------------------------------
   Real deflections are millimetres on a structure of metres, so the
   deformed shape is magnified. A global *target* is estimated so that
   the largest nodal translation shows as 5% of the structure size:

       target = size * 0.05 / max_disp        (clamped to (0, 1e5])

   The target is then tightened per frame. Every member is sampled at
   21 positions; for each sample the pixel delta between the undeformed
   point and the unit-scaled deformed point tells how far the point
   travels per unit of scale. The largest scale that keeps every sample
   inside the frame margin is

       limit = min(available_distance / |pixel_delta|) * 0.98

   and the final scale is the minimum of the target and all frame limits.

2. PIXEL SCALE (pixels per unit of force or ratio)
   -----------------------------------------------
   Force and ratio envelopes are drawn as offsets perpendicular to the
   member. The initial pixel scale maps the global maximum magnitude to
   6% (forces) or 8% (ratios) of the smaller drawable dimension. Each
   frame then caps it so no offset leaves the frame:

       limit = min(distance_to_nearest_edge / |value|) * 0.95

GUARDS:
-------
Non-finite or non-positive inputs give 0 or the identity fallback.
Lengths are compared against 1e-9 and pixel deltas against 1e-6 before
any division.
"""

import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .config import CONFIG, DiagramConfig
from .frames import PlaneFrame
from .kinds import StressKind
from .model import DisplacementField, Member, MemberForce, Node, SectionCheck
from .projection import project
from .response import (
    LENGTH_EPS,
    member_deformation,
    member_length,
    sample_positions,
)

logger = logging.getLogger(__name__)

PIXEL_EPS = 1e-6

# (frame-local pixel x, pixel y, value)
CurveSample = Tuple[float, float, float]


# =============================================================================
# Displacement scale
# =============================================================================

def clamp_disp_scale(value: float, config: DiagramConfig = CONFIG) -> float:
    """Non-finite -> 1, non-positive -> 0, otherwise capped at ``disp_scale_max``."""
    if value is None or not math.isfinite(value):
        return 1.0
    if value <= 0:
        return 0.0
    return min(float(value), config.disp_scale_max)


def structure_size(nodes: Sequence[Node]) -> float:
    """Diagonal of the axis-aligned bounding box of all nodes."""
    if not nodes:
        return 0.0
    coords = np.array([n.coords() for n in nodes], dtype=float)
    extents = coords.max(axis=0) - coords.min(axis=0)
    return float(np.linalg.norm(extents))


def estimate_disp_scale(
    nodes: Sequence[Node],
    field: DisplacementField,
    manual: Optional[float] = None,
    config: DiagramConfig = CONFIG,
) -> float:
    """
    Global target magnification before frame limits are applied.

    Parameters:
    -----------
    nodes : sequence of Node
        Model nodes (used for the structure size).
    field : DisplacementField
        Nodal displacements. An empty field gives 0.
    manual : float, optional
        User override; bypasses estimation but is still clamped.

    Returns:
    --------
    float
        0 when there is nothing to magnify, otherwise a value in (0, 1e5].
    """
    if field.is_empty:
        return 0.0
    if manual is not None:
        return clamp_disp_scale(manual, config)

    max_disp = field.max_translation_component()
    if max_disp <= 1e-12:
        return 0.0

    size = structure_size(nodes)
    if size > 0:
        return clamp_disp_scale(size * config.disp_target_fraction / max_disp, config)
    return clamp_disp_scale(config.disp_fallback_scale, config)


def frame_disp_scale_limit(
    frame: PlaneFrame,
    nodes: Sequence[Node],
    members: Sequence[Member],
    field: DisplacementField,
    config: DiagramConfig = CONFIG,
) -> float:
    """
    Largest displacement scale that keeps every sampled point of the
    frame's members inside the drawable margin.

    Returns 0 if a sample already sits on or outside the margin in the
    direction it moves, and ``inf`` when nothing moves.
    """
    if frame.scale <= 0:
        return math.inf

    min_x, max_x = config.margin, config.frame_width - config.margin
    min_y, max_y = config.margin, config.frame_height - config.margin

    limit = math.inf
    for member_idx in frame.member_indices:
        member = members[member_idx]
        for xi in sample_positions(config.divisions):
            original = member_deformation(member, nodes, field, xi, 0.0)
            unit = member_deformation(member, nodes, field, xi, 1.0)
            if original is None or unit is None:
                continue

            ox, oy = frame.project_to_pixel(original)
            ux, uy = frame.project_to_pixel(unit)
            delta_x = ux - ox
            delta_y = uy - oy

            if abs(delta_x) > PIXEL_EPS:
                available = max_x - ox if delta_x > 0 else ox - min_x
                if available <= 0:
                    return 0.0
                limit = min(limit, available / abs(delta_x))

            if abs(delta_y) > PIXEL_EPS:
                available = max_y - oy if delta_y > 0 else oy - min_y
                if available <= 0:
                    return 0.0
                limit = min(limit, available / abs(delta_y))

    if not math.isfinite(limit) or limit <= 0:
        return math.inf
    return limit * config.disp_frame_safety


def solve_disp_scale(
    frames: Sequence[PlaneFrame],
    nodes: Sequence[Node],
    members: Sequence[Member],
    field: DisplacementField,
    manual: Optional[float] = None,
    config: DiagramConfig = CONFIG,
) -> float:
    """
    Final displacement scale: the target (or manual override) tightened
    by every frame limit.
    """
    scale = estimate_disp_scale(nodes, field, manual, config)

    limit = math.inf
    for frame in frames:
        limit = min(limit, frame_disp_scale_limit(frame, nodes, members, field, config))

    if math.isfinite(limit):
        if scale > 0:
            scale = clamp_disp_scale(min(scale, limit), config)
        elif manual is None:
            scale = clamp_disp_scale(limit, config)
    elif scale > 0:
        scale = clamp_disp_scale(scale, config)

    logger.info("Displacement scale resolved to %.2f (frame limit %s)", scale,
                f"{limit:.2f}" if math.isfinite(limit) else "none")
    return scale


# =============================================================================
# Pixel scale (force and ratio envelopes)
# =============================================================================

def global_stress_max(
    members: Sequence[Member],
    member_forces: Sequence[Optional[MemberForce]],
    kind: StressKind,
    axes: Iterable[str],
) -> float:
    """Largest signed end value over all members and the given bending axes."""
    axes = list(dict.fromkeys(axes))
    peak = 0.0
    for idx in range(len(members)):
        force = member_forces[idx] if idx < len(member_forces) else None
        if force is None:
            continue
        for axis in axes:
            peak = max(peak, kind.end_peak(force, axis))
    return peak


def global_ratio_max(
    checks: Sequence[Optional[SectionCheck]],
    member_indices: Optional[Iterable[int]] = None,
) -> float:
    """
    Largest ratio (sampled or governing) over the given members; all
    members when ``member_indices`` is None.
    """
    if member_indices is None:
        member_indices = range(len(checks))
    peak = 0.0
    for idx in set(member_indices):
        check = checks[idx] if 0 <= idx < len(checks) else None
        if check is None:
            continue
        peak = max(peak, check.peak, *check.ratios)
    return peak


def initial_pixel_scale(max_value: float, fraction: float, config: DiagramConfig = CONFIG) -> float:
    if not math.isfinite(max_value) or max_value <= 0:
        return 1.0
    return fraction * min(config.draw_width, config.draw_height) / max_value


def frame_pixel_scale_limit(
    frame: PlaneFrame,
    samples: Iterable[CurveSample],
) -> float:
    """
    Largest pixel scale for which every sample's offset stays inside the
    frame rectangle. ``samples`` are frame-local pixel points with their
    value; near-zero values are ignored.
    """
    limit = math.inf
    for px, py, value in samples:
        magnitude = abs(value)
        if magnitude < LENGTH_EPS:
            continue
        min_dist = min(px, frame.frame_width - px, py, frame.frame_height - py)
        if min_dist <= LENGTH_EPS:
            return 0.0
        limit = min(limit, min_dist / magnitude)
    return limit


def solve_pixel_scale(initial: float, limit: float, safety: float = 0.95) -> float:
    if math.isfinite(limit):
        return min(initial, limit * safety)
    return initial


# =============================================================================
# Sampled curves
# =============================================================================

def _projected_ends(frame: PlaneFrame, nodes: Sequence[Node], member: Member):
    if not (0 <= member.i < len(nodes) and 0 <= member.j < len(nodes)):
        return None
    return project(nodes[member.i], frame.plane), project(nodes[member.j], frame.plane)


def member_stress_curve(
    frame: PlaneFrame,
    nodes: Sequence[Node],
    member: Member,
    force: Optional[MemberForce],
    kind: StressKind,
    divisions: int = 20,
) -> List[CurveSample]:
    """
    Force values sampled along a member, positioned at the member's
    frame-local pixel points. Empty for a missing force or a degenerate
    member.
    """
    if force is None:
        return []
    ends = _projected_ends(frame, nodes, member)
    L = member_length(nodes, member)
    if ends is None or not math.isfinite(L) or L < LENGTH_EPS:
        return []

    (xi_, yi_), (xj_, yj_) = ends
    axis = frame.axis
    curve = []
    for xi in sample_positions(divisions):
        px, py = frame.to_pixel(xi_ + (xj_ - xi_) * xi, yi_ + (yj_ - yi_) * xi)
        curve.append((px, py, kind.value(force, L, float(xi), axis)))
    return curve


def member_ratio_curve(
    frame: PlaneFrame,
    nodes: Sequence[Node],
    member: Member,
    check: Optional[SectionCheck],
) -> List[CurveSample]:
    """Capacity ratios spread evenly from end i to end j."""
    if check is None or not check.ratios:
        return []
    ends = _projected_ends(frame, nodes, member)
    if ends is None:
        return []

    (xi_, yi_), (xj_, yj_) = ends
    count = len(check.ratios)
    positions = np.linspace(0.0, 1.0, count) if count > 1 else np.zeros(1)
    curve = []
    for t, ratio in zip(positions, check.ratios):
        px, py = frame.to_pixel(xi_ + (xj_ - xi_) * t, yi_ + (yj_ - yi_) * t)
        curve.append((px, py, float(ratio)))
    return curve
