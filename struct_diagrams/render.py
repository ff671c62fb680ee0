# struct_diagrams/render.py
"""
DIAGRAM RENDERER: Deformation, Force and Capacity-Ratio Diagrams
================================================================

PURPOSE:
--------
Turns a solved model into one wide image: every qualifying structural
plane gets its own frame, laid out side by side.

    ┌──────────────────────────────────────────────────────────────┐
    │   XY plane (Z=0.00m)        XZ plane (Y=0.00m)        ...    │  header
    │   Bending Moment Diagram    Bending Moment Diagram           │
    │  ┌────────────────────┐   ┌────────────────────┐             │
    │  │                    │   │                    │             │  frames
    │  └────────────────────┘   └────────────────────┘             │
    └──────────────────────────────────────────────────────────────┘

Per diagram the pipeline is the same:

1. Group planes into frames (frames.py); draw nothing if none qualify
2. Size the surface for all frames at the display's pixel ratio
3. Resolve the scale (scaling.py)
4. Per frame: background, border, undeformed members, the response
   curve, node markers, number callouts and value text

Each call recomputes everything from its inputs. Label obstacles live
in a tuple that is created per frame and threaded through placement.

COLOR POLICY:
-------------
- Deformed shape: red over a light-grey undeformed structure
- Force envelopes: red fill for positive values, blue for negative
- Capacity ratio: green < 0.5 ≤ light green < 0.7 ≤ yellow < 0.9 ≤
  orange < 1.0 ≤ red
"""

import logging
import math
from dataclasses import dataclass, field
from itertools import chain
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from .config import CONFIG, DiagramConfig
from .frames import PlaneFrame, displacement_frames, ratio_frames, stress_frames
from .kinds import DiagramKind, StressKind, stress_kind
from .layout import (
    DEFAULT_OFFSETS,
    FORCE_NODE_LABEL_OFFSETS,
    NODE_LABEL_OFFSETS,
    Obstacles,
    Offset,
    Placement,
    Rect,
    circle_obstacle,
    label_size,
    member_label_offsets,
    place_label,
    text_obstacle,
)
from .model import (
    as_displacement_field,
    as_member_forces,
    as_members,
    as_nodes,
    as_section_checks,
)
from .response import member_deformation, sample_positions
from .scaling import (
    CurveSample,
    frame_pixel_scale_limit,
    global_ratio_max,
    global_stress_max,
    initial_pixel_scale,
    member_ratio_curve,
    member_stress_curve,
    solve_disp_scale,
    solve_pixel_scale,
)
from .surface import DrawingSurface

logger = logging.getLogger(__name__)

# =============================================================================
# COLOR PALETTE
# =============================================================================

COLORS = {
    # Frame chrome
    'title': '#333333',
    'frame_background': '#ffffff',
    'frame_border': '#cccccc',

    # Structure
    'undeformed': '#cccccc',
    'deformed': '#ff0000',
    'node': '#0000ff',
    'node_displacement': '#00008b',

    # Force envelopes
    'positive_fill': '#ff6464',
    'negative_fill': '#6464ff',
    'envelope': '#ff0000',
    'peak_positive': '#cc0000',
    'peak_negative': '#0000cc',
    'marker_positive': '#ff0000',
    'marker_negative': '#0000ff',

    # Callouts
    'text': '#000000',
    'outline': '#ffffff',
    'label_background': '#ffffff',
    'label_border': '#222222',
    'overstressed': '#ff0000',
}

RATIO_COLORS = (
    (0.5, '#00ff00'),   # green
    (0.7, '#90ee90'),   # light green
    (0.9, '#ffff00'),   # yellow
    (1.0, '#ffa500'),   # orange
)
RATIO_FAIL_COLOR = '#ff0000'


def ratio_color(ratio: float) -> str:
    for bound, color in RATIO_COLORS:
        if ratio < bound:
            return color
    return RATIO_FAIL_COLOR


@dataclass(frozen=True)
class LabelStyle:
    """Number-callout geometry for one diagram family."""
    node_offsets: Tuple[Offset, ...]
    member_distances: Tuple[float, float, float]  # across, along, far
    node_radius: float


DEFORMATION_LABELS = LabelStyle(NODE_LABEL_OFFSETS, (28.0, 32.0, 42.0), 6.0)
FORCE_LABELS = LabelStyle(FORCE_NODE_LABEL_OFFSETS, (28.0, 30.0, 40.0), 4.0)
RATIO_LABELS = LabelStyle(FORCE_NODE_LABEL_OFFSETS, (26.0, 32.0, 40.0), 4.0)


@dataclass
class RenderResult:
    """
    What a render call produced.

    ``scale`` is the displacement scale for deformation diagrams and the
    initial pixel scale for force/ratio diagrams; ``frame_scales`` holds
    the scale actually used in each frame.
    """
    kind: DiagramKind
    frames: List[PlaneFrame] = field(default_factory=list)
    scale: float = 0.0
    frame_scales: List[float] = field(default_factory=list)
    width: float = 0.0
    height: float = 0.0
    placements: List[Tuple[Placement, ...]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.frames


@dataclass(frozen=True)
class _MemberScreen:
    index: int
    mid: Tuple[float, float]
    tangent: Tuple[float, float]
    normal: Tuple[float, float]


# =============================================================================
# Shared drawing steps
# =============================================================================

def _prepare_canvas(surface: DrawingSurface, n_frames: int, config: DiagramConfig) -> Tuple[float, float]:
    width, height = config.canvas_size(n_frames)
    surface.set_size(width, height, config.pixel_ratio)
    surface.clear()
    return width, height


def _begin_frame(
    surface: DrawingSurface,
    frame: PlaneFrame,
    origin: Tuple[float, float],
    subtitle: str,
    config: DiagramConfig,
) -> None:
    """Title, subtitle, background and border; leaves the frame clip active."""
    x, y = origin
    center_x = x + config.frame_width / 2
    surface.draw_text(frame.title, center_x, config.frame_padding + 25, COLORS['title'],
                      config.title_font_size, bold=True)
    surface.draw_text(subtitle, center_x, config.frame_padding + 50, COLORS['title'],
                      config.subtitle_font_size)

    surface.fill_rect(x, y, config.frame_width, config.frame_height, COLORS['frame_background'])
    surface.stroke_rect(x, y, config.frame_width, config.frame_height, COLORS['frame_border'], 2)

    surface.save()
    surface.clip_rect(x, y, config.frame_width, config.frame_height)


def _draw_undeformed(
    surface: DrawingSurface,
    frame: PlaneFrame,
    nodes,
    members,
    origin: Tuple[float, float],
) -> List[_MemberScreen]:
    screens = []
    for idx in frame.member_indices:
        member = members[idx]
        p1 = frame.project_to_pixel(nodes[member.i], origin)
        p2 = frame.project_to_pixel(nodes[member.j], origin)
        surface.stroke_path([p1, p2], COLORS['undeformed'], 1)

        dx = p2[0] - p1[0]
        dy = p2[1] - p1[1]
        length = math.hypot(dx, dy) or 1.0
        screens.append(_MemberScreen(
            index=idx,
            mid=((p1[0] + p2[0]) / 2, (p1[1] + p2[1]) / 2),
            tangent=(dx / length, dy / length),
            normal=(-dy / length, dx / length),
        ))
    return screens


def _node_points(frame: PlaneFrame, nodes, origin) -> List[Tuple[int, float, float]]:
    return [(idx, *frame.project_to_pixel(nodes[idx], origin)) for idx in frame.node_indices]


def _draw_number_labels(
    surface: DrawingSurface,
    node_points: Sequence[Tuple[int, float, float]],
    member_screens: Sequence[_MemberScreen],
    obstacles: Obstacles,
    style: LabelStyle,
    config: DiagramConfig,
) -> Tuple[List[Placement], Obstacles]:
    """Node number circles first, then member number squares, in index order."""
    placements = []
    font = config.number_font_size

    for node_idx, x, y in node_points:
        text = str(node_idx + 1)
        diameter = label_size(surface.measure_text(text, font, bold=True), config.label_padding)
        placement, obstacles = place_label(
            x, y, diameter, obstacles, style.node_offsets,
            footprint=lambda p, d=diameter: Rect.from_center(p.cx, p.cy, d, d, 0),
        )
        radius = diameter / 2
        surface.fill_circle(placement.cx, placement.cy, radius, COLORS['label_background'], alpha=0.92)
        surface.stroke_circle(placement.cx, placement.cy, radius, COLORS['label_border'], 1.5)
        surface.draw_text(text, placement.cx, placement.cy, COLORS['text'], font,
                          bold=True, baseline="middle")
        placements.append(placement)

    across, along, far = style.member_distances
    for screen in member_screens:
        text = str(screen.index + 1)
        size = label_size(surface.measure_text(text, font, bold=True), config.label_padding)
        offsets = member_label_offsets(screen.tangent, screen.normal, across, along, far)
        placement, obstacles = place_label(screen.mid[0], screen.mid[1], size, obstacles, offsets)
        left, top = placement.cx - size / 2, placement.cy - size / 2
        surface.fill_rect(left, top, size, size, COLORS['label_background'], alpha=0.92)
        surface.stroke_rect(left, top, size, size, COLORS['label_border'], 1.5)
        surface.draw_text(text, placement.cx, placement.cy, COLORS['text'], font,
                          bold=True, baseline="middle")
        placements.append(placement)

    return placements, obstacles


def _draw_value_text(
    surface: DrawingSurface,
    text: str,
    x: float,
    y: float,
    obstacles: Obstacles,
    color: str,
    font_size: float,
    padding: float,
    outline_width: float,
) -> Tuple[Placement, Obstacles]:
    """Outlined value text placed clear of earlier labels."""
    metrics = surface.measure_text(text, font_size, bold=True)
    placement, obstacles = place_label(
        x, y, label_size(metrics, padding), obstacles, DEFAULT_OFFSETS,
        footprint=lambda p: text_obstacle(metrics, p.cx, p.cy),
    )
    surface.draw_text(text, placement.cx, placement.cy, color, font_size, bold=True,
                      outline=COLORS['outline'], outline_width=outline_width)
    return placement, obstacles


def _envelope_normal(curve: Sequence[CurveSample]) -> Optional[Tuple[float, float]]:
    """Unit normal (pixel space) on the positive-value side of a member."""
    dx = curve[-1][0] - curve[0][0]
    dy = curve[-1][1] - curve[0][1]
    length = math.hypot(dx, dy)
    if length == 0:
        return None
    return (dy / length, -dx / length)


def _offset_points(curve, normal, scale, origin):
    """Canvas points on the member and at value * scale along the normal."""
    ox, oy = origin
    nx, ny = normal
    base, offset = [], []
    for px, py, value in curve:
        base.append((ox + px, oy + py))
        offset.append((ox + px + nx * value * scale, oy + py + ny * value * scale))
    return base, offset


def _empty(kind: DiagramKind) -> RenderResult:
    return RenderResult(kind=kind)


# =============================================================================
# Deformation diagram
# =============================================================================

def draw_displacement_diagram(
    surface: Optional[DrawingSurface],
    nodes,
    members,
    displacements,
    member_forces=None,
    manual_scale: Optional[float] = None,
    config: Optional[DiagramConfig] = None,
    on_scale: Optional[Callable[[float], None]] = None,
) -> RenderResult:
    """
    Draw the deformed shape of every plane that moves.

    Parameters:
    -----------
    surface : DrawingSurface or None
        Target surface. ``None`` draws nothing.
    nodes, members : sequences of Node/Member (or their dict forms)
        Model geometry.
    displacements : sequence of float or DisplacementField
        Flat global vector, 3 or 6 values per node. A length that does not
        match the node count raises ``DisplacementFieldError``.
    member_forces : optional
        Accepted for interface symmetry; the deformed shape uses nodal
        displacements and rotations only.
    manual_scale : float, optional
        Magnification override (still limited by the frame margins).
    on_scale : callable, optional
        Called with the resolved displacement scale.

    Returns:
    --------
    RenderResult
        Empty (and the surface untouched) when nothing qualifies.
    """
    config = config or CONFIG
    kind = DiagramKind.DEFORMATION
    if surface is None:
        logger.debug("No drawing surface; skipping deformation diagram")
        return _empty(kind)

    nodes = as_nodes(nodes)
    members = as_members(members)
    if not nodes or not members:
        logger.debug("Empty model; skipping deformation diagram")
        return _empty(kind)

    disp_field = as_displacement_field(displacements, len(nodes))
    frames = displacement_frames(nodes, members, disp_field, config)
    if not frames:
        logger.debug("No plane moves more than %.3f mm", config.disp_threshold_mm)
        return _empty(kind)

    scale = solve_disp_scale(frames, nodes, members, disp_field, manual_scale, config)
    if on_scale is not None:
        on_scale(scale)

    width, height = _prepare_canvas(surface, len(frames), config)
    style = DEFORMATION_LABELS
    all_placements = []

    for index, frame in enumerate(frames):
        origin = config.frame_origin(index)
        _begin_frame(surface, frame, origin, f"Displacement scale: {scale:.2f}", config)
        member_screens = _draw_undeformed(surface, frame, nodes, members, origin)

        for member_idx in frame.member_indices:
            points = []
            for xi in sample_positions(config.divisions):
                deformed = member_deformation(members[member_idx], nodes, disp_field, xi, scale)
                if deformed is not None:
                    points.append(frame.project_to_pixel(deformed, origin))
            surface.stroke_path(points, COLORS['deformed'], 2.5)

        obstacles: Obstacles = ()
        node_points = _node_points(frame, nodes, origin)
        for node_idx, x, y in node_points:
            surface.fill_circle(x, y, style.node_radius, COLORS['node'])
            obstacles += (circle_obstacle(x, y, style.node_radius),)

            disp_mm = disp_field.magnitude(node_idx) * config.length_to_mm
            if disp_mm > config.node_disp_label_threshold_mm:
                text = f"{disp_mm:.1f}mm"
                text_y = y - 15
                surface.draw_text(text, x, text_y, COLORS['node_displacement'],
                                  config.value_font_size, bold=True,
                                  outline=COLORS['outline'], outline_width=5)
                metrics = surface.measure_text(text, config.value_font_size, bold=True)
                obstacles += (text_obstacle(metrics, x, text_y),)

        placements, _ = _draw_number_labels(surface, node_points, member_screens,
                                            obstacles, style, config)
        all_placements.append(tuple(placements))
        surface.restore()

    logger.info("Rendered %d deformation frame(s) at scale %.2f", len(frames), scale)
    return RenderResult(kind, frames, scale, [scale] * len(frames), width, height, all_placements)


# =============================================================================
# Force diagrams (axial / shear / moment)
# =============================================================================

def _draw_force_envelope(
    surface: DrawingSurface,
    curve: Sequence[CurveSample],
    pixel_scale: float,
    origin: Tuple[float, float],
    obstacles: Obstacles,
    config: DiagramConfig,
) -> Tuple[List[Placement], Obstacles]:
    normal = _envelope_normal(curve)
    if normal is None:
        return [], obstacles

    values = [sample[2] for sample in curve]
    base, offset = _offset_points(curve, normal, pixel_scale, origin)

    for k in range(len(curve) - 1):
        average = (values[k] + values[k + 1]) / 2
        color = COLORS['positive_fill'] if average >= 0 else COLORS['negative_fill']
        surface.fill_polygon([base[k], offset[k], offset[k + 1], base[k + 1]], color, alpha=0.5)
    surface.stroke_path(offset, COLORS['envelope'], 1.5)

    placements = []
    threshold = config.value_label_threshold
    for k in (0, len(curve) - 1):
        if abs(values[k]) > threshold:
            placement, obstacles = _draw_value_text(
                surface, f"{values[k]:.2f}", offset[k][0], offset[k][1] - 8, obstacles,
                COLORS['text'], config.value_font_size, config.value_label_padding, 5,
            )
            placements.append(placement)

    peak_index, peak_abs = 0, 0.0
    for k, value in enumerate(values):
        if abs(value) > peak_abs:
            peak_index, peak_abs = k, abs(value)

    # Peaks at the ends are already labelled by the end values
    if 0 < peak_index < len(curve) - 1 and peak_abs > threshold:
        value = values[peak_index]
        mx, my = offset[peak_index]
        positive = value >= 0
        surface.fill_circle(mx, my, 5, COLORS['marker_positive'] if positive else COLORS['marker_negative'])
        surface.stroke_circle(mx, my, 5, COLORS['text'], 1)
        placement, obstacles = _draw_value_text(
            surface, f"Max: {value:.2f}", mx, my - 12, obstacles,
            COLORS['peak_positive'] if positive else COLORS['peak_negative'],
            config.peak_font_size, config.peak_label_padding, 4,
        )
        placements.append(placement)

    return placements, obstacles


def draw_stress_diagram(
    surface: Optional[DrawingSurface],
    nodes,
    members,
    member_forces,
    kind: Union[str, DiagramKind, StressKind],
    title: Optional[str] = None,
    config: Optional[DiagramConfig] = None,
) -> RenderResult:
    """
    Draw the axial, shear or moment envelope of every plane that carries
    a non-trivial force.

    The envelope is drawn perpendicular to each member; its pixel scale
    maps the largest end value to 6% of the drawable area and is capped
    per frame so no offset leaves the frame.
    """
    config = config or CONFIG
    table_row = kind if isinstance(kind, StressKind) else stress_kind(kind)
    if surface is None:
        logger.debug("No drawing surface; skipping %s diagram", table_row.kind.value)
        return _empty(table_row.kind)

    nodes = as_nodes(nodes)
    members = as_members(members)
    if not nodes or not members:
        return _empty(table_row.kind)

    forces = as_member_forces(member_forces, len(members))
    frames = stress_frames(nodes, members, forces, table_row, config)
    if not frames:
        logger.debug("No plane carries %s above %.3f", table_row.kind.value, config.stress_threshold)
        return _empty(table_row.kind)

    max_value = global_stress_max(members, forces, table_row, [f.axis for f in frames])
    initial = initial_pixel_scale(max_value, table_row.pixel_fraction(config), config)

    width, height = _prepare_canvas(surface, len(frames), config)
    subtitle = title or table_row.title
    frame_scales, all_placements = [], []

    for index, frame in enumerate(frames):
        origin = config.frame_origin(index)
        curves: Dict[int, List[CurveSample]] = {
            idx: member_stress_curve(frame, nodes, members[idx], forces[idx], table_row,
                                     config.divisions)
            for idx in frame.member_indices
        }
        limit = frame_pixel_scale_limit(frame, chain.from_iterable(curves.values()))
        pixel_scale = solve_pixel_scale(initial, limit, config.pixel_scale_safety)
        frame_scales.append(pixel_scale)

        _begin_frame(surface, frame, origin, subtitle, config)

        node_points = _node_points(frame, nodes, origin)
        obstacles: Obstacles = tuple(
            circle_obstacle(x, y, FORCE_LABELS.node_radius) for _, x, y in node_points
        )
        member_screens = _draw_undeformed(surface, frame, nodes, members, origin)

        placements = []
        for idx in frame.member_indices:
            if not curves[idx]:
                continue
            placed, obstacles = _draw_force_envelope(
                surface, curves[idx], pixel_scale, origin, obstacles, config,
            )
            placements.extend(placed)

        labels, _ = _draw_number_labels(surface, node_points, member_screens,
                                        obstacles, FORCE_LABELS, config)
        placements.extend(labels)
        all_placements.append(tuple(placements))
        surface.restore()

    logger.info("Rendered %d %s frame(s), max |value| %.3f", len(frames),
                table_row.kind.value, max_value)
    return RenderResult(table_row.kind, frames, initial, frame_scales, width, height, all_placements)


# =============================================================================
# Capacity-ratio diagram
# =============================================================================

def _ratio_peak(curve: Sequence[CurveSample]) -> int:
    index, best = 0, 0.0
    for k, (_, _, ratio) in enumerate(curve):
        if ratio > best:
            index, best = k, ratio
    return index


def draw_capacity_ratio_diagram(
    surface: Optional[DrawingSurface],
    nodes,
    members,
    checks,
    config: Optional[DiagramConfig] = None,
) -> RenderResult:
    """
    Draw sampled capacity ratios as a coloured envelope along each member.

    The fill colour follows the member's governing ratio, the outline
    follows the local ratio, and the governing ratio is marked and
    printed (red above 1.0).
    """
    config = config or CONFIG
    kind = DiagramKind.CAPACITY_RATIO
    if surface is None:
        logger.debug("No drawing surface; skipping capacity-ratio diagram")
        return _empty(kind)

    nodes = as_nodes(nodes)
    members = as_members(members)
    if not nodes or not members:
        return _empty(kind)

    checks = as_section_checks(checks, len(members))
    frames = ratio_frames(nodes, members, checks, config)
    if not frames:
        logger.debug("No plane has a capacity ratio above %.3f", config.ratio_threshold)
        return _empty(kind)

    drawn = {idx for frame in frames for idx in frame.member_indices}
    governing = max((checks[idx].peak for idx in drawn if checks[idx] is not None), default=0.0)
    initial = initial_pixel_scale(global_ratio_max(checks, drawn), config.ratio_pixel_fraction,
                                  config)

    width, height = _prepare_canvas(surface, len(frames), config)
    subtitle = f"Capacity Ratio Diagram (max: {governing:.3f})"
    frame_scales, all_placements = [], []

    for index, frame in enumerate(frames):
        origin = config.frame_origin(index)
        curves = {idx: member_ratio_curve(frame, nodes, members[idx], checks[idx])
                  for idx in frame.member_indices}

        # The governing-ratio marker sits at the sampled peak, offset by max_ratio
        samples = []
        for idx, curve in curves.items():
            samples.extend(curve)
            if curve:
                px, py, _ = curve[_ratio_peak(curve)]
                samples.append((px, py, checks[idx].peak))
        pixel_scale = solve_pixel_scale(initial, frame_pixel_scale_limit(frame, samples),
                                        config.pixel_scale_safety)
        frame_scales.append(pixel_scale)

        _begin_frame(surface, frame, origin, subtitle, config)

        node_points = _node_points(frame, nodes, origin)
        obstacles: Obstacles = tuple(
            circle_obstacle(x, y, RATIO_LABELS.node_radius) for _, x, y in node_points
        )
        member_screens = _draw_undeformed(surface, frame, nodes, members, origin)

        for idx in frame.member_indices:
            curve = curves[idx]
            if not curve:
                continue
            normal = _envelope_normal(curve) if len(curve) > 1 else None
            if normal is None:
                continue
            check = checks[idx]
            ratios = [sample[2] for sample in curve]
            base, offset = _offset_points(curve, normal, pixel_scale, origin)

            surface.fill_polygon([base[0]] + offset + [base[-1]], ratio_color(check.peak), alpha=0.6)
            for k in range(len(curve) - 1):
                average = (ratios[k] + ratios[k + 1]) / 2
                surface.stroke_path([offset[k], offset[k + 1]], ratio_color(average), 3)

            peak_index = _ratio_peak(curve)
            nx, ny = normal
            bx, by = base[peak_index]
            mx = bx + nx * check.peak * pixel_scale
            my = by + ny * check.peak * pixel_scale
            surface.fill_circle(mx, my, 6, ratio_color(check.peak))
            surface.stroke_circle(mx, my, 6, COLORS['text'], 2)

            text = f"{check.peak:.3f}"
            text_color = COLORS['overstressed'] if check.peak > 1.0 else COLORS['text']
            surface.draw_text(text, mx, my - 12, text_color, config.value_font_size, bold=True,
                              outline=COLORS['outline'], outline_width=5)
            metrics = surface.measure_text(text, config.value_font_size, bold=True)
            obstacles += (text_obstacle(metrics, mx, my - 12),)

        placements, _ = _draw_number_labels(surface, node_points, member_screens,
                                            obstacles, RATIO_LABELS, config)
        all_placements.append(tuple(placements))
        surface.restore()

    logger.info("Rendered %d capacity-ratio frame(s), governing ratio %.3f", len(frames), governing)
    return RenderResult(kind, frames, initial, frame_scales, width, height, all_placements)


# =============================================================================
# Dispatch
# =============================================================================

def draw_diagram(
    kind: Union[str, DiagramKind],
    surface: Optional[DrawingSurface],
    nodes,
    members,
    displacements=None,
    member_forces=None,
    checks=None,
    manual_scale: Optional[float] = None,
    title: Optional[str] = None,
    config: Optional[DiagramConfig] = None,
    on_scale: Optional[Callable[[float], None]] = None,
) -> RenderResult:
    """Render any diagram kind; unknown kinds raise ``ValueError``."""
    kind = DiagramKind.parse(kind)
    if kind is DiagramKind.DEFORMATION:
        return draw_displacement_diagram(surface, nodes, members, displacements, member_forces,
                                         manual_scale=manual_scale, config=config, on_scale=on_scale)
    if kind is DiagramKind.CAPACITY_RATIO:
        return draw_capacity_ratio_diagram(surface, nodes, members, checks, config=config)
    return draw_stress_diagram(surface, nodes, members, member_forces, kind, title=title, config=config)
