# File: tests/test_scaling.py
"""
TEST: Scale Solver
==================

Validates:

1. Displacement target estimate and clamping
2. Frame limits: deformed shape stays inside the drawable margin
3. Pixel-scale initial value, per-frame cap and safety factor
4. Sampled force and ratio curves
"""

import math
from dataclasses import replace

import numpy as np
import pytest

from struct_diagrams.config import CONFIG
from struct_diagrams.frames import displacement_frames, frame_geometry
from struct_diagrams.kinds import stress_kind
from struct_diagrams.model import (
    DisplacementField,
    SectionCheck,
    as_member_forces,
    as_members,
    as_nodes,
)
from struct_diagrams.projection import PlaneMode
from struct_diagrams.response import member_deformation, sample_positions
from struct_diagrams.scaling import (
    clamp_disp_scale,
    estimate_disp_scale,
    frame_disp_scale_limit,
    frame_pixel_scale_limit,
    global_ratio_max,
    global_stress_max,
    initial_pixel_scale,
    member_ratio_curve,
    member_stress_curve,
    solve_disp_scale,
    solve_pixel_scale,
    structure_size,
)


def _beam(dy):
    nodes = as_nodes([{"x": 0.0}, {"x": 4.0}])
    members = as_members([{"i": 0, "j": 1}])
    field = DisplacementField([0.0, 0.0, 0.0, 0.0, dy, 0.0], len(nodes))
    return nodes, members, field


# =============================================================================
# Displacement scale
# =============================================================================

@pytest.mark.parametrize("value, expected", [
    (float("nan"), 1.0),
    (float("inf"), 1.0),
    (-3.0, 0.0),
    (0.0, 0.0),
    (250.0, 250.0),
    (5e6, CONFIG.disp_scale_max),
])
def test_clamp_disp_scale(value, expected):
    assert clamp_disp_scale(value) == expected


def test_structure_size_is_bbox_diagonal():
    nodes = as_nodes([{"x": 0.0}, {"x": 3.0, "y": 4.0}])
    assert np.isclose(structure_size(nodes), 5.0)
    assert structure_size([]) == 0.0


def test_estimate_target():
    """4 m beam, 10 mm max translation: 4 * 0.05 / 0.01 = 20."""
    nodes, _, field = _beam(0.01)
    assert np.isclose(estimate_disp_scale(nodes, field), 20.0)


def test_estimate_edge_cases():
    nodes, _, _ = _beam(0.01)

    empty = DisplacementField([], len(nodes))
    assert estimate_disp_scale(nodes, empty) == 0.0

    still = DisplacementField([0.0] * 6, len(nodes))
    assert estimate_disp_scale(nodes, still) == 0.0

    # Single point: no size to relate to, fallback magnification
    point = as_nodes([{"x": 1.0}])
    moving = DisplacementField([0.0, 0.01, 0.0], 1)
    assert estimate_disp_scale(point, moving) == CONFIG.disp_fallback_scale


def test_manual_scale_is_clamped_not_estimated():
    nodes, _, field = _beam(0.01)
    assert estimate_disp_scale(nodes, field, manual=50.0) == 50.0
    assert estimate_disp_scale(nodes, field, manual=1e9) == CONFIG.disp_scale_max
    assert estimate_disp_scale(nodes, field, manual=-2.0) == 0.0


def test_small_displacement_keeps_target():
    """Frame limit is far above the target, so the target wins."""
    nodes, members, field = _beam(0.01)
    frames = displacement_frames(nodes, members, field)

    scale = solve_disp_scale(frames, nodes, members, field)
    assert np.isclose(scale, 20.0)


def test_manual_zero_stays_zero():
    nodes, members, field = _beam(0.01)
    frames = displacement_frames(nodes, members, field)
    assert solve_disp_scale(frames, nodes, members, field, manual=0.0) == 0.0


def test_deformed_shape_stays_inside_margin(portal_2d):
    """
    An oversized manual scale is cut back by the frame limits so every
    sampled deformed point lies within the drawable margin.
    """
    raw_nodes, raw_members, displacements, _, _ = portal_2d
    nodes, members = as_nodes(raw_nodes), as_members(raw_members)
    field = DisplacementField(displacements, len(nodes))
    frames = displacement_frames(nodes, members, field)

    scale = solve_disp_scale(frames, nodes, members, field, manual=1e5)
    print(f"Solved scale: {scale:.2f}")
    assert 0 < scale < 1e5

    for frame in frames:
        for idx in frame.member_indices:
            for xi in sample_positions(CONFIG.divisions):
                point = member_deformation(members[idx], nodes, field, xi, scale)
                x, y = frame.project_to_pixel(point)
                assert CONFIG.margin - 1e-6 <= x <= CONFIG.frame_width - CONFIG.margin + 1e-6
                assert CONFIG.margin - 1e-6 <= y <= CONFIG.frame_height - CONFIG.margin + 1e-6


def test_sample_outside_margin_zeroes_scale():
    """
    Filling 120% of the drawable width puts node 2 beyond the right
    margin; it moves further right, so no magnification fits.
    """
    config = replace(CONFIG, fill_fraction=1.2)
    nodes = as_nodes([{"x": 0.0}, {"x": 4.0}])
    members = as_members([{"i": 0, "j": 1}])
    field = DisplacementField([0.0, 0.0, 0.0, 0.01, 0.0, 0.0], len(nodes))

    frames = displacement_frames(nodes, members, field, config)
    xy = frame_geometry(nodes, members, PlaneMode.XY, 0.0, config)
    assert xy.project_to_pixel(nodes[1])[0] > config.frame_width - config.margin

    assert frame_disp_scale_limit(xy, nodes, members, field, config) == 0.0
    assert solve_disp_scale(frames, nodes, members, field, config=config) == 0.0


def test_scale_decreases_as_displacement_grows():
    scales = []
    for dy in (0.005, 0.01, 0.05, 0.5, 5.0):
        nodes, members, field = _beam(dy)
        frames = displacement_frames(nodes, members, field)
        scales.append(solve_disp_scale(frames, nodes, members, field))

    print(f"Scales: {scales}")
    assert all(b < a for a, b in zip(scales, scales[1:]))


# =============================================================================
# Pixel scale
# =============================================================================

def test_initial_pixel_scale():
    expected = 0.06 * min(CONFIG.draw_width, CONFIG.draw_height) / 100.0
    assert np.isclose(initial_pixel_scale(100.0, 0.06), expected)
    assert initial_pixel_scale(0.0, 0.06) == 1.0
    assert initial_pixel_scale(float("nan"), 0.06) == 1.0


def test_frame_pixel_scale_limit():
    nodes = as_nodes([{"x": 0.0}, {"x": 4.0}])
    members = as_members([{"i": 0, "j": 1}])
    frame = frame_geometry(nodes, members, PlaneMode.XY, 0.0)

    # 450 px to the nearest edge, value 10 -> 45 px per unit
    assert np.isclose(frame_pixel_scale_limit(frame, [(600.0, 450.0, 10.0)]), 45.0)
    assert np.isclose(frame_pixel_scale_limit(frame, [(600.0, 450.0, -10.0)]), 45.0)
    # Point on the border cannot be offset at all
    assert frame_pixel_scale_limit(frame, [(0.0, 450.0, 5.0)]) == 0.0
    # Zero values do not constrain
    assert math.isinf(frame_pixel_scale_limit(frame, [(600.0, 450.0, 0.0)]))


def test_solve_pixel_scale_applies_safety():
    assert solve_pixel_scale(10.0, 45.0) == 10.0
    assert np.isclose(solve_pixel_scale(100.0, 45.0), 45.0 * 0.95)
    assert solve_pixel_scale(10.0, math.inf) == 10.0


def test_global_maxima(portal_2d):
    raw_nodes, raw_members, _, member_forces, _ = portal_2d
    members = as_members(raw_members)
    forces = as_member_forces(member_forces, len(members))

    assert global_stress_max(members, forces, stress_kind("moment"), ["z", "z"]) == 20.0
    assert global_stress_max(members, forces, stress_kind("axial"), ["z"]) == 30.0
    assert global_ratio_max([SectionCheck((0.2, 1.3), 1.1), None]) == 1.3
    assert global_ratio_max([]) == 0.0

    # Only members that are drawn count
    checks = [SectionCheck((0.4,), 0.4), SectionCheck((5.0,), 5.0), None]
    assert global_ratio_max(checks, [0, 2]) == 0.4
    assert global_ratio_max(checks) == 5.0


# =============================================================================
# Curves
# =============================================================================

def test_member_stress_curve_beam_midspan(portal_2d):
    raw_nodes, raw_members, _, member_forces, _ = portal_2d
    nodes, members = as_nodes(raw_nodes), as_members(raw_members)
    forces = as_member_forces(member_forces, len(members))
    frame = frame_geometry(nodes, members, PlaneMode.XY, 0.0)

    curve = member_stress_curve(frame, nodes, members[1], forces[1], stress_kind("moment"), 20)

    assert len(curve) == 21
    # Drawn on the tension side: 25 kN·m sagging shows as -25
    assert np.isclose(curve[10][2], -25.0)
    assert np.isclose(curve[0][2], 20.0)
    assert curve[0][:2] == frame.project_to_pixel(nodes[1])

    assert member_stress_curve(frame, nodes, members[1], None, stress_kind("moment")) == []


def test_member_ratio_curve_spacing(portal_2d):
    raw_nodes, raw_members, _, _, _ = portal_2d
    nodes, members = as_nodes(raw_nodes), as_members(raw_members)
    frame = frame_geometry(nodes, members, PlaneMode.XY, 0.0)

    curve = member_ratio_curve(frame, nodes, members[1], SectionCheck((0.2, 0.4, 0.6)))
    assert [value for _, _, value in curve] == [0.2, 0.4, 0.6]
    assert np.allclose(curve[1][:2], frame.to_pixel(3.0, 4.0))

    single = member_ratio_curve(frame, nodes, members[1], SectionCheck((0.7,)))
    assert np.allclose(single[0][:2], frame.project_to_pixel(nodes[1]))
    assert member_ratio_curve(frame, nodes, members[1], None) == []
