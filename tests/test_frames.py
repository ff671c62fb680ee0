# File: tests/test_frames.py
"""
TEST: Diagram Kinds, Projection and Plane Grouping
==================================================

Validates:

1. Kind parsing and the force-diagram table (signs per axis)
2. Projection onto xy / xz / yz and plane-coordinate merging
3. Frame qualification and per-frame geometry
"""

import numpy as np
import pytest

from struct_diagrams.config import CONFIG
from struct_diagrams.frames import (
    base_scale,
    displacement_frames,
    frame_geometry,
    ratio_frames,
    stress_frames,
)
from struct_diagrams.kinds import STRESS_KINDS, DiagramKind, stress_kind
from struct_diagrams.model import (
    DisplacementField,
    MemberForce,
    SectionCheck,
    as_member_forces,
    as_members,
    as_nodes,
)
from struct_diagrams.projection import (
    PlaneMode,
    out_of_plane,
    plane_coordinates,
    project,
    snap,
)


# =============================================================================
# Kinds
# =============================================================================

def test_parse_kind_aliases():
    assert DiagramKind.parse("moment") is DiagramKind.MOMENT
    assert DiagramKind.parse("Displacement") is DiagramKind.DEFORMATION
    assert DiagramKind.parse("capacity-ratio") is DiagramKind.CAPACITY_RATIO
    assert DiagramKind.parse("ratio") is DiagramKind.CAPACITY_RATIO
    with pytest.raises(ValueError):
        DiagramKind.parse("torsion")


def test_stress_table_covers_force_kinds():
    assert set(STRESS_KINDS) == {DiagramKind.AXIAL, DiagramKind.SHEAR, DiagramKind.MOMENT}
    with pytest.raises(ValueError):
        stress_kind("deformation")


def test_moment_sign_flips_bending_axes():
    moment = stress_kind("moment")
    force = MemberForce(M_i=10.0, M_j=-4.0)

    assert moment.signed_ends(force, "z") == (-10.0, 4.0)
    assert moment.signed_ends(force, "y") == (-10.0, 4.0)
    assert moment.signed_ends(force, "x") == (10.0, -4.0)
    assert moment.end_peak(force, "z") == 10.0


def test_pixel_fraction_from_config():
    assert stress_kind("axial").pixel_fraction(CONFIG) == CONFIG.stress_pixel_fraction


# =============================================================================
# Projection
# =============================================================================

def test_project_and_out_of_plane():
    point = (1.0, 2.0, 3.0)
    assert project(point, PlaneMode.XY) == (1.0, 2.0)
    assert project(point, PlaneMode.XZ) == (1.0, 3.0)
    assert project(point, PlaneMode.YZ) == (2.0, 3.0)
    assert out_of_plane(point, PlaneMode.XY) == 3.0
    assert out_of_plane(point, PlaneMode.XZ) == 2.0
    assert out_of_plane(point, PlaneMode.YZ) == 1.0


def test_plane_coordinates_merge_near_duplicates():
    nodes = as_nodes([{"x": 0.0}, {"x": 0.001}, {"x": 2.499}, {"x": 2.5}, {"x": -1.0}])

    coords = plane_coordinates(nodes, PlaneMode.YZ, 0.01)
    assert coords == [-1.0, 0.0, 2.5]
    assert snap(2.499, 0.01) == 2.5


def test_plane_mode_parse():
    assert PlaneMode.parse("XZ") is PlaneMode.XZ
    assert PlaneMode.XZ.normal_axis == "y"
    with pytest.raises(ValueError):
        PlaneMode.parse("ab")


# =============================================================================
# Frames
# =============================================================================

def test_straight_beam_gives_single_xy_frame(beam_2d):
    """
    A 2-node beam on z=0 with y-displacement: exactly one xy frame at
    coordinate 0 and no yz frame (its two nodes sit in different yz planes).
    """
    nodes, members, displacements = beam_2d
    nodes, members = as_nodes(nodes), as_members(members)
    field = DisplacementField(displacements, len(nodes))

    frames = displacement_frames(nodes, members, field)
    xy = [f for f in frames if f.plane is PlaneMode.XY]
    yz = [f for f in frames if f.plane is PlaneMode.YZ]

    assert len(xy) == 1
    assert xy[0].coordinate == 0.0
    assert xy[0].node_indices == (0, 1)
    assert xy[0].member_indices == (0,)
    assert yz == []
    print(f"Frames: {[f.title for f in frames]}")


def test_frame_geometry_straight_member_scale():
    """Zero height must not zero the scale: width alone constrains it."""
    nodes = as_nodes([{"x": 0.0}, {"x": 4.0}])
    members = as_members([{"i": 0, "j": 1}])

    frame = frame_geometry(nodes, members, PlaneMode.XY, 0.0)
    assert np.isclose(frame.scale, CONFIG.draw_width / 4.0 * 0.9)
    assert frame.center == (2.0, 0.0)
    assert frame.title == "XY plane (Z=0.00m)"

    # Model center maps to the frame center
    assert frame.to_pixel(2.0, 0.0) == (CONFIG.frame_width / 2, CONFIG.frame_height / 2)
    # Model y up is pixel y down
    x, y = frame.to_pixel(2.0, 1.0)
    assert y < CONFIG.frame_height / 2


def test_base_scale_cases():
    assert base_scale(0.0, 0.0) == 1.0
    assert np.isclose(base_scale(10.0, 10.0),
                      min(CONFIG.draw_width, CONFIG.draw_height) / 10.0 * 0.9)
    assert np.isclose(base_scale(0.0, 5.0), CONFIG.draw_height / 5.0 * 0.9)


def test_frame_geometry_without_members_is_none():
    nodes = as_nodes([{"x": 0.0}, {"x": 4.0, "z": 3.0}])
    members = as_members([{"i": 0, "j": 1}])
    assert frame_geometry(nodes, members, PlaneMode.XY, 0.0) is None


def test_displacement_below_threshold_gives_no_frames(beam_2d):
    nodes, members, _ = beam_2d
    nodes, members = as_nodes(nodes), as_members(members)
    # 0.005 mm is below the 0.01 mm threshold
    field = DisplacementField([0, 0, 0, 0, 0.000005, 0], len(nodes))
    assert displacement_frames(nodes, members, field) == []


def test_stress_frames_portal(portal_2d):
    nodes, members, _, member_forces, _ = portal_2d
    nodes, members = as_nodes(nodes), as_members(members)
    forces = as_member_forces(member_forces, len(members))

    frames = stress_frames(nodes, members, forces, stress_kind("moment"))
    planes = [(f.plane, f.coordinate) for f in frames]

    # Whole portal in xy; the beam alone in xz (y=4); each column in yz
    assert planes[0] == (PlaneMode.XY, 0.0)
    assert frames[0].member_indices == (0, 1, 2)
    assert (PlaneMode.XZ, 4.0) in planes
    assert (PlaneMode.YZ, 0.0) in planes and (PlaneMode.YZ, 6.0) in planes


def test_stress_frames_skip_members_without_forces(portal_2d):
    nodes, members, _, _, _ = portal_2d
    nodes, members = as_nodes(nodes), as_members(members)
    forces = as_member_forces({1: {"N_i": 0.0005, "N_j": 0.0}}, len(members))

    assert stress_frames(nodes, members, forces, stress_kind("axial")) == []


def test_ratio_frames_threshold(portal_2d):
    nodes, members, _, _, _ = portal_2d
    nodes, members = as_nodes(nodes), as_members(members)

    none = [SectionCheck((0.0005,), 0.0005), None, None]
    assert ratio_frames(nodes, members, none) == []

    some = [None, SectionCheck((0.2, 0.5), 0.5), None]
    frames = ratio_frames(nodes, members, some)
    assert all(1 in f.member_indices for f in frames)
