# struct_diagrams/response.py
"""
RESPONSE EVALUATOR: Member Response at an Arbitrary Position
============================================================

Recovers continuous curves along a member from the discrete values the
solver reports at its ends. Every function takes the normalized position

    xi = x_local / L,   0 <= xi <= 1

so callers can sample members of different length on the same grid.

KEY CONCEPTS:
-------------
- Axial N varies linearly between the end values.
- Shear Q varies linearly under a uniform load: Q(x) = Q_i - w*x.
- Moment M varies parabolically: M(x) = M_i + Q_i*x - w*x²/2.

When the solver does not report the distributed load, an *equivalent
uniform load* is inferred from the end shears:

    w_eq = (Q_i - Q_j) / L

MOMENT END CORRECTION:
----------------------
The open-form parabola only ends at the reported M_j if the true load is
exactly uniform and consistent with the end shears. To keep the curve
continuous with the reported end moments, the mismatch at x = L is
removed linearly:

    delta = M_open(L) - M_j
    M(x)  = M_open(x) - delta * x / L

This is a first-order fix-up, not a physical reconstruction of the load.

DEFLECTED SHAPE:
----------------
- 2D fields (3 DOF/node): nodal (dx, dy) interpolated linearly.
- 3D fields (6 DOF/node): transverse displacements use Hermite cubics with
  the nodal rotations as end slopes; axial displacement is linear.
"""

import math
from typing import Optional, Sequence, Tuple

import numpy as np

from .components import (
    axial_components,
    moment_components,
    shear_components,
)
from .model import DisplacementField, Member, MemberForce, Node

LENGTH_EPS = 1e-9
DEGENERATE_LENGTH = 1e-10


def sample_positions(divisions: int) -> np.ndarray:
    """``divisions + 1`` evenly spaced xi values from 0 to 1 inclusive."""
    return np.linspace(0.0, 1.0, int(divisions) + 1)


def hermite_shape_functions(xi: float) -> Tuple[float, float, float, float]:
    """
    Hermite cubic shape functions for beam deflection interpolation.

        v(xi) = H1*v_i + H2*theta_i*L + H3*v_j + H4*theta_j*L

    H1 and H3 weight the end displacements, H2 and H4 the end rotations
    (scaled by L by the caller).
    """
    H1 = 1 - 3*xi**2 + 2*xi**3
    H2 = xi - 2*xi**2 + xi**3
    H3 = 3*xi**2 - 2*xi**3
    H4 = -xi**2 + xi**3
    return H1, H2, H3, H4


def _node(nodes: Sequence[Node], index: int) -> Optional[Node]:
    if 0 <= index < len(nodes):
        return nodes[index]
    return None


def member_length(nodes: Sequence[Node], member: Member) -> float:
    """Straight-line 3D length of a member; 0 if an end node is missing."""
    ni = _node(nodes, member.i)
    nj = _node(nodes, member.j)
    if ni is None or nj is None:
        return 0.0
    return math.sqrt((nj.x - ni.x)**2 + (nj.y - ni.y)**2 + (nj.z - ni.z)**2)


def _equivalent_load(q_i: float, q_j: float, L: float, w: Optional[float]) -> float:
    if w is not None and math.isfinite(w):
        return w
    if math.isfinite(L) and abs(L) > LENGTH_EPS:
        return (q_i - q_j) / L
    return 0.0


def open_moment(m_i: float, q_i: float, w: float, x: float) -> float:
    """Uncorrected parabola M_i + Q_i*x - w*x²/2."""
    return m_i + q_i * x - 0.5 * w * x * x


def axial_at(force: Optional[MemberForce], xi: float) -> float:
    """Axial force at xi, linear between N_i and N_j."""
    if force is None:
        return 0.0
    n_i, n_j = axial_components(force)
    return n_i + (n_j - n_i) * xi


def shear_at(
    force: Optional[MemberForce],
    L: float,
    xi: float,
    axis: str = "y",
    w: Optional[float] = None,
) -> float:
    """Shear at xi: Q_i - w_eq * x, with w_eq = w or (Q_i - Q_j) / L."""
    if force is None:
        return 0.0
    q_i, q_j = shear_components(force, axis)
    w_eq = _equivalent_load(q_i, q_j, L, w)
    return q_i - w_eq * (xi * L)


def moment_at(
    force: Optional[MemberForce],
    L: float,
    xi: float,
    axis: str = "y",
    w: Optional[float] = None,
) -> float:
    """
    Bending moment at xi about ``axis``.

    Parameters:
    -----------
    force : MemberForce or None
        End forces; ``None`` gives 0.
    L : float
        Member length. Non-finite or ~0 lengths give 0.
    xi : float
        Normalized position along the member.
    axis : str
        'x', 'y' or 'z'; selects the moment/shear components.
    w : float, optional
        Known distributed load. When omitted the equivalent uniform load
        (Q_i - Q_j) / L is used.

    Returns:
    --------
    float
        Moment value; equals the reported M_j at xi = 1.
    """
    if force is None:
        return 0.0
    if not math.isfinite(L) or abs(L) <= LENGTH_EPS:
        return 0.0

    m_i, m_j = moment_components(force, axis)
    q_i, q_j = shear_components(force, axis)
    w_eq = _equivalent_load(q_i, q_j, L, w)

    x = xi * L
    moment = open_moment(m_i, q_i, w_eq, x)

    predicted_end = open_moment(m_i, q_i, w_eq, L)
    delta = predicted_end - m_j
    if math.isfinite(delta):
        moment -= delta * (x / L)
    return moment


def member_deformation(
    member: Member,
    nodes: Sequence[Node],
    field: DisplacementField,
    xi: float,
    disp_scale: float,
) -> Optional[Tuple[float, float, float]]:
    """
    Deformed 3D position of the point at xi along a member.

    Returns the undeformed position plus ``disp_scale`` times the
    interpolated displacement, or ``None`` when the member is undefined
    (missing end node, zero length, or no displacement result).
    """
    ni = _node(nodes, member.i)
    nj = _node(nodes, member.j)
    if ni is None or nj is None or field.is_empty:
        return None

    L = member_length(nodes, member)
    if L < DEGENERATE_LENGTH:
        return None

    x0 = ni.x + (nj.x - ni.x) * xi
    y0 = ni.y + (nj.y - ni.y) * xi
    z0 = ni.z + (nj.z - ni.z) * xi

    dx_i, dy_i, dz_i = field.translation(member.i)
    dx_j, dy_j, dz_j = field.translation(member.j)

    if not field.is_3d:
        dx = dx_i + (dx_j - dx_i) * xi
        dy = dy_i + (dy_j - dy_i) * xi
        return (x0 + dx * disp_scale, y0 + dy * disp_scale, z0)

    _, ry_i, rz_i = field.rotation(member.i)
    _, ry_j, rz_j = field.rotation(member.j)

    H1, H2, H3, H4 = hermite_shape_functions(xi)

    # Y deflection driven by rotation about z
    dy = H1 * dy_i + H2 * L * rz_i + H3 * dy_j + H4 * L * rz_j
    # Z deflection driven by rotation about y (right-handed: slope = -ry)
    dz = H1 * dz_i + H2 * L * (-ry_i) + H3 * dz_j + H4 * L * (-ry_j)
    # Axial: linear
    dx = dx_i + (dx_j - dx_i) * xi

    return (x0 + dx * disp_scale, y0 + dy * disp_scale, z0 + dz * disp_scale)
