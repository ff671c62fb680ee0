# struct_diagrams/components.py
"""
Force component resolution.

Collaborators report end forces sparsely: a 2D solver fills only the
generic ``M_i``/``Q_i`` fields, a 3D solver fills ``Mz_i``, ``Qy_i`` and so
on. Every lookup goes through ``resolve`` so the fallback chain is written
once per component instead of at each call site.

Plane -> bending axis:
    xy  ->  z   (moments about z, shear along local y, load ``w``)
    xz  ->  y   (moments about y, shear along local z, load ``wz``)
    yz  ->  x   (torsion axis, dominant shear, load ``wx``)
"""

import math
from typing import Optional, Tuple

from .model import MemberForce

_PLANE_AXIS = {"xy": "z", "xz": "y", "yz": "x"}


def resolve(*candidates: Optional[float], default: float = 0.0) -> float:
    """Return the first finite candidate, or ``default``."""
    for value in candidates:
        if value is not None and math.isfinite(value):
            return float(value)
    return default


def axis_for_plane(plane: str) -> str:
    """Bending axis whose diagram is drawn in ``plane``."""
    try:
        return _PLANE_AXIS[str(getattr(plane, "value", plane)).lower()]
    except KeyError:
        raise ValueError(f"Unknown projection plane: {plane!r}") from None


def pick_dominant(primary: Optional[float], secondary: Optional[float]) -> float:
    p = resolve(primary)
    s = resolve(secondary)
    return p if abs(p) >= abs(s) else s


def axial_components(force: Optional[MemberForce]) -> Tuple[float, float]:
    if force is None:
        return 0.0, 0.0
    return resolve(force.N_i), resolve(force.N_j)


def moment_components(force: Optional[MemberForce], axis: str) -> Tuple[float, float]:
    if force is None:
        return 0.0, 0.0
    if axis == "z":
        return resolve(force.Mz_i, force.M_i), resolve(force.Mz_j, force.M_j)
    if axis == "y":
        return resolve(force.My_i, force.M_i), resolve(force.My_j, force.M_j)
    return resolve(force.Mx_i, force.M_i), resolve(force.Mx_j, force.M_j)


def shear_components(force: Optional[MemberForce], axis: str) -> Tuple[float, float]:
    """
    (Q_i, Q_j) for ``axis``. When no end-j shear is reported at all, Q_j
    falls back to Q_i (constant shear).
    """
    if force is None:
        return 0.0, 0.0
    if axis == "z":
        q_i = resolve(force.Qy_i, force.Q_i)
        return q_i, resolve(force.Qy_j, force.Q_j, default=q_i)
    if axis == "y":
        q_i = resolve(force.Qz_i, force.Q_i)
        return q_i, resolve(force.Qz_j, force.Q_j, default=q_i)
    # Torsion plane: show whichever transverse shear dominates
    qz_i = force.Qz_i if force.Qz_i is not None else force.Q_i
    qz_j = force.Qz_j if force.Qz_j is not None else force.Q_j
    q_i = pick_dominant(force.Qy_i, qz_i)
    if force.Qy_j is None and qz_j is None:
        return q_i, q_i
    return q_i, pick_dominant(force.Qy_j, qz_j)


def distributed_load(force: Optional[MemberForce], axis: str) -> Optional[float]:
    """Known distributed load acting in the diagram plane, if the solver supplied one."""
    if force is None:
        return None
    value = {"z": force.w, "y": force.wz, "x": force.wx}.get(axis)
    return resolve(value, default=None) if value is not None else None
