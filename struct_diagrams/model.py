# struct_diagrams/model.py
"""
INPUT MODEL: Nodes, Members, End Forces and Displacements
=========================================================

PURPOSE:
--------
Read-only snapshots of everything the diagram engine consumes. The solver
that produced these values and the editor that produced the geometry are
external collaborators; this module only gives their output a shape.

- Node:              a point in 3D space (y and z default to 0)
- Member:            a bar connecting two node indices
- MemberForce:       end forces of one member (N, Q, M per axis + loads)
- SectionCheck:      capacity ratios sampled along one member
- DisplacementField: the flat global displacement vector (3 or 6 DOF/node)
- DistributedLoad:   display-only line load (used by load arrows)

``distributed_loads_from_forces`` is a helper for collaborators that draw
load arrows (the 3D viewer); the diagrams themselves never read it.

UNITS:
------
Lengths and displacements in metres, forces in kN, moments in kN·m.
Displacement thresholds and labels are converted to millimetres.
"""

import math
from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np


class DisplacementFieldError(ValueError):
    """Displacement vector does not match the node count (caller contract violation)."""
    pass


def _finite_or_none(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class Node:
    """
    A node (joint) in 3D space.

    Parameters:
    -----------
    x, y, z : float
        Global coordinates (metres). 2D models leave z at 0.
    support : str, optional
        Support kind ("fixed", "pinned", ...). Carried for the viewer only.
    """
    x: float
    y: float = 0.0
    z: float = 0.0
    support: Optional[str] = None

    def coords(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Node":
        y = _finite_or_none(data.get("y"))
        z = _finite_or_none(data.get("z"))
        return cls(
            x=float(data["x"]),
            y=0.0 if y is None else y,
            z=0.0 if z is None else z,
            support=data.get("support"),
        )


@dataclass(frozen=True)
class Member:
    """A member connecting node ``i`` to node ``j`` (indices into the node list)."""
    i: int
    j: int
    i_conn: str = "rigid"
    j_conn: str = "rigid"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Member":
        return cls(
            i=int(data["i"]),
            j=int(data["j"]),
            i_conn=data.get("i_conn") or "rigid",
            j_conn=data.get("j_conn") or "rigid",
        )


@dataclass(frozen=True)
class MemberForce:
    """
    End forces of one member in its local axes.

    Every component is optional. Missing components are ``None`` and are
    resolved through the fallback chains in ``components`` (e.g. ``Mz_i``
    falls back to ``M_i``).

    Fields:
    -------
    N_i, N_j            Axial force at each end
    Q_i, Q_j            Generic shear (fallback for Qy/Qz)
    Qy_i, Qy_j          Shear along local y
    Qz_i, Qz_j          Shear along local z
    M_i, M_j            Generic moment (fallback for Mx/My/Mz)
    Mx_i .. Mz_j        Moment about each local axis
    w, wz, wx           Known distributed loads (per unit length)
    """
    N_i: Optional[float] = None
    N_j: Optional[float] = None
    Q_i: Optional[float] = None
    Q_j: Optional[float] = None
    Qy_i: Optional[float] = None
    Qy_j: Optional[float] = None
    Qz_i: Optional[float] = None
    Qz_j: Optional[float] = None
    M_i: Optional[float] = None
    M_j: Optional[float] = None
    Mx_i: Optional[float] = None
    Mx_j: Optional[float] = None
    My_i: Optional[float] = None
    My_j: Optional[float] = None
    Mz_i: Optional[float] = None
    Mz_j: Optional[float] = None
    w: Optional[float] = None
    wz: Optional[float] = None
    wx: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MemberForce":
        values = {f.name: _finite_or_none(data.get(f.name)) for f in fields(cls)}
        return cls(**values)


@dataclass(frozen=True)
class SectionCheck:
    """
    Capacity-ratio result for one member.

    ``ratios`` are sampled evenly from end i (first) to end j (last).
    ``max_ratio`` is the governing ratio reported by the checker; when it is
    not supplied the largest sampled ratio is used.
    """
    ratios: Tuple[float, ...] = ()
    max_ratio: Optional[float] = None

    @property
    def peak(self) -> float:
        if self.max_ratio is not None and math.isfinite(self.max_ratio):
            return float(self.max_ratio)
        return max(self.ratios) if self.ratios else 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SectionCheck":
        ratios = tuple(
            r for r in (_finite_or_none(v) for v in data.get("ratios") or ()) if r is not None
        )
        max_ratio = _finite_or_none(data.get("max_ratio", data.get("maxRatio")))
        return cls(ratios=ratios, max_ratio=max_ratio)


@dataclass(frozen=True)
class DistributedLoad:
    """
    Transverse line load on a member, used only for load arrows in the 3D
    viewer. It never enters the force-diagram math.
    """
    member_index: int
    wy: float = 0.0
    wz: float = 0.0
    from_self_weight: bool = False

    def label(self) -> str:
        if self.wy and self.wz:
            return f"wy={abs(self.wy):.2f} wz={abs(self.wz):.2f}kN/m"
        if self.wy:
            return f"{abs(self.wy):.2f}kN/m"
        return f"wz={abs(self.wz):.2f}kN/m"


def distributed_loads_from_forces(
    member_forces: Sequence[Optional[MemberForce]],
    from_self_weight: bool = False,
) -> List[DistributedLoad]:
    """Collect the non-zero transverse loads carried on member forces."""
    loads = []
    for idx, force in enumerate(member_forces):
        if force is None:
            continue
        wy = force.w or 0.0
        wz = force.wz or 0.0
        if wy == 0.0 and wz == 0.0:
            continue
        loads.append(DistributedLoad(idx, wy=wy, wz=wz, from_self_weight=from_self_weight))
    return loads


class DisplacementField:
    """
    Global displacement vector, ``node_count × dof`` long.

    Per node the first three offsets are translations (dx, dy, dz for 3D,
    dx, dy, rz for 2D) and, for dof=6, offsets 3..5 are rotations about x,
    y, z. The dof is inferred from the length; anything other than 3 or 6
    raises ``DisplacementFieldError``.

    An empty vector is accepted and means "no analysis result".
    """

    SUPPORTED_DOF = (3, 6)

    def __init__(self, values: Iterable[Any], node_count: int):
        array = np.asarray(list(values) if not isinstance(values, np.ndarray) else values,
                           dtype=float).reshape(-1)
        self.values = array
        self.node_count = int(node_count)

        if array.size == 0:
            self.dof = None
            return
        if self.node_count <= 0 or array.size % self.node_count != 0:
            raise DisplacementFieldError(
                f"Displacement vector of length {array.size} is not divisible "
                f"by node count {self.node_count}."
            )
        dof = array.size // self.node_count
        if dof not in self.SUPPORTED_DOF:
            raise DisplacementFieldError(
                f"Unsupported DOF per node: {dof} (expected 3 or 6)."
            )
        self.dof = dof

    @property
    def is_empty(self) -> bool:
        return self.dof is None

    @property
    def is_3d(self) -> bool:
        return self.dof == 6

    def translation(self, node: int) -> Tuple[float, float, float]:
        """(dx, dy, dz) of a node; dz is 0 for a 2D field."""
        if self.is_empty:
            return (0.0, 0.0, 0.0)
        base = node * self.dof
        dz = self.values[base + 2] if self.is_3d else 0.0
        return (float(self.values[base]), float(self.values[base + 1]), float(dz))

    def rotation(self, node: int) -> Tuple[float, float, float]:
        """(rx, ry, rz) of a node; zeros for a 2D field."""
        if not self.is_3d:
            return (0.0, 0.0, 0.0)
        base = node * 6
        return tuple(float(v) for v in self.values[base + 3:base + 6])

    def magnitude(self, node: int) -> float:
        dx, dy, dz = self.translation(node)
        return math.sqrt(dx * dx + dy * dy + dz * dz)

    def max_translation_component(self) -> float:
        """Largest absolute translation component over all nodes."""
        if self.is_empty:
            return 0.0
        per_node = self.values.reshape(self.node_count, self.dof)
        n_trans = 3 if self.is_3d else 2
        return float(np.max(np.abs(per_node[:, :n_trans])))

    def __len__(self) -> int:
        return int(self.values.size)


# =============================================================================
# Coercion of collaborator input
# =============================================================================

NodeLike = Union[Node, Mapping[str, Any]]
MemberLike = Union[Member, Mapping[str, Any]]


def as_nodes(nodes: Optional[Iterable[NodeLike]]) -> List[Node]:
    if not nodes:
        return []
    return [n if isinstance(n, Node) else Node.from_dict(n) for n in nodes]


def as_members(members: Optional[Iterable[MemberLike]]) -> List[Member]:
    if not members:
        return []
    return [m if isinstance(m, Member) else Member.from_dict(m) for m in members]


def _as_sparse(items, n_members: int, convert) -> List[Any]:
    result: List[Any] = [None] * n_members
    if not items:
        return result
    pairs = items.items() if isinstance(items, Mapping) else enumerate(items)
    for idx, item in pairs:
        idx = int(idx)
        if 0 <= idx < n_members and item is not None:
            result[idx] = convert(item)
    return result


def as_member_forces(
    forces: Optional[Union[Sequence[Any], Dict[int, Any]]],
    n_members: int,
) -> List[Optional[MemberForce]]:
    """One entry per member; missing (sparse) members are ``None``."""
    return _as_sparse(
        forces, n_members,
        lambda f: f if isinstance(f, MemberForce) else MemberForce.from_dict(f),
    )


def as_section_checks(
    checks: Optional[Union[Sequence[Any], Dict[int, Any]]],
    n_members: int,
) -> List[Optional[SectionCheck]]:
    return _as_sparse(
        checks, n_members,
        lambda c: c if isinstance(c, SectionCheck) else SectionCheck.from_dict(c),
    )


def as_displacement_field(values: Any, node_count: int) -> DisplacementField:
    if isinstance(values, DisplacementField):
        return values
    return DisplacementField(values if values is not None else [], node_count)
