# struct_diagrams/projection.py
"""
Orthogonal projection of 3D points onto the structural planes.

    xy  ->  (x, y)   plan view, cut at constant z
    xz  ->  (x, z)   elevation along X, cut at constant y
    yz  ->  (y, z)   elevation along Y, cut at constant x
"""

import math
from enum import Enum
from typing import Iterable, List, Sequence, Tuple, Union

from .model import Node

Point3D = Tuple[float, float, float]


class PlaneMode(str, Enum):
    XY = "xy"
    XZ = "xz"
    YZ = "yz"

    @property
    def normal_axis(self) -> str:
        """Name of the out-of-plane axis ('z' for xy, ...)."""
        return {"xy": "z", "xz": "y", "yz": "x"}[self.value]

    @classmethod
    def parse(cls, value: Union[str, "PlaneMode"]) -> "PlaneMode":
        if isinstance(value, PlaneMode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown projection plane: {value!r}") from None


PLANES: Tuple[PlaneMode, ...] = (PlaneMode.XY, PlaneMode.XZ, PlaneMode.YZ)


def _xyz(point: Union[Node, Sequence[float]]) -> Point3D:
    if isinstance(point, Node):
        return point.coords()
    return (point[0], point[1], point[2])


def project(point: Union[Node, Sequence[float]], plane: PlaneMode) -> Tuple[float, float]:
    x, y, z = _xyz(point)
    if plane is PlaneMode.XY:
        return (x, y)
    if plane is PlaneMode.XZ:
        return (x, z)
    return (y, z)


def out_of_plane(point: Union[Node, Sequence[float]], plane: PlaneMode) -> float:
    x, y, z = _xyz(point)
    if plane is PlaneMode.XY:
        return z
    if plane is PlaneMode.XZ:
        return y
    return x


def snap(value: float, tolerance: float) -> float:
    """Round to the nearest multiple of ``tolerance`` (half rounds up)."""
    return round(math.floor(value / tolerance + 0.5) * tolerance, 10)


def plane_coordinates(
    nodes: Iterable[Node],
    plane: PlaneMode,
    tolerance: float = 0.01,
) -> List[float]:
    """
    Distinct out-of-plane coordinates of ``nodes``, merged on the tolerance
    grid and sorted ascending. Each value is a candidate frame.
    """
    coords = {snap(out_of_plane(n, plane), tolerance) for n in nodes}
    return sorted(coords)
