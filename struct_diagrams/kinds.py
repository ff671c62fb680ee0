# struct_diagrams/kinds.py
"""
Diagram kinds and the table that drives force-diagram dispatch.

Each force diagram (axial, shear, moment) is one ``StressKind`` entry:
how to read its end values, how to evaluate it along a member and which
sign convention to apply per bending axis. The grouper, the scale solver
and the renderer only ever look a kind up in ``STRESS_KINDS``; adding a
diagram means adding a row here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Mapping, Optional, Tuple, Union

from .components import (
    axial_components,
    distributed_load,
    moment_components,
    shear_components,
)
from .config import DiagramConfig
from .model import MemberForce
from .response import axial_at, moment_at, shear_at


class DiagramKind(str, Enum):
    DEFORMATION = "deformation"
    AXIAL = "axial"
    SHEAR = "shear"
    MOMENT = "moment"
    CAPACITY_RATIO = "capacity_ratio"

    @classmethod
    def parse(cls, value: Union[str, "DiagramKind"]) -> "DiagramKind":
        if isinstance(value, DiagramKind):
            return value
        key = str(value).strip().lower().replace("-", "_")
        aliases = {"displacement": "deformation", "ratio": "capacity_ratio"}
        key = aliases.get(key, key)
        try:
            return cls(key)
        except ValueError:
            valid = ", ".join(k.value for k in cls)
            raise ValueError(f"Unknown diagram kind {value!r}; expected one of: {valid}") from None


EndValues = Callable[[Optional[MemberForce], str], Tuple[float, float]]
ValueAt = Callable[[Optional[MemberForce], float, float, str, Optional[float]], float]


@dataclass(frozen=True)
class StressKind:
    """One row of the force-diagram table."""
    kind: DiagramKind
    title: str
    symbol: str
    end_values: EndValues
    value_at: ValueAt
    signs: Mapping[str, float]
    scale_fraction_field: str = "stress_pixel_fraction"

    def sign(self, axis: str) -> float:
        return self.signs.get(axis, 1.0)

    def value(self, force: Optional[MemberForce], L: float, xi: float, axis: str) -> float:
        """Signed diagram value at xi, using the axis' known distributed load if any."""
        if force is None:
            return 0.0
        raw = self.value_at(force, L, xi, axis, distributed_load(force, axis))
        return raw * self.sign(axis)

    def signed_ends(self, force: Optional[MemberForce], axis: str) -> Tuple[float, float]:
        start, end = self.end_values(force, axis)
        factor = self.sign(axis)
        return start * factor, end * factor

    def end_peak(self, force: Optional[MemberForce], axis: str) -> float:
        start, end = self.signed_ends(force, axis)
        return max(abs(start), abs(end))

    def pixel_fraction(self, config: DiagramConfig) -> float:
        return getattr(config, self.scale_fraction_field)


STRESS_KINDS: Dict[DiagramKind, StressKind] = {
    DiagramKind.AXIAL: StressKind(
        kind=DiagramKind.AXIAL,
        title="Axial Force Diagram",
        symbol="N",
        end_values=lambda force, axis: axial_components(force),
        value_at=lambda force, L, xi, axis, w: axial_at(force, xi),
        signs={},
    ),
    DiagramKind.SHEAR: StressKind(
        kind=DiagramKind.SHEAR,
        title="Shear Force Diagram",
        symbol="Q",
        end_values=shear_components,
        value_at=shear_at,
        signs={},
    ),
    DiagramKind.MOMENT: StressKind(
        kind=DiagramKind.MOMENT,
        title="Bending Moment Diagram",
        symbol="M",
        end_values=moment_components,
        value_at=moment_at,
        # Moments about the bending axes are drawn on the tension side
        signs={"y": -1.0, "z": -1.0},
    ),
}


def stress_kind(kind: Union[str, DiagramKind]) -> StressKind:
    parsed = DiagramKind.parse(kind)
    try:
        return STRESS_KINDS[parsed]
    except KeyError:
        raise ValueError(f"{parsed.value!r} is not a force diagram") from None
