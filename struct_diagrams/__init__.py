# struct_diagrams - Structural Post-Processing Diagrams
"""
STRUCT-DIAGRAMS: Result Diagrams for Skeletal Structures
========================================================

This package provides:
- Deformed-shape diagrams with automatic magnification
- Axial, shear and bending-moment envelopes
- Capacity-ratio diagrams with pass/fail colouring
- One frame per structural plane (xy, xz, yz) that carries a response

ARCHITECTURE:
-------------
    model.py        Input snapshots (Node, Member, MemberForce, ...)
    components.py   Fallback chains for sparsely reported end forces
    response.py     Values and deflections at any position along a member
    kinds.py        Diagram kinds and the force-diagram table
    projection.py   3D -> plane projection and plane coordinates
    frames.py       Plane grouping and per-frame geometry
    scaling.py      Displacement and pixel scale solvers
    layout.py       Greedy label placement
    surface.py      Drawing-surface protocol and matplotlib implementation
    render.py       The diagram renderers
    tables.py       pandas export of sampled responses
    config.py       Layout constants and thresholds
"""

from .config import CONFIG, DiagramConfig
from .kinds import STRESS_KINDS, DiagramKind, StressKind, stress_kind
from .model import (
    DisplacementField,
    DisplacementFieldError,
    DistributedLoad,
    Member,
    MemberForce,
    Node,
    SectionCheck,
)
from .render import (
    RenderResult,
    draw_capacity_ratio_diagram,
    draw_diagram,
    draw_displacement_diagram,
    draw_stress_diagram,
    ratio_color,
)
from .surface import DrawingSurface, MatplotlibSurface

# Version
__version__ = "0.1.0"
