# struct_diagrams/tables.py
"""
Tabular export of the sampled responses.

The same samples the renderer draws, as pandas DataFrames: handy for
CSV export from the API and for checking a diagram against hand
calculations.
"""

import math
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd

from .components import axis_for_plane
from .kinds import STRESS_KINDS, DiagramKind, StressKind, stress_kind
from .model import (
    as_displacement_field,
    as_member_forces,
    as_members,
    as_nodes,
    as_section_checks,
)
from .response import LENGTH_EPS, member_length, sample_positions


def member_response_table(
    nodes,
    members,
    member_forces,
    kind: Union[str, DiagramKind, StressKind],
    plane: str = "xy",
    divisions: int = 20,
) -> pd.DataFrame:
    """
    Sampled force values along every member.

    Parameters:
    -----------
    nodes, members : sequences
        Model geometry (dataclasses or dicts).
    member_forces : sequence or dict
        End forces per member; members without forces are skipped.
    kind : str or DiagramKind
        'axial', 'shear' or 'moment'.
    plane : str
        Projection plane; selects the bending axis ('xy' -> z, ...).
    divisions : int
        Number of segments per member (divisions + 1 samples).

    Returns:
    --------
    pd.DataFrame
        Columns: member (1-based), xi, x (m from end i), value. Values
        carry the diagram's sign convention.
    """
    row = kind if isinstance(kind, StressKind) else stress_kind(kind)
    axis = axis_for_plane(plane)
    nodes = as_nodes(nodes)
    members = as_members(members)
    forces = as_member_forces(member_forces, len(members))

    records = []
    for idx, member in enumerate(members):
        force = forces[idx]
        L = member_length(nodes, member)
        if force is None or not math.isfinite(L) or L < LENGTH_EPS:
            continue
        for xi in sample_positions(divisions):
            records.append({
                'member': idx + 1,
                'xi': float(xi),
                'x': float(xi) * L,
                'value': row.value(force, L, float(xi), axis),
            })

    return pd.DataFrame(records, columns=['member', 'xi', 'x', 'value'])


def node_displacement_table(nodes, displacements, length_to_mm: float = 1000.0) -> pd.DataFrame:
    """Nodal translations (mm) and their magnitude."""
    nodes = as_nodes(nodes)
    disp_field = as_displacement_field(displacements, len(nodes))
    columns = ['node', 'dx_mm', 'dy_mm', 'dz_mm', 'total_mm']
    if disp_field.is_empty:
        return pd.DataFrame(columns=columns)

    records = []
    for idx in range(len(nodes)):
        dx, dy, dz = (v * length_to_mm for v in disp_field.translation(idx))
        records.append({
            'node': idx + 1,
            'dx_mm': dx,
            'dy_mm': dy,
            'dz_mm': dz,
            'total_mm': disp_field.magnitude(idx) * length_to_mm,
        })
    return pd.DataFrame(records, columns=columns)


def capacity_ratio_table(members, checks) -> pd.DataFrame:
    """Sampled capacity ratios per member with an ``ok`` flag (ratio <= 1)."""
    members = as_members(members)
    checks = as_section_checks(checks, len(members))

    records = []
    for idx, check in enumerate(checks):
        if check is None:
            continue
        count = len(check.ratios)
        positions = np.linspace(0.0, 1.0, count) if count > 1 else np.zeros(count)
        for t, ratio in zip(positions, check.ratios):
            records.append({
                'member': idx + 1,
                'xi': float(t),
                'ratio': ratio,
                'max_ratio': check.peak,
                'ok': check.peak <= 1.0,
            })
    return pd.DataFrame(records, columns=['member', 'xi', 'ratio', 'max_ratio', 'ok'])


def diagram_summary(
    nodes,
    members,
    member_forces,
    plane: str = "xy",
    divisions: int = 20,
    kinds: Optional[Sequence[Union[str, DiagramKind]]] = None,
) -> pd.DataFrame:
    """
    Peak value per force diagram and where it occurs.

    Returns one row per kind with columns: kind, peak (signed value with
    the largest magnitude), member (1-based) and xi. Kinds with no
    sampled values report NaN.
    """
    selected = [stress_kind(k) for k in kinds] if kinds else list(STRESS_KINDS.values())

    rows = []
    for row in selected:
        table = member_response_table(nodes, members, member_forces, row, plane, divisions)
        if table.empty:
            rows.append({'kind': row.kind.value, 'peak': np.nan, 'member': np.nan, 'xi': np.nan})
            continue
        best = table.loc[table['value'].abs().idxmax()]
        rows.append({
            'kind': row.kind.value,
            'peak': float(best['value']),
            'member': int(best['member']),
            'xi': float(best['xi']),
        })
    return pd.DataFrame(rows, columns=['kind', 'peak', 'member', 'xi'])
