# api/main.py
"""
FastAPI backend for struct-diagrams - renders result diagrams as PNG/CSV.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response, StreamingResponse
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from dataclasses import replace
import sys
from pathlib import Path
import io
import logging

# Add project root to path to import struct_diagrams
sys.path.insert(0, str(Path(__file__).parent.parent))

from struct_diagrams import CONFIG, DiagramKind, MatplotlibSurface, draw_diagram
from struct_diagrams.tables import (
    capacity_ratio_table,
    member_response_table,
    node_displacement_table,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Struct Diagrams API",
    description="Deformation, force and capacity-ratio diagrams for skeletal structures",
    version="0.1.0"
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request Models
# =============================================================================

class NodeData(BaseModel):
    """Node geometry (metres)."""
    x: float
    y: float = 0.0
    z: float = 0.0
    support: Optional[str] = None


class MemberData(BaseModel):
    """Member connectivity (0-based node indices)."""
    i: int = Field(..., ge=0)
    j: int = Field(..., ge=0)
    i_conn: Optional[str] = None
    j_conn: Optional[str] = None


class DiagramRequest(BaseModel):
    """Solved model to draw."""
    nodes: List[NodeData]
    members: List[MemberData]
    displacements: List[float] = Field(default_factory=list,
                                       description="Flat global vector, 3 or 6 values per node")
    member_forces: List[Optional[Dict[str, Optional[float]]]] = Field(
        default_factory=list, description="End forces per member (N_i, Mz_j, w, ...)")
    section_checks: List[Optional[Dict[str, Any]]] = Field(
        default_factory=list, description="Capacity ratios per member (ratios, max_ratio)")
    manual_scale: Optional[float] = Field(None, description="Displacement scale override")
    pixel_ratio: float = Field(1.0, gt=0.0, le=4.0, description="Device pixel ratio")
    title: Optional[str] = None
    plane: str = Field("xy", description="Plane for tabular force export: xy, xz, yz")
    divisions: int = Field(20, ge=1, le=200, description="Samples per member for tables")


def _parse_kind(kind: str) -> DiagramKind:
    try:
        return DiagramKind.parse(kind)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
def root():
    """Health check."""
    return {"status": "ok", "service": "Struct Diagrams API",
            "kinds": [k.value for k in DiagramKind]}


@app.post("/api/diagrams/{kind}")
def render_diagram(kind: str, request: DiagramRequest):
    """
    Render one diagram kind as PNG. 204 when no plane qualifies.

    ``X-Diagram-Scale`` is the displacement scale for deformation diagrams
    and the initial pixel scale for force/ratio diagrams.
    ``X-Diagram-Frame-Scales`` lists the scale each frame was drawn with.
    Bad input (including a displacement vector that does not match the
    nodes, a ``DisplacementFieldError``) is a 400.
    """
    diagram_kind = _parse_kind(kind)
    config = replace(CONFIG, pixel_ratio=request.pixel_ratio)
    surface = MatplotlibSurface(pixel_ratio=request.pixel_ratio)

    try:
        result = draw_diagram(
            diagram_kind,
            surface,
            [n.model_dump() for n in request.nodes],
            [m.model_dump() for m in request.members],
            displacements=request.displacements,
            member_forces=request.member_forces,
            checks=request.section_checks,
            manual_scale=request.manual_scale,
            title=request.title,
            config=config,
        )
        if result.is_empty:
            return Response(status_code=204, headers={"X-Diagram-Frames": "0"})
        png = surface.to_png_bytes()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    finally:
        surface.close()

    logger.info("Served %s diagram: %d frame(s)", diagram_kind.value, len(result.frames))
    return StreamingResponse(
        io.BytesIO(png),
        media_type="image/png",
        headers={
            "X-Diagram-Scale": f"{result.scale:.6g}",
            "X-Diagram-Frames": str(len(result.frames)),
            "X-Diagram-Frame-Scales": ",".join(f"{s:.6g}" for s in result.frame_scales),
        },
    )


@app.post("/api/diagrams/{kind}/table")
def export_table(kind: str, request: DiagramRequest):
    """Export the sampled response behind a diagram as CSV."""
    diagram_kind = _parse_kind(kind)
    nodes = [n.model_dump() for n in request.nodes]
    members = [m.model_dump() for m in request.members]

    try:
        if diagram_kind is DiagramKind.DEFORMATION:
            df = node_displacement_table(nodes, request.displacements)
        elif diagram_kind is DiagramKind.CAPACITY_RATIO:
            df = capacity_ratio_table(members, request.section_checks)
        else:
            df = member_response_table(nodes, members, request.member_forces, diagram_kind,
                                       plane=request.plane, divisions=request.divisions)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return StreamingResponse(
        iter([df.to_csv(index=False)]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={diagram_kind.value}.csv"}
    )


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8000)
