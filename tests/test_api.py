# File: tests/test_api.py
"""
TEST: FastAPI Endpoints
=======================

Exercises the HTTP surface with FastAPI's TestClient.
"""

import io

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from api.main import app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def payload(portal_2d):
    nodes, members, displacements, member_forces, section_checks = portal_2d
    return {
        "nodes": nodes,
        "members": members,
        "displacements": displacements,
        "member_forces": member_forces,
        "section_checks": section_checks,
    }


def test_health(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "moment" in response.json()["kinds"]


def test_render_png(client, payload):
    response = client.post("/api/diagrams/moment", json=payload)

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content.startswith(b"\x89PNG")
    assert int(response.headers["X-Diagram-Frames"]) >= 1
    assert float(response.headers["X-Diagram-Scale"]) > 0


def test_frame_scales_header(client, payload):
    """Force diagrams report the capped scale of every frame next to the initial one."""
    response = client.post("/api/diagrams/moment", json=payload)

    initial = float(response.headers["X-Diagram-Scale"])
    frame_scales = [float(s) for s in response.headers["X-Diagram-Frame-Scales"].split(",")]
    assert len(frame_scales) == int(response.headers["X-Diagram-Frames"])
    assert all(0 < s <= initial * (1 + 1e-5) for s in frame_scales)


def test_render_deformation_with_manual_scale(client, payload):
    payload["manual_scale"] = 50.0
    response = client.post("/api/diagrams/deformation", json=payload)

    assert response.status_code == 200
    assert float(response.headers["X-Diagram-Scale"]) == pytest.approx(50.0)


def test_unknown_kind_is_400(client, payload):
    response = client.post("/api/diagrams/torsion", json=payload)
    assert response.status_code == 400


def test_bad_displacement_length_is_400(client, payload):
    payload["displacements"] = [0.0] * 7
    response = client.post("/api/diagrams/deformation", json=payload)

    assert response.status_code == 400
    assert "displacement" in response.json()["detail"].lower()


def test_nothing_to_draw_is_204(client, payload):
    payload["displacements"] = [0.0] * 12
    response = client.post("/api/diagrams/deformation", json=payload)

    assert response.status_code == 204
    assert response.content == b""


def test_table_csv(client, payload):
    payload["divisions"] = 4
    response = client.post("/api/diagrams/moment/table", json=payload)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    table = pd.read_csv(io.StringIO(response.text))
    assert list(table.columns) == ["member", "xi", "x", "value"]
    assert len(table) == 3 * 5


def test_ratio_table_csv(client, payload):
    response = client.post("/api/diagrams/capacity_ratio/table", json=payload)
    table = pd.read_csv(io.StringIO(response.text))

    assert response.status_code == 200
    assert not table[table["member"] == 2]["ok"].any()


def test_bad_plane_is_400(client, payload):
    payload["plane"] = "ab"
    response = client.post("/api/diagrams/shear/table", json=payload)
    assert response.status_code == 400
