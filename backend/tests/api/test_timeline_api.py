"""Tests for the timeline layout API.

Verifies:
- Layout endpoint returns geometry for phases and tasks
- Explicit now/window are honored
- Boundary errors map to 422 with debug_id
- Grouping endpoint ordering
"""

import uuid

import pytest
from fastapi.testclient import TestClient

from blueprint_timeline.main import app

pytestmark = pytest.mark.integration

ITEMS = [
    {"id": "t1", "title": "Brief", "start_date": "2024-06-01", "due_date": "2024-06-05", "group_key": 1},
    {"id": "t2", "title": "Scope", "start_date": "2024-06-03", "due_date": "2024-06-10", "group_key": 1},
    {"id": "t3", "title": "Wireframes", "due_date": "2024-06-20", "priority": "critical", "group_key": 2},
    {"id": "t4", "title": "Unscheduled", "priority": "low"},
]


@pytest.fixture
def client():
    return TestClient(app)


def test_phase_layout_is_default_mode(client):
    response = client.post(
        "/api/timeline/layout",
        json={"items": ITEMS, "now": "2024-06-15T12:00:00Z", "phase_names": {"1": "Concept Framing"}},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["mode"] == "phases"
    assert [p["name"] for p in data["phases"]] == ["Concept Framing", "Phase 2"]
    assert data["phases"][0]["start_date"] == "2024-06-01"
    assert data["phases"][0]["end_date"] == "2024-06-10"
    assert data["phases"][0]["item_count"] == 2
    assert [bar["item_id"] for bar in data["bars"]] == ["phase-1", "phase-2"]
    assert [item["id"] for item in data["dateless"]] == ["t4"]


def test_task_layout(client):
    response = client.post(
        "/api/timeline/layout",
        json={"items": ITEMS, "mode": "tasks", "now": "2024-06-15T00:00:00Z"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["phases"] is None
    assert data["window"] == {"start": "2024-05-19", "end": "2024-07-06"}
    assert data["total_days"] == 49
    assert sum(len(column["days"]) for column in data["columns"]) == 49
    by_id = {bar["item_id"]: bar for bar in data["bars"]}
    assert by_id["t3"]["effective_start"] == "2024-06-18"
    assert data["today_percent"] == pytest.approx(100 * 27 / 49)


def test_today_marker_omitted_outside_window(client):
    response = client.post(
        "/api/timeline/layout",
        json={"items": ITEMS, "mode": "tasks", "now": "2025-01-01T00:00:00Z"},
    )

    assert response.status_code == 200
    assert response.json()["today_percent"] is None


def test_missing_now_uses_server_clock(client):
    response = client.post("/api/timeline/layout", json={"items": [], "mode": "tasks"})

    assert response.status_code == 200
    data = response.json()
    assert data["bars"] == []
    assert data["today_percent"] is not None


def test_explicit_report_window(client):
    response = client.post(
        "/api/timeline/layout",
        json={
            "items": ITEMS,
            "mode": "tasks",
            "now": "2024-06-03T00:00:00Z",
            "window": {"start": "2024-06-01", "end": "2024-06-07"},
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["window"] == {"start": "2024-06-01", "end": "2024-06-07"}
    assert data["out_of_range"] == ["t3"]
    assert data["label_interval"] == 1


def test_duplicate_ids_return_422_with_debug_id(client):
    items = [ITEMS[0], dict(ITEMS[1], id="t1")]

    response = client.post("/api/timeline/layout", json={"items": items, "now": "2024-06-15T00:00:00Z"})

    assert response.status_code == 422
    body = response.json()
    assert "t1" in body["detail"]
    uuid.UUID(body["debug_id"])


def test_inverted_window_returns_422(client):
    response = client.post(
        "/api/timeline/layout",
        json={"items": ITEMS, "now": "2024-06-15T00:00:00Z", "window": {"start": "2024-06-10", "end": "2024-06-01"}},
    )

    assert response.status_code == 422
    assert "debug_id" in response.json()


def test_unknown_priority_rejected_by_validation(client):
    response = client.post(
        "/api/timeline/layout",
        json={"items": [{"id": "t1", "due_date": "2024-06-10", "priority": "urgent"}]},
    )

    assert response.status_code == 422


def test_group_endpoint_orders_groups(client):
    response = client.post(
        "/api/timeline/groups",
        json={"items": ITEMS, "group_names": {"1": "build", "2": "Analysis"}},
    )

    assert response.status_code == 200
    groups = response.json()["groups"]
    assert [g["name"] for g in groups] == ["Unassigned", "Analysis", "build"]
    assert [item["id"] for item in groups[2]["items"]] == ["t1", "t2"]


def test_group_endpoint_rejects_duplicates(client):
    response = client.post("/api/timeline/groups", json={"items": [ITEMS[0], ITEMS[0]]})

    assert response.status_code == 422
