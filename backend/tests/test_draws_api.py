"""Tests for the draw catalogue endpoints."""

import pytest
from fastapi.testclient import TestClient

from drawlayout import __version__
from drawlayout.models.draw import Draw


def _side(pid, name, **extra):
    return {"participant_id": pid, "participant_name": name, **extra}


def _draw_payload(draw_id="D-100", **overrides):
    payload = {
        "draw_id": draw_id,
        "draw_name": "Men's Singles",
        "event_id": "E-1",
        "event_type": "singles",
        "draw_size": 4,
        "matches": [
            {
                "match_up_id": "m1",
                "round_number": 1,
                "round_position": 1,
                "round_name": "Semifinals",
                "side1": _side("p1", "Ana Silva", seed_number=1),
                "side2": _side("p2", "Beth Jones"),
                "winning_side": 1,
                "match_status": "completed",
                "score_side1": "6-3 6-4",
            },
            {
                "match_up_id": "m2",
                "round_number": 1,
                "round_position": 2,
                "round_name": "Semifinals",
                "side1": _side("p3", "Cara Diaz"),
                "side2": _side("p4", "Dana Lee"),
                "match_status": "IN_PROGRESS",
            },
            {
                "match_up_id": "m3",
                "round_number": 2,
                "round_position": 1,
                "round_name": "Final",
                "side1": _side("p1", "Ana Silva", seed_number=1),
            },
            {
                "match_up_id": "q1",
                "round_number": 1,
                "round_position": 1,
                "stage": "qualifying",
            },
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def draw(client: TestClient):
    response = client.post("/api/tournaments/T-1/draws", json=_draw_payload())
    assert response.status_code == 201
    return response.json()


def test_import_draw(draw):
    assert draw["draw_id"] == "D-100"
    assert draw["event_type"] == "SINGLES"
    assert draw["draw_type"] == "SINGLE_ELIMINATION"
    assert len(draw["matches"]) == 4
    assert draw["summary"] == {
        "participants_count": 4,
        "completed_matches": 1,
        "total_matches": 4,
        "status": "Active",
    }


def test_import_minimal_draw(client: TestClient):
    payload = {
        "draw_id": "D-1",
        "draw_size": 2,
        "matches": [{"match_up_id": "m", "round_number": 1, "round_position": 1}],
    }
    response = client.post("/api/tournaments/T/draws", json=payload)
    assert response.status_code == 201
    assert response.json()["matches"][0]["match_status"] == "SCHEDULED"


def test_import_duplicate_draw_conflicts(draw, client: TestClient):
    response = client.post("/api/tournaments/T-1/draws", json=_draw_payload())
    assert response.status_code == 409


def test_import_rejects_zero_position(client: TestClient):
    payload = _draw_payload()
    payload["matches"][0]["round_position"] = 0
    response = client.post("/api/tournaments/T-1/draws", json=payload)
    assert response.status_code == 422


def test_import_rejects_bad_winning_side(client: TestClient):
    payload = _draw_payload()
    payload["matches"][0]["winning_side"] = 3
    response = client.post("/api/tournaments/T-1/draws", json=payload)
    assert response.status_code == 422
    assert any("winning_side" in str(err) for err in response.json()["detail"])


def test_import_rejects_duplicate_match_ids(client: TestClient):
    payload = _draw_payload()
    payload["matches"][1]["match_up_id"] = "m1"
    response = client.post("/api/tournaments/T-1/draws", json=payload)
    assert response.status_code == 422


def test_list_draws(draw, client: TestClient):
    client.post("/api/tournaments/T-1/draws", json=_draw_payload("D-200", draw_type="round_robin"))
    client.post("/api/tournaments/T-2/draws", json=_draw_payload("D-300"))

    response = client.get("/api/tournaments/T-1/draws")
    assert response.status_code == 200
    items = response.json()
    assert [d["draw_id"] for d in items] == ["D-100", "D-200"]
    assert items[1]["draw_type"] == "ROUND_ROBIN"
    assert items[0]["stages"] == ["MAIN", "QUALIFYING"]


def test_get_draw_not_found(client: TestClient):
    assert client.get("/api/draws/nope").status_code == 404


def test_get_draw_details_for_stage(draw, client: TestClient):
    response = client.get("/api/draws/D-100", params={"stage": "main"})
    assert response.status_code == 200
    body = response.json()
    assert body["stage"] == "MAIN"
    assert [m["match_up_id"] for m in body["matches"]] == ["m1", "m2", "m3"]
    assert body["summary"] == {
        "participants_count": 4,
        "completed_matches": 1,
        "total_matches": 3,
        "status": "Active",
    }

    qualifying = client.get("/api/draws/D-100", params={"stage": "QUALIFYING"}).json()
    assert [m["match_up_id"] for m in qualifying["matches"]] == ["q1"]
    assert qualifying["summary"]["status"] == "Scheduled"


def test_get_draw_details_unknown_stage(draw, client: TestClient):
    response = client.get("/api/draws/D-100", params={"stage": "CONSOLATION"})
    assert response.status_code == 404


def test_get_draw_stages(draw, client: TestClient):
    response = client.get("/api/draws/D-100/stages")
    assert response.status_code == 200
    assert response.json() == ["MAIN", "QUALIFYING"]


def test_delete_draw(draw, client: TestClient):
    assert client.delete("/api/draws/D-100").status_code == 204
    assert client.get("/api/draws/D-100").status_code == 404
    assert client.get("/api/tournaments/T-1/draws").json() == []


def test_health(client: TestClient):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["version"] == __version__


def test_draw_created_at_is_timezone_aware():
    draw = Draw(draw_id="D-1", tournament_id="T", draw_name="", draw_size=2)
    assert draw.created_at.tzinfo is not None
