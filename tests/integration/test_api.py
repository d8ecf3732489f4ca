"""
Tests for the HTTP API

Covers:
1. Vocabulary / health endpoints
2. Evaluation summary + seed - period selection, validation errors
3. Squad best-eleven - ranking, formation, category filter
4. Live capture flow - clock, protocol, errors, finalize, abort
"""

import json

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services import live_registry


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    live_registry._MATCHES.clear()


def _record(rid, subject_id, date, value, tactical=None):
    return {
        "id": rid,
        "subject_id": subject_id,
        "session_ref": f"s-{rid}",
        "session_date": date,
        "technical": {"passing": value},
        "physical": {"speed": value},
        "tactical": tactical,
    }


class TestCore:
    def test_root(self, client):
        assert client.get("/").status_code == 200

    def test_vocabulary(self, client):
        body = client.get("/api/vocabulary").json()
        assert len(body["phases"]) == 4
        assert all(len(p["actions"]) == 6 for p in body["phases"])
        assert body["results"] == ["POSITIVE", "NEUTRAL", "NEGATIVE"]
        assert len(body["zones"]) == 12
        assert "Professional" in body["categories"]


class TestEvaluation:
    def test_summary_all(self, client):
        payload = {
            "records": [
                _record("r1", "p1", "2024-03-10", 6),
                _record("r2", "p1", "2024-01-05", 8),
            ],
        }
        body = client.post("/api/evaluation/summary", json=payload).json()
        assert body["has_data"] is True
        assert body["overall_average"] == 7.0
        assert [p["date_label"] for p in body["evolution"]] == ["05/01", "10/03"]
        assert body["origins"] == {"capture": 0, "manual": 2}

    def test_summary_period_window(self, client):
        payload = {
            "period": "last7days",
            "today": "2024-03-10",
            "records": [
                _record("r1", "p1", "2024-03-10", 6),
                _record("r2", "p1", "2024-01-05", 8),
            ],
        }
        body = client.post("/api/evaluation/summary", json=payload).json()
        assert body["record_count"] == 1
        assert body["overall_average"] == 6.0

    def test_session_dates_resolved_from_sessions(self, client):
        rec = _record("r1", "p1", None, 6)
        payload = {
            "period": "today",
            "today": "2024-03-10",
            "records": [rec],
            "sessions": [{"id": "s-r1", "date": "2024-03-10", "team_id": "t1"}],
        }
        assert client.post("/api/evaluation/summary", json=payload).json()["record_count"] == 1

    def test_dated_period_requires_today(self, client):
        resp = client.post("/api/evaluation/summary", json={"period": "thisYear", "records": []})
        assert resp.status_code == 400

    def test_invalid_today(self, client):
        resp = client.post("/api/evaluation/summary", json={"period": "today", "today": "2024-02-30"})
        assert resp.status_code == 400

    def test_empty_history(self, client):
        body = client.post("/api/evaluation/summary", json={}).json()
        assert body["has_data"] is False
        assert body["ranking"] is None

    def test_seed(self, client):
        payload = {"records": [_record("r1", "p1", "2024-03-10", 7), _record("r2", "p1", "2024-03-11", 8)]}
        body = client.post("/api/evaluation/seed", json=payload).json()
        assert body["technical"]["passing"] == 7.5
        assert body["technical"]["dribbling"] == 5.0

    def test_score(self, client):
        body = client.post("/api/evaluation/score", json=_record("r1", "p1", "2024-03-10", 4, {"def_cover": 10})).json()
        assert body["score"] == pytest.approx(6.0)


class TestSquad:
    def test_best_eleven(self, client):
        payload = {
            "team_id": "t1",
            "subjects": [
                {"subject_id": "gk", "position": "GOALKEEPER", "category_id": "Sub-15"},
                {"subject_id": "st", "position": "centroavante", "category_id": "Sub-15"},
                {"subject_id": "st2", "position": "STRIKER", "category_id": "Sub-17"},
            ],
            "records": [
                _record("r1", "gk", "2024-03-01", 6),
                _record("r2", "st", "2024-03-01", 8),
                _record("r3", "st2", "2024-03-01", 9),
            ],
        }
        body = client.post("/api/squad/best-eleven", json=payload).json()
        assert len(body["best_eleven"]) == 11
        assert body["best_eleven"][0]["subject"]["subject_id"] == "gk"
        striker = [s for s in body["best_eleven"] if s["slot_role"] == "ST"][0]
        assert striker["subject"]["subject_id"] == "st2"
        assert [r["subject_id"] for r in body["ranking"]] == ["st2", "st", "gk"]
        assert body["team_average"] == 7.7

    def test_category_filter(self, client):
        payload = {
            "category_id": "Sub-15",
            "subjects": [
                {"subject_id": "st", "position": "STRIKER", "category_id": "Sub-15"},
                {"subject_id": "st2", "position": "STRIKER", "category_id": "Sub-17"},
            ],
            "records": [_record("r2", "st", "2024-03-01", 8), _record("r3", "st2", "2024-03-01", 9)],
        }
        body = client.post("/api/squad/best-eleven", json=payload).json()
        striker = [s for s in body["best_eleven"] if s["slot_role"] == "ST"][0]
        assert striker["subject"]["subject_id"] == "st"
        assert [r["subject_id"] for r in body["ranking"]] == ["st"]


class TestLiveFlow:
    @pytest.fixture
    def match_id(self, client):
        body = client.post("/api/live/matches", json={"subject_ids": ["p1", "p2"], "auto_tick": False}).json()
        return body["match_id"]

    def _post(self, client, match_id, path, payload=None):
        return client.post(f"/api/live/matches/{match_id}/{path}", json=payload)

    def test_full_capture_and_finalize(self, client, match_id):
        assert self._post(client, match_id, "clock/start").json()["clock"]["state"] == "RUNNING"
        self._post(client, match_id, "clock/tick", {"seconds": 61})
        assert self._post(client, match_id, "phase", {"phase": "OFFENSIVE"}).json()["ok"] is True
        assert self._post(client, match_id, "action", {"action": "Depth"}).json()["pending_action"] == "Depth"
        body = self._post(client, match_id, "result", {"result": "POSITIVE"}).json()
        assert body["event"]["timestamp_label"] == "01:01"
        assert self._post(client, match_id, "zone", {"zone_id": 5}).json()["event"]["zone_id"] == 5

        analysis = client.get(f"/api/live/matches/{match_id}/analysis/p1").json()
        assert analysis["impact"]["impact"] == "very_high_impact"
        assert analysis["zones"]["5"] == 1

        done = self._post(client, match_id, "finalize", {
            "subject_id": "p1", "session_date": "2024-03-10", "team_id": "t1",
        }).json()
        assert done["record"]["technical"]["passing"] == 10.0
        assert done["record"]["physical"]["speed"] == 5.0
        assert json.loads(done["record"]["notes"])["event_count"] == 1
        assert done["match_closed"] is False

        done = self._post(client, match_id, "finalize", {
            "subject_id": "p2", "session_date": "2024-03-10", "team_id": "t1",
        }).json()
        assert done["record"]["technical"]["passing"] == 5.0
        assert done["match_closed"] is True
        assert client.get(f"/api/live/matches/{match_id}").status_code == 404

    def test_capture_ignored_before_start(self, client, match_id):
        body = self._post(client, match_id, "phase", {"phase": "OFFENSIVE"}).json()
        assert body["ok"] is False
        assert body["active_phase"] is None

    def test_unknown_vocabulary_is_400(self, client, match_id):
        self._post(client, match_id, "clock/start")
        resp = self._post(client, match_id, "phase", {"phase": "SET_PIECE"})
        assert resp.status_code == 400
        assert resp.json()["detail"]["code"] == "CAPTURE_UNKNOWN_PHASE"

    def test_invalid_zone_is_400(self, client, match_id):
        resp = self._post(client, match_id, "zone", {"zone_id": 12})
        assert resp.status_code == 400
        assert resp.json()["detail"]["code"] == "CAPTURE_INVALID_ZONE"

    def test_switch_active_subject(self, client, match_id):
        self._post(client, match_id, "clock/start")
        self._post(client, match_id, "phase", {"phase": "DEFENSIVE"})
        self._post(client, match_id, "action", {"action": "Cover"})
        body = self._post(client, match_id, "active", {"subject_id": "p2"}).json()
        assert body["active_subject_id"] == "p2"
        assert body["pending_action"] is None
        assert self._post(client, match_id, "active", {"subject_id": "ghost"}).status_code == 404

    def test_illegal_clock_action(self, client, match_id):
        assert self._post(client, match_id, "clock/end_half").json()["ok"] is False
        assert self._post(client, match_id, "clock/explode").status_code == 404

    def test_press_flow(self, client, match_id):
        labels = [self._post(client, match_id, "clock/press").json()["clock"]["state"] for _ in range(3)]
        assert labels == ["RUNNING", "HALFTIME", "RUNNING"]

    def test_finalize_bad_date(self, client, match_id):
        resp = self._post(client, match_id, "finalize", {"subject_id": "p1", "session_date": "soon", "team_id": "t1"})
        assert resp.status_code == 400

    def test_abort(self, client, match_id):
        assert client.delete(f"/api/live/matches/{match_id}").json()["ok"] is True
        assert client.delete(f"/api/live/matches/{match_id}").status_code == 404

    def test_auto_tick_match(self, client):
        body = client.post("/api/live/matches", json={"subject_ids": ["p1"]}).json()
        assert body["auto_tick"] is True
        assert client.delete(f"/api/live/matches/{body['match_id']}").status_code == 200

    def test_unknown_match(self, client):
        resp = client.get("/api/live/matches/nope")
        assert resp.status_code == 404
        assert resp.json()["detail"]["code"] == "MATCH_NOT_FOUND"
