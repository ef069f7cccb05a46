"""
Contract/behavior tests for src/api.py.

Validates:
- request validation (mood vocabulary, value ranges, blank chat message)
- insufficient-data status for an empty history
- insight / warnings / chat payload shapes
"""

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

import api as api_mod


@pytest.fixture
def client():
    return TestClient(api_mod.app)


def _payload(days=7, **fields):
    """Newest-first JSON records; each field is a scalar or a chronological list."""
    day = {
        "heart_rate": 70,
        "sleep_duration": 8.0,
        "water_intake": 9,
        "stress_level": 2,
        "activity_level": 40,
        "mood": "happy",
    }
    day.update(fields)
    start = datetime(2026, 3, 1, 8, 0)
    rows = []
    for i in range(days):
        row = {k: (v[i] if isinstance(v, list) else v) for k, v in day.items()}
        row["timestamp"] = (start + timedelta(days=i)).isoformat() + "Z"
        rows.append(row)
    return {"records": list(reversed(rows))}


def test_root_reports_service(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.json() == {"service": "wellness-insight-api", "status": "ok"}


def test_insights_empty_history(client):
    res = client.post("/api/v1/insights", json={"records": []})
    assert res.status_code == 200
    assert res.json() == {"insight": None, "status": "insufficient_data"}


def test_insights_payload_shape(client):
    res = client.post("/api/v1/insights", json=_payload())
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "ok"

    insight = body["insight"]
    for key in ("summary", "risk_analysis", "pattern_breakdown", "recommendations",
                "future_analysis", "disclaimer", "analysed_days", "metrics"):
        assert key in insight
    assert insight["risk_analysis"] == {
        "level": "Rendah",
        "score": 0,
        "justification": insight["risk_analysis"]["justification"],
    }
    assert set(insight["future_analysis"]) == {"current_trajectory", "improved_trajectory"}
    assert all({"priority", "action", "rationale", "topic"} <= set(r) for r in insight["recommendations"])
    assert insight["metrics"]["sleep_duration"]["average"] == pytest.approx(8.0)
    assert insight["baseline"] is None


def test_insights_accepts_partial_records(client):
    payload = {"records": [{"stress_level": 8, "sleep_duration": 5}] * 7}
    res = client.post("/api/v1/insights", json=payload)
    assert res.status_code == 200
    insight = res.json()["insight"]
    assert insight["risk_analysis"]["level"] == "Tinggi"
    assert insight["primary_concern"]["factor"] == "stress"


def test_unknown_mood_is_rejected(client):
    res = client.post("/api/v1/insights", json=_payload(mood="grumpy"))
    assert res.status_code == 422


def test_out_of_range_stress_is_rejected(client):
    res = client.post("/api/v1/warnings", json=_payload(days=3, stress_level=11))
    assert res.status_code == 422


def test_warnings_payload(client):
    res = client.post("/api/v1/warnings", json=_payload(days=3, stress_level=[9, 9, 2], heart_rate=[115, 120, 70]))
    assert res.status_code == 200
    body = res.json()
    assert body["count"] == 2
    assert [w["severity"] for w in body["warnings"]] == ["high", "medium"]
    assert set(body["warnings"][0]) == {"severity", "type", "title", "description", "action"}


def test_warnings_need_three_records(client):
    res = client.post("/api/v1/warnings", json=_payload(days=2, stress_level=9))
    assert res.json() == {"warnings": [], "count": 0}


def test_chat_answers_by_keyword(client):
    body = dict(_payload(), message="Bagaimana tidur saya?")
    res = client.post("/api/v1/chat", json=body)
    assert res.status_code == 200
    assert res.json()["answer"].startswith("Analisis tidur Anda (7 hari terakhir)")


def test_chat_without_records_gives_help_text(client):
    res = client.post("/api/v1/chat", json={"message": "halo"})
    assert res.status_code == 200
    assert "analisis pola" in res.json()["answer"]


def test_chat_blank_message(client):
    res = client.post("/api/v1/chat", json={"message": "   ", "records": []})
    assert res.status_code == 400


def test_logging_is_configured_on_startup_not_import(monkeypatch):
    calls = []
    monkeypatch.setattr(api_mod, "setup_logging", lambda *a, **kw: calls.append(a))
    app_client = TestClient(api_mod.app)
    assert calls == []
    with app_client:
        assert calls == [()]
