"""
HTTP surface: reference data, costing, shift checks and forecasts.
"""
import pytest
from fastapi.testclient import TestClient

from labour_cost.main import app

STAFF = {"id": "s1", "name": "Alex Full", "employment_type": "full_time", "hourly_rate": 30}


@pytest.fixture
def client():
    return TestClient(app)


def _shift(**kw):
    shift = {
        "id": "sh1", "staff_id": "s1", "shift_date": "2025-12-17",
        "start_time": "09:00", "end_time": "17:30", "break_minutes": 30,
    }
    shift.update(kw)
    return shift


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"
    assert res.json()["awards_loaded"] == 7


def test_list_awards(client):
    res = client.get("/api/v1/awards")
    assert res.status_code == 200
    ids = [a["id"] for a in res.json()]
    assert "children-services-2020" in ids
    assert len(ids) == 7


def test_get_award(client):
    res = client.get("/api/v1/awards/retail-2020")
    assert res.status_code == 200
    assert res.json()["code"] == "MA000004"


def test_unknown_award_404(client):
    assert client.get("/api/v1/awards/nope").status_code == 404
    res = client.post("/api/v1/calculate/shift", json={"award_id": "nope", "shift": _shift(), "staff": STAFF})
    assert res.status_code == 404


def test_rates(client):
    res = client.get(
        "/api/v1/awards/children-services-2020/rates",
        params={"classification_id": "cs-4-1", "employment_type": "full_time", "on": "2025-03-01"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["base_rate"] == 30.28
    assert body["sunday_rate"] == 60.56


def test_rates_unknown_classification(client):
    res = client.get("/api/v1/awards/children-services-2020/rates", params={"classification_id": "zz"})
    assert res.status_code == 404


def test_calculate_shift_defaults_to_children_services(client):
    res = client.post("/api/v1/calculate/shift", json={"shift": _shift(), "staff": STAFF})
    assert res.status_code == 200
    body = res.json()
    assert body["gross_pay"] == 240.00
    assert body["total_cost"] == 267.60
    assert body["day_type"] == "weekday"


def test_calculate_shift_public_holiday(client):
    """Christmas Day 2025, 6h at 250%"""
    payload = {"shift": _shift(shift_date="2025-12-25", start_time="09:00", end_time="15:00", break_minutes=0),
               "staff": STAFF}
    body = client.post("/api/v1/calculate/shift", json=payload).json()
    assert body["public_holiday_pay"] == 450.00


def test_calculate_tagged_shift(client):
    shift = _shift(
        shift_type="on_call",
        on_call={"start_time": "17:00", "end_time": "23:00", "was_recalled": True, "recall_duration": 60},
    )
    body = client.post("/api/v1/calculate/shift", json={"shift": shift, "staff": STAFF}).json()
    assert [a["id"] for a in body["allowances"]] == ["on-call-allowance", "recall-payment"]


def test_malformed_time_rejected(client):
    res = client.post("/api/v1/calculate/shift", json={"shift": _shift(start_time="9am"), "staff": STAFF})
    assert res.status_code == 422


def test_calculate_weekly(client):
    payload = {
        "week_start": "2025-12-15", "week_end": "2025-12-21", "staff": STAFF,
        "shifts": [_shift(id="a"), _shift(id="b", shift_date="2025-12-18")],
    }
    body = client.post("/api/v1/calculate/weekly", json=payload).json()
    assert body["gross_pay"] == 480.00
    assert len(body["shifts"]) == 2


def test_calculate_roster(client):
    payload = {
        "start_date": "2025-12-15", "end_date": "2025-12-21", "staff": [STAFF],
        "shifts": [_shift(), _shift(id="b", shift_date="2025-12-20", start_time="09:00",
                                    end_time="13:00", break_minutes=0)],
    }
    body = client.post("/api/v1/calculate/roster", json=payload).json()
    assert body["total_cost"] == 468.30
    assert body["by_day_type"]["saturday"]["cost"] == 200.70


def test_calculate_roster_rejects_reversed_dates(client):
    payload = {"start_date": "2025-12-21", "end_date": "2025-12-15", "staff": [STAFF], "shifts": []}
    assert client.post("/api/v1/calculate/roster", json=payload).status_code == 422


def test_validate_shift_infers_sleepover(client):
    payload = {"shift": _shift(start_time="22:00", end_time="07:00", break_minutes=0), "staff": STAFF}
    body = client.post("/api/v1/shifts/validate", json=payload).json()
    assert body["validation"]["is_valid"]
    assert body["enriched_shift"]["shift_type"] == "sleepover"
    assert body["conditions"]["conditions"][0]["origin"] == "inferred"
    sleepover = [e for e in body["eligibility"] if e["allowance_code"] == "SLEEPOVER"][0]
    assert sleepover["requires_confirmation"]


def test_shift_conditions(client):
    body = client.post("/api/v1/shifts/conditions", json={"shift": _shift(travel_kilometres=10)}).json()
    assert [c["kind"] for c in body["conditions"]] == ["travel"]


def test_forecast(client):
    payload = {
        "current_shifts": [_shift(id="t1", shift_date="2025-12-18")],
        "staff": [STAFF],
        "forecast_weeks": 2,
        "reference_date": "2025-12-15",
    }
    body = client.post("/api/v1/forecast", json=payload).json()
    assert body["weeks_count"] == 2
    assert body["period_budget"] == 16000.0
    assert body["weeks"][0]["days"][3]["day_type"] == "public_holiday"


def test_forecast_weeks_out_of_range(client):
    payload = {"current_shifts": [], "staff": [STAFF], "forecast_weeks": 0}
    assert client.post("/api/v1/forecast", json=payload).status_code == 422


def test_forecast_shift(client):
    payload = {"shift": _shift(shift_date="2025-12-21", start_time="09:00", end_time="13:00", break_minutes=0),
               "staff": STAFF}
    body = client.post("/api/v1/forecast/shift", json=payload).json()
    assert body["estimated_cost"] == 267.60
