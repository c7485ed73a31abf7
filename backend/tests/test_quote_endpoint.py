import json
import logging

from fastapi.testclient import TestClient

from app.main import app
import app.api.api_quote as api_quote
import app.api.dependencies as dependencies

client = TestClient(app)

EDUCATION_PAYLOAD = {
    "profile": {"industry": "education"},
    "rooms": [
        {"name": "Classroom", "quantity": 15, "minutes_per_unit": 15},
        {"name": "Restroom", "quantity": 6, "minutes_per_unit": 20},
    ],
    "porters": [{"name": "Day Porter", "quantity": 1, "hours_per_day": 8}],
}


def test_estimate_education():
    res = client.post("/api/v1/quotes/estimate", json=EDUCATION_PAYLOAD)
    assert res.status_code == 200
    data = res.json()
    assert data["grand_total"] == "7424.68"
    assert data["method"] == "Integrated Campus Labor Model"
    assert data["industry"] == "education"
    assert [line["label"] for line in data["breakdown"]] == [
        "Academic Area Maintenance",
        "Day Porter Logistics",
    ]
    assert "internal" not in data


def test_estimate_logs_total(caplog):
    caplog.set_level(logging.INFO, logger="app.api.api_quote")
    client.post("/api/v1/quotes/estimate", json=EDUCATION_PAYLOAD)
    assert any(
        r.getMessage() == "Quote estimated" and r.grand_total == "7424.68"
        for r in caplog.records
    )


def test_internal_view_requires_setting(monkeypatch):
    payload = {**EDUCATION_PAYLOAD, "include_internal": True}
    res = client.post("/api/v1/quotes/estimate", json=payload)
    assert "internal" not in res.json()

    monkeypatch.setattr(api_quote.settings, "INCLUDE_INTERNAL_BREAKDOWN", True)
    res = client.post("/api/v1/quotes/estimate", json=payload)
    internal = res.json()["internal"]
    assert internal["net_profit"] == "1318.40"
    assert internal["total_monthly_hours"] == "297.96"

    res = client.post("/api/v1/quotes/estimate", json=EDUCATION_PAYLOAD)
    assert "internal" not in res.json()


def test_estimate_onetime():
    payload = {"profile": {"industry": "office", "square_footage": 10000, "service_mode": "onetime"}}
    data = client.post("/api/v1/quotes/estimate", json=payload).json()
    assert data["grand_total"] == "1050.00"
    assert data["method"] == "Project-Based Scope Estimate"
    assert data["service_mode"] == "onetime"


def test_estimate_unknown_industry_uses_default():
    payload = {"profile": {"industry": "spaceport", "square_footage": 1000}}
    data = client.post("/api/v1/quotes/estimate", json=payload).json()
    assert data["industry"] == "default"
    assert data["grand_total"] == "180.00"


def test_estimate_rejects_negative_input():
    payload = {"profile": {"industry": "office", "square_footage": -5}}
    res = client.post("/api/v1/quotes/estimate", json=payload)
    assert res.status_code == 422
    assert any(err["loc"][-1] == "square_footage" for err in res.json()["detail"])


def test_estimate_rejects_oversize_input():
    payload = {"profile": {"industry": "office", "square_footage": 1e30}}
    res = client.post("/api/v1/quotes/estimate", json=payload)
    assert res.status_code == 422
    assert any(err["loc"][-1] == "square_footage" for err in res.json()["detail"])


def test_estimate_rejects_unknown_tier():
    payload = {"profile": {"industry": "hoa", "building_size": "penthouse"}}
    res = client.post("/api/v1/quotes/estimate", json=payload)
    assert res.status_code == 422


def test_estimate_uses_rate_override_file(tmp_path, monkeypatch):
    path = tmp_path / "rates.json"
    path.write_text(json.dumps({"hoa_monthly_bands": {"medium": 2750}}))
    monkeypatch.setattr(dependencies.settings, "PRICING_RATES_FILE", str(path))
    data = client.post("/api/v1/quotes/estimate", json={"profile": {"industry": "hoa"}}).json()
    assert data["grand_total"] == "2750.00"


def test_broken_rate_file_returns_503(tmp_path, monkeypatch):
    path = tmp_path / "rates.json"
    path.write_text("{oops")
    monkeypatch.setattr(dependencies.settings, "PRICING_RATES_FILE", str(path))
    res = client.post("/api/v1/quotes/estimate", json={"profile": {"industry": "hoa"}})
    assert res.status_code == 503
    detail = res.json()["detail"]
    assert detail["message"] == "Pricing configuration unavailable"
    assert "rates" in detail["field_errors"]


def test_list_industries():
    res = client.get("/api/v1/quotes/industries")
    assert res.status_code == 200
    industries = {row["industry"]: row for row in res.json()}
    assert len(industries) == 11
    assert industries["church"]["label"] == "Religious/Church"
    assert industries["hoa"]["pricing_basis"] == "fixed monthly band"


def test_presets_for_industry():
    res = client.get("/api/v1/quotes/presets/fitness")
    assert res.status_code == 200
    names = [row["name"] for row in res.json()]
    assert "Main Weight Floor" in names
    assert res.json()[0]["minutes_per_unit"] == 45


def test_presets_unknown_industry_404():
    res = client.get("/api/v1/quotes/presets/spaceport")
    assert res.status_code == 404
    assert res.json()["detail"]["field_errors"] == {"industry": "not_found"}


def test_tier_tables():
    data = client.get("/api/v1/quotes/tiers").json()
    assert [row["tier"] for row in data["retail_visit_rates"]] == ["small", "medium", "large"]
    hoa = {row["tier"]: row for row in data["hoa_monthly_bands"]}
    assert hoa["luxury"]["amount"] == "5500"
    assert hoa["small"]["lower"] == "2 floors"


def test_quote_defaults():
    data = client.get("/api/v1/quotes/defaults").json()
    assert data["profile"]["industry"] == "education"
    assert [room["name"] for room in data["rooms"]] == ["Classroom", "Hallway/Corridor", "Restroom"]
    assert data["porters"][0]["hours_per_day"] == 8
    # 465 room-minutes a day plus one 8-hour porter
    assert data["quote"]["grand_total"] == "8529.85"
    assert "internal" not in data["quote"]
