from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)


def test_healthz():
    resp = client.get("/healthz")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["uptime_s"] >= 0
    assert set(body) == {"status", "uptime_s", "pid"}


def test_root_message():
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Facility Quote API" in resp.json()["message"]
