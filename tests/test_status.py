"""Tests for the status endpoint and static landing page."""
from datetime import datetime


def test_status_ok(client):
    """Status always reports OK with a UTC timestamp."""
    response = client.get("/api/status")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["message"]
    assert body["timestamp"].endswith("Z")
    datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))


def test_status_is_repeatable(client):
    first = client.get("/api/status").json()
    second = client.get("/api/status").json()

    assert first["status"] == second["status"]
    assert first["message"] == second["message"]


def test_landing_page_served(client):
    """GET / returns the bundled index.html."""
    response = client.get("/")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "File Sharing" in response.text


def test_unknown_api_path_returns_error_payload(client):
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert "error" in response.json()
