from __future__ import annotations

from fastapi.testclient import TestClient


def test_request_id_header_present(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("NOTES_STORE_PATH", str(tmp_path / "notes.json"))
    from main import create_app

    client = TestClient(create_app())
    r = client.get("/health")
    assert r.status_code == 200
    assert r.headers.get("x-request-id")

    r2 = client.get("/health", headers={"X-Request-ID": "abc"})
    assert r2.headers["x-request-id"] == "abc"


def test_bearer_auth_blocks_when_enabled(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("NOTES_STORE_PATH", str(tmp_path / "notes.json"))
    monkeypatch.setenv("API_AUTH_MODE", "bearer")
    monkeypatch.setenv("API_AUTH_TOKEN", "secret")

    from main import create_app

    client = TestClient(create_app())

    # Health is exempt so containers can be checked.
    r0 = client.get("/health")
    assert r0.status_code == 200

    r1 = client.get("/notes")
    assert r1.status_code == 401

    r2 = client.get("/notes", headers={"Authorization": "Bearer secret"})
    assert r2.status_code == 200
