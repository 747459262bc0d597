from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from smartnotes_api.dependencies import reset_caches


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("NOTES_STORE_PATH", str(tmp_path / "notes.json"))
    monkeypatch.delenv("API_AUTH_MODE", raising=False)
    monkeypatch.delenv("NOTES_DEFAULT_SORT", raising=False)

    from main import create_app

    yield TestClient(create_app())
    reset_caches()


def test_crud_round_trip(client, tmp_path) -> None:
    created = client.post("/notes", json={"title": " Shopping List ", "content": "milk, eggs"})
    assert created.status_code == 200
    note = created.json()
    assert note["title"] == "Shopping List"
    assert note["is_edited"] is False

    got = client.get(f"/notes/{note['id']}")
    assert got.status_code == 200
    assert got.json()["content"] == "milk, eggs"

    updated = client.put(f"/notes/{note['id']}", json={"title": "Shopping", "content": "bread"})
    assert updated.status_code == 200
    assert updated.json()["created_at"] == note["created_at"]

    stored = json.loads((tmp_path / "notes.json").read_text(encoding="utf-8"))
    assert stored[0]["title"] == "Shopping"

    deleted = client.delete(f"/notes/{note['id']}")
    assert deleted.status_code == 200
    assert client.get(f"/notes/{note['id']}").status_code == 404


def test_list_filters_sorts_and_highlights(client) -> None:
    client.post("/notes", json={"title": "Shopping List", "content": "milk, eggs"})
    client.post("/notes", json={"title": "Recipe", "content": "use milk and flour"})
    client.post("/notes", json={"title": "Ideas", "content": "none"})

    r = client.get("/notes", params={"q": "Milk"})
    assert r.status_code == 200
    body = r.json()
    assert [i["title"] for i in body["items"]] == ["Recipe", "Shopping List"]
    assert body["query"] == "milk"
    assert body["sort"] == "newestFirst"
    assert body["total"] == 3
    assert body["matched"] == 2
    assert body["items"][0]["preview_html"] == 'use <span class="highlight">milk</span> and flour'

    r2 = client.get("/notes", params={"sort": "titleAsc"})
    assert [i["title"] for i in r2.json()["items"]] == ["Ideas", "Recipe", "Shopping List"]


def test_list_pagination(client) -> None:
    for title in ["a", "b", "c"]:
        client.post("/notes", json={"title": title, "content": "x"})
    r = client.get("/notes", params={"sort": "titleAsc", "limit": 2})
    body = r.json()
    assert [i["title"] for i in body["items"]] == ["a", "b"]
    assert body["next_cursor"] == 2
    r2 = client.get("/notes", params={"sort": "titleAsc", "limit": 2, "cursor": 2})
    assert [i["title"] for i in r2.json()["items"]] == ["c"]
    assert r2.json()["next_cursor"] is None


def test_empty_messages(client) -> None:
    assert client.get("/notes").json()["empty_message"].startswith("No notes yet")
    client.post("/notes", json={"title": "t", "content": "c"})
    assert client.get("/notes", params={"q": "zzz"}).json()["empty_message"] == "No notes found matching your search."


def test_bad_input_is_rejected(client) -> None:
    assert client.post("/notes", json={"title": "  ", "content": "c"}).status_code == 400
    assert client.get("/notes", params={"sort": "sideways"}).status_code == 400
    assert client.put("/notes/missing", json={"title": "t", "content": "c"}).status_code == 404
    assert client.delete("/notes/missing").status_code == 404


def test_cards_endpoint_returns_escaped_html(client) -> None:
    client.post("/notes", json={"title": "<b>x</b>", "content": "a+b test"})
    r = client.get("/notes/cards", params={"q": "a+b"})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "&lt;b&gt;x&lt;/b&gt;" in r.text
    assert '<span class="highlight">a+b</span> test' in r.text


def test_corrupt_store_is_reported(tmp_path, monkeypatch) -> None:
    path = tmp_path / "notes.json"
    path.write_text("{broken", encoding="utf-8")
    monkeypatch.setenv("NOTES_STORE_PATH", str(path))

    from main import create_app

    client = TestClient(create_app())
    r = client.get("/notes")
    assert r.status_code == 500
    assert r.json()["detail"] == "store_corrupt"
    reset_caches()


def test_storage_full_is_reported(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("NOTES_STORE_PATH", str(tmp_path / "notes.json"))
    monkeypatch.setenv("NOTES_MAX_STORE_BYTES", "50")

    from main import create_app

    client = TestClient(create_app())
    r = client.post("/notes", json={"title": "t", "content": "c"})
    assert r.status_code == 507
    assert r.json()["detail"] == "storage_full"
    reset_caches()
