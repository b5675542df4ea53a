import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.repositories.note import SqlNoteStore
from notekeeper.repositories.user import SqlUserStore


@pytest.mark.asyncio
@pytest.mark.integration
async def test_edit_window_scenario(client, clock, register, login, auth):
    token = await register("alice")
    created = await client.post("/note", json={"title": "T", "text": "hi"}, headers=auth(token))
    assert created.status_code == 200, created.text
    note = created.json()
    assert (note["title"], note["text"], note["author"]) == ("T", "hi", "alice")

    clock.advance(hours=23)
    edited = await client.put(f"/note/{note['id']}", json={"title": "T", "text": "edited"}, headers=auth(token))
    assert edited.status_code == 200, edited.text
    assert edited.json()["text"] == "edited"

    clock.advance(hours=2)
    # the first token expired at t0+24h
    expired = await client.put(f"/note/{note['id']}", json={"title": "T", "text": "late"}, headers=auth(token))
    assert expired.status_code == 401
    assert "reason" not in expired.json()

    token = await login("alice")
    late = await client.put(f"/note/{note['id']}", json={"title": "T", "text": "late"}, headers=auth(token))
    assert late.status_code == 401
    assert late.json()["reason"] == "edit_window_expired"

    deleted = await client.delete(f"/note/{note['id']}", headers=auth(token))
    assert deleted.status_code == 200, deleted.text
    assert deleted.json()["message"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_then_fetch_round_trip(client, register, auth, db_session: AsyncSession):
    token = await register("writer")
    resp = await client.post("/note", json={"title": "Groceries", "text": "milk, eggs"}, headers=auth(token))
    assert resp.status_code == 200, resp.text
    body = resp.json()

    stored = await SqlNoteStore(db_session).get_by_id(body["id"])
    writer = await SqlUserStore(db_session).get_by_username("writer")
    assert stored is not None and writer is not None
    assert (stored.title, stored.text, stored.user_id, stored.author) == (
        "Groceries",
        "milk, eggs",
        writer.id,
        "writer",
    )
    assert body["user_id"] == writer.id


@pytest.mark.asyncio
@pytest.mark.integration
async def test_edit_preserves_identity_fields(client, clock, register, auth):
    token = await register("keeper")
    note = (await client.post("/note", json={"title": "a", "text": "b"}, headers=auth(token))).json()
    clock.advance(hours=1)
    edited = (await client.put(f"/note/{note['id']}", json={"title": "c", "text": "d"}, headers=auth(token))).json()
    assert edited["id"] == note["id"]
    assert edited["user_id"] == note["user_id"]
    assert edited["created_at"] == note["created_at"]
    assert (edited["title"], edited["text"], edited["author"]) == ("c", "d", "keeper")


@pytest.mark.asyncio
@pytest.mark.integration
async def test_only_owner_may_edit_or_delete(client, register, auth):
    owner = await register("owner")
    other = await register("intruder")
    note = (await client.post("/note", json={"title": "mine", "text": "x"}, headers=auth(owner))).json()

    edit = await client.put(f"/note/{note['id']}", json={"title": "yours", "text": "y"}, headers=auth(other))
    assert edit.status_code == 401
    assert edit.json()["reason"] == "not_owner"

    delete = await client.delete(f"/note/{note['id']}", headers=auth(other))
    assert delete.status_code == 401
    assert delete.json()["reason"] == "not_owner"
    # uniform user-facing message for both reasons
    assert edit.json()["detail"] == delete.json()["detail"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_delete_twice_is_not_found(client, register, auth):
    token = await register("deleter")
    note = (await client.post("/note", json={"title": "t", "text": "x"}, headers=auth(token))).json()
    first = await client.delete(f"/note/{note['id']}", headers=auth(token))
    assert first.status_code == 200
    second = await client.delete(f"/note/{note['id']}", headers=auth(token))
    assert second.status_code == 404
    assert second.json()["detail"] == "Note not found"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_edit_missing_note(client, register, auth):
    token = await register("editor")
    resp = await client.put("/note/999999", json={"title": "t", "text": "x"}, headers=auth(token))
    assert resp.status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_note_length_limit(client, register, auth, settings):
    token = await register("verbose")
    too_long = "x" * (settings.note_max_length + 1)
    resp = await client.post("/note", json={"title": too_long, "text": "ok"}, headers=auth(token))
    assert resp.status_code == 400
    resp = await client.post("/note", json={"title": "ok", "text": too_long}, headers=auth(token))
    assert resp.status_code == 400

    note = (await client.post("/note", json={"title": "ok", "text": "ok"}, headers=auth(token))).json()
    resp = await client.put(f"/note/{note['id']}", json={"title": "ok", "text": too_long}, headers=auth(token))
    assert resp.status_code == 400


@pytest.mark.asyncio
@pytest.mark.integration
@pytest.mark.parametrize(
    "method, path",
    [("POST", "/note"), ("PUT", "/note/1"), ("DELETE", "/note/1"), ("GET", "/notes")],
)
async def test_requires_valid_token(client, method, path):
    body = {"title": "t", "text": "x"} if method in ("POST", "PUT") else None
    missing = await client.request(method, path, json=body)
    assert missing.status_code == 401
    forged = await client.request(method, path, json=body, headers={"Cookie": "token=a.b.c"})
    assert forged.status_code == 401


@pytest.mark.asyncio
@pytest.mark.integration
async def test_bearer_header_fallback(client, register):
    token = await register("bearer")
    resp = await client.post(
        "/note", json={"title": "t", "text": "x"}, headers={"Authorization": f"Bearer {token}"}
    )
    assert resp.status_code == 200, resp.text
