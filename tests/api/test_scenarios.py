"""End-to-end document lifecycle scenarios."""

from datetime import timedelta

from pastebox.core.clock import utcnow


async def test_expired_document_reads_expired_then_not_found(client):
    doc_id = (await client.post("/api/docs")).json()["id"]

    past = (utcnow() - timedelta(seconds=1)).isoformat()
    res = await client.post(f"/api/docs/{doc_id}/expiry", json={"expiresAt": past})
    assert res.status_code == 200

    res = await client.get(f"/api/docs/{doc_id}")
    assert res.status_code == 404
    assert res.json()["error"] == "expired"

    res = await client.get(f"/api/docs/{doc_id}")
    assert res.status_code == 404
    assert res.json()["error"] == "not_found"


async def test_password_locked_document_flow(client):
    doc_id = (await client.post("/api/docs")).json()["id"]

    res = await client.post(f"/api/docs/{doc_id}/password", json={"password": "abcd"})
    assert res.status_code == 200
    assert res.json()["ok"] is True
    assert res.json()["passwordSetAt"]

    res = await client.get(f"/api/docs/{doc_id}")
    assert res.status_code == 401
    assert res.json()["error"] == "password_required"

    res = await client.get(f"/api/docs/{doc_id}", headers={"X-Doc-Password": "abcd"})
    assert res.status_code == 200
    assert res.json()["hasPassword"] is True
    assert res.json()["content"] == {"type": "doc", "content": [{"type": "paragraph"}]}

    res = await client.post(f"/api/docs/{doc_id}/password", json={"password": "efgh"})
    assert res.status_code == 409
    assert res.json()["error"] == "password_already_set"

    # Старый пароль по-прежнему действует
    res = await client.get(f"/api/docs/{doc_id}", headers={"X-Doc-Password": "abcd"})
    assert res.status_code == 200
    res = await client.get(f"/api/docs/{doc_id}", headers={"X-Doc-Password": "efgh"})
    assert res.status_code == 401
    assert res.json()["error"] == "invalid_password"
