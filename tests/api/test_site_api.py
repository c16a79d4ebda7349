"""Config, health and response headers."""


async def test_public_config(client):
    res = await client.get("/api/config")
    assert res.status_code == 200
    assert res.json() == {"baseUrl": ""}


async def test_health(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json()["status"] == "ready"


async def test_security_headers(client):
    res = await client.get("/health")
    assert res.headers["Referrer-Policy"] == "no-referrer"
    assert res.headers["X-Content-Type-Options"] == "nosniff"
    assert res.headers["X-Frame-Options"] == "DENY"
    assert "frame-ancestors 'none'" in res.headers["Content-Security-Policy"]
    assert "X-Robots-Tag" not in res.headers
    assert "Strict-Transport-Security" not in res.headers


async def test_shared_document_pages_are_not_indexed(client):
    res = await client.get("/d/abc12345")
    assert res.headers["X-Robots-Tag"] == "noindex"


async def test_malformed_body_is_validation_error(client):
    res = await client.post("/auth/login", content=b"not json", headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert res.json()["error"] == "validation_error"
