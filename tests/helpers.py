"""Request helpers shared by the API tests."""

from typing import Dict

from httpx import AsyncClient

TEST_SECRET = "test-secret"


async def register(client: AsyncClient, **overrides) -> dict:
    """POST /users with a minimal valid body; returns the ``user`` payload."""
    body = {"firstname": "A", "username": "a1", "password": "p"}
    body.update(overrides)
    resp = await client.post("/users", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()["user"]


async def login_headers(
    client: AsyncClient, username: str = "a1", password: str = "p"
) -> Dict[str, str]:
    resp = await client.post("/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}
