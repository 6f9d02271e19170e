"""HTTP helper utilities for tests."""

from __future__ import annotations

AUTH_PREFIX = "/api/v1/auth"


def json_headers(auth_token: str | None = None) -> dict[str, str]:
    """Return standard JSON headers, with a bearer token when given."""

    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if auth_token:
        headers["Authorization"] = f"Bearer {auth_token}"
    return headers


def sign_up_and_login(client, username: str = "alice", password: str = "s3cret") -> dict:
    """Create an account through the API and return the issued token pair."""

    resp = client.post(f"{AUTH_PREFIX}/sign-up", json={"username": username, "password": password})
    assert resp.status_code == 201, resp.get_json()
    resp = client.post(f"{AUTH_PREFIX}/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()["data"]
