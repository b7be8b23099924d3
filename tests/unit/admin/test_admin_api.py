from __future__ import annotations

from fastapi.testclient import TestClient

ADMIN_USERNAME = "admin"


def _register(client: TestClient) -> int:
    response = client.post(
        "/api/users/register",
        json={"name": "Bo", "email": "bo@example.com", "password": "pw"},
    )
    return response.json()["data"]["id"]


def test_login_rejects_bad_password(client: TestClient) -> None:
    response = client.post(
        "/api/admin/login", json={"username": ADMIN_USERNAME, "password": "wrong"}
    )

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Invalid username or password"}


def test_profile_returns_admin_identity(client: TestClient, admin_headers) -> None:
    response = client.get("/api/admin/profile", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data"] == {"username": ADMIN_USERNAME, "scope": "admin"}


def test_dashboard_requires_token(client: TestClient) -> None:
    assert client.get("/api/admin/users").status_code == 401
    assert client.post("/api/admin/block", json={"userId": 1, "block": True}).status_code == 401


def test_users_listing_and_plan_change(client: TestClient, admin_headers) -> None:
    user_id = _register(client)

    changed = client.post(
        "/api/admin/planChange", headers=admin_headers, json={"userId": user_id, "newPlan": "pro"}
    )
    assert changed.status_code == 200
    assert changed.json()["message"] == "Plan updated successfully"

    users = client.get("/api/admin/users", headers=admin_headers).json()["data"]
    assert [(user["id"], user["plan"]) for user in users] == [(user_id, "pro")]
    assert all("password_hash" not in user for user in users)


def test_block_and_unblock(client: TestClient, admin_headers) -> None:
    user_id = _register(client)

    blocked = client.post(
        "/api/admin/block", headers=admin_headers, json={"userId": user_id, "block": True}
    )
    unblocked = client.post(
        "/api/admin/block", headers=admin_headers, json={"userId": user_id, "block": False}
    )

    assert blocked.json()["message"] == "User blocked successfully"
    assert blocked.json()["data"]["blocked"] is True
    assert unblocked.json()["message"] == "User unblocked successfully"
    assert unblocked.json()["data"]["blocked"] is False


def test_block_rejects_loosely_typed_input(client: TestClient, admin_headers) -> None:
    response = client.post(
        "/api/admin/block", headers=admin_headers, json={"userId": "1", "block": "yes"}
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid input"


def test_unknown_user_is_404(client: TestClient, admin_headers) -> None:
    for path, body in (
        ("/api/admin/block", {"userId": 999, "block": True}),
        ("/api/admin/unsuspend", {"userId": 999}),
        ("/api/admin/planChange", {"userId": 999, "newPlan": "pro"}),
        (
            "/api/admin/suspend",
            {"userId": 999, "suspendedFrom": "2026-01-01T00:00:00", "suspendedTo": "2026-02-01T00:00:00"},
        ),
    ):
        response = client.post(path, headers=admin_headers, json=body)
        assert response.status_code == 404, path
        assert response.json() == {"success": False, "message": "User not found"}


def test_suspend_rejects_inverted_window(client: TestClient, admin_headers) -> None:
    user_id = _register(client)

    response = client.post(
        "/api/admin/suspend",
        headers=admin_headers,
        json={"userId": user_id, "suspendedFrom": "2026-02-01T00:00:00", "suspendedTo": "2026-01-01T00:00:00"},
    )

    assert response.status_code == 400
