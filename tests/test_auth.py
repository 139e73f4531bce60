import base64
import json

import httpx

from tests.helpers import ADMIN_EMAIL, ADMIN_PASSWORD


async def test_admin_login_returns_token_and_sets_cookie(client):
    response = await client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["token"]
    assert data["user"]["email"] == ADMIN_EMAIL
    assert data["user"]["role"] == "admin"
    assert "password" not in data["user"]
    assert "authToken" in response.cookies


async def test_login_with_wrong_password(client):
    response = await client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "nope"})

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid credentials"}


async def test_login_with_unknown_email(client):
    response = await client.post("/api/auth/login", json={"email": "ghost@cafe.com", "password": "whatever"})

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid credentials"


async def test_login_with_missing_fields(client):
    response = await client.post("/api/auth/login", json={})

    assert response.status_code == 401


async def test_register_creates_employee_account(client):
    response = await client.post(
        "/api/auth/register",
        json={"email": "new@cafe.com", "password": "secret1", "name": "New Hire"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["user"]["role"] == "employee"
    assert data["user"]["name"] == "New Hire"

    response = await client.post("/api/auth/login", json={"email": "new@cafe.com", "password": "secret1"})
    assert response.status_code == 200


async def test_register_duplicate_email(client):
    body = {"email": "twice@cafe.com", "password": "secret1", "name": "Twice"}
    await client.post("/api/auth/register", json=body)

    response = await client.post("/api/auth/register", json=body)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "User already exists"}


async def test_register_missing_password(client):
    response = await client.post("/api/auth/register", json={"email": "half@cafe.com"})

    assert response.status_code == 400
    assert response.json()["success"] is False


async def test_verify_with_bearer_token(client, transport):
    response = await client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    token = response.json()["token"]

    # Fresh client without the cookie jar
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as other:
        response = await other.get("/api/auth/verify", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["user"]["email"] == ADMIN_EMAIL


async def test_verify_with_cookie(client, admin):
    response = await client.get("/api/auth/verify")

    assert response.status_code == 200
    assert response.json()["user"]["id"] == admin["id"]


async def test_verify_without_token(client):
    response = await client.get("/api/auth/verify")

    assert response.status_code == 401
    assert response.json()["error"] == "No token"


async def test_verify_rejects_forged_token(client, admin):
    forged = base64.b64encode(
        json.dumps({"id": admin["id"], "email": ADMIN_EMAIL, "role": "admin"}).encode()
    ).decode()
    client.cookies.clear()

    response = await client.get("/api/auth/verify", headers={"Authorization": f"Bearer {forged}"})

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


async def test_logout_clears_cookie(client, admin):
    response = await client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}

    response = await client.get("/api/auth/verify")
    assert response.status_code == 401


async def test_reset_password(client, employee):
    response = await client.post(
        "/api/auth/reset-password",
        json={"email": "barista@cafe.com", "currentPassword": "latte123", "newPassword": "mocha456"}
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Password reset successfully"}

    response = await client.post("/api/auth/login", json={"email": "barista@cafe.com", "password": "latte123"})
    assert response.status_code == 401

    response = await client.post("/api/auth/login", json={"email": "barista@cafe.com", "password": "mocha456"})
    assert response.status_code == 200


async def test_reset_password_with_wrong_current_password(client, employee):
    response = await client.post(
        "/api/auth/reset-password",
        json={"email": "barista@cafe.com", "currentPassword": "wrong", "newPassword": "mocha456"}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Current password is incorrect"


async def test_reset_password_for_unknown_user(client):
    response = await client.post(
        "/api/auth/reset-password",
        json={"email": "ghost@cafe.com", "currentPassword": "x", "newPassword": "mocha456"}
    )

    assert response.status_code == 404
    assert response.json()["error"] == "User not found"


async def test_ping(client):
    response = await client.get("/api/ping")

    assert response.status_code == 200
