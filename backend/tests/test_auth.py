"""
School Records - Authentication API Tests
"""
import pytest
from httpx import AsyncClient

from conftest import ADMIN_PASSWORD, TEACHER_PASSWORD, make_user


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test the health check endpoint."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, teacher):
    response = await client.post("/api/auth/login", json={
        "email": "asha@school.test",
        "password": TEACHER_PASSWORD,
    })
    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert "refresh_token" in data
    assert data["token_type"] == "bearer"
    assert data["expires_in"] > 0


@pytest.mark.asyncio
async def test_login_is_case_insensitive_on_email(client: AsyncClient, admin):
    response = await client.post("/api/auth/login", json={
        "email": "Admin@School.TEST",
        "password": ADMIN_PASSWORD,
    })
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_login_invalid_credentials(client: AsyncClient, teacher):
    response = await client.post("/api/auth/login", json={
        "email": "asha@school.test",
        "password": "wrong-password",
    })
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_deactivated_account(client: AsyncClient, db_session):
    user = await make_user(db_session, "gone@school.test", "Former Teacher")
    user.is_active = False
    await db_session.commit()

    response = await client.post("/api/auth/login", json={
        "email": "gone@school.test",
        "password": TEACHER_PASSWORD,
    })
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_me_requires_token(client: AsyncClient):
    response = await client.get("/api/auth/me")
    assert response.status_code == 401
    assert "message" in response.json()


@pytest.mark.asyncio
async def test_me_rejects_garbage_token(client: AsyncClient):
    response = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_returns_account(client: AsyncClient, teacher, teacher_headers):
    response = await client.get("/api/auth/me", headers=teacher_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "asha@school.test"
    assert data["role"] == "teacher"
    assert data["assigned_classes"] == ["LKG"]
    assert "hashed_password" not in data


@pytest.mark.asyncio
async def test_refresh_rotates_tokens(client: AsyncClient, teacher):
    login = await client.post("/api/auth/login", json={
        "email": "asha@school.test",
        "password": TEACHER_PASSWORD,
    })
    refresh_token = login.json()["refresh_token"]

    response = await client.post("/api/auth/refresh", json={"refresh_token": refresh_token})
    assert response.status_code == 200
    assert response.json()["refresh_token"] != refresh_token

    # The old token was revoked by the rotation
    reused = await client.post("/api/auth/refresh", json={"refresh_token": refresh_token})
    assert reused.status_code == 401


@pytest.mark.asyncio
async def test_logout_revokes_refresh_token(client: AsyncClient, teacher):
    login = await client.post("/api/auth/login", json={
        "email": "asha@school.test",
        "password": TEACHER_PASSWORD,
    })
    refresh_token = login.json()["refresh_token"]

    response = await client.post("/api/auth/logout", json={"refresh_token": refresh_token})
    assert response.status_code == 204

    response = await client.post("/api/auth/refresh", json={"refresh_token": refresh_token})
    assert response.status_code == 401
