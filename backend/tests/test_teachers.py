"""
School Records - Teacher Management API Tests
"""
import pytest
from httpx import AsyncClient

from conftest import make_student


@pytest.mark.asyncio
async def test_teacher_routes_are_admin_only(client: AsyncClient, teacher_headers):
    response = await client.get("/api/teachers", headers=teacher_headers)
    assert response.status_code == 403
    assert response.json()["message"] == "Insufficient permissions"


@pytest.mark.asyncio
async def test_create_and_login_as_teacher(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/teachers",
        json={
            "name": "Chandra Magar",
            "email": "Chandra@School.test",
            "password": "lkg123",
            "assigned_classes": ["UKG", "LKG", "UKG"],
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "chandra@school.test"
    assert data["role"] == "teacher"
    assert data["assigned_classes"] == ["UKG", "LKG"]

    response = await client.post(
        "/api/auth/login", json={"email": "chandra@school.test", "password": "lkg123"}
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_duplicate_email_conflicts(client: AsyncClient, teacher, admin_headers):
    response = await client.post(
        "/api/teachers",
        json={"name": "Asha Again", "email": "asha@school.test", "password": "lkg123"},
        headers=admin_headers,
    )
    assert response.status_code == 409
    assert response.json()["message"] == "Email already registered"


@pytest.mark.asyncio
async def test_short_password_is_rejected(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/teachers",
        json={"name": "New Teacher", "email": "new@school.test", "password": "123"},
        headers=admin_headers,
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_and_update_teacher(client: AsyncClient, teacher, other_teacher, admin_headers):
    response = await client.get("/api/teachers", headers=admin_headers)
    assert [t["name"] for t in response.json()] == ["Asha Rai", "Bina Shrestha"]

    response = await client.put(
        f"/api/teachers/{teacher.id}",
        json={"assigned_classes": ["Nursery"], "is_active": False},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["assigned_classes"] == ["Nursery"]
    assert response.json()["is_active"] is False


@pytest.mark.asyncio
async def test_reset_password(client: AsyncClient, teacher, admin_headers):
    response = await client.post(
        f"/api/teachers/{teacher.id}/reset-password",
        json={"new_password": "ukg456"},
        headers=admin_headers,
    )
    assert response.status_code == 200

    response = await client.post("/api/auth/login", json={"email": "asha@school.test", "password": "ukg456"})
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_delete_teacher_with_students_conflicts(client: AsyncClient, db_session, teacher, admin_headers):
    await make_student(db_session, teacher, "Aarav Sharma")
    response = await client.delete(f"/api/teachers/{teacher.id}", headers=admin_headers)
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_delete_teacher(client: AsyncClient, other_teacher, admin_headers):
    response = await client.delete(f"/api/teachers/{other_teacher.id}", headers=admin_headers)
    assert response.status_code == 204

    response = await client.get(f"/api/teachers/{other_teacher.id}", headers=admin_headers)
    assert response.status_code == 404
