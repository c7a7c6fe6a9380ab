"""
School Records - Student and Progress API Tests
"""
from datetime import date

import pytest
from httpx import AsyncClient

from conftest import auth_headers, make_progress, make_student, ratings


@pytest.mark.asyncio
async def test_teacher_creates_student_they_own(client: AsyncClient, teacher, teacher_headers, student_payload):
    response = await client.post("/api/students", json=student_payload, headers=teacher_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Aarav Sharma"
    assert data["class"] == "LKG"
    assert data["teacher_id"] == teacher.id


@pytest.mark.asyncio
async def test_teacher_cannot_create_for_someone_else(
    client: AsyncClient, teacher, other_teacher, teacher_headers, student_payload
):
    payload = {**student_payload, "teacher_id": other_teacher.id}
    response = await client.post("/api/students", json=payload, headers=teacher_headers)
    assert response.status_code == 201
    assert response.json()["teacher_id"] == teacher.id


@pytest.mark.asyncio
async def test_admin_creates_student_for_teacher(
    client: AsyncClient, teacher, admin_headers, student_payload
):
    payload = {**student_payload, "teacher_id": teacher.id}
    response = await client.post("/api/students", json=payload, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["teacher_id"] == teacher.id


@pytest.mark.asyncio
async def test_nursery_student_needs_not_applicable_writing_speed(
    client: AsyncClient, teacher_headers, student_payload
):
    payload = {**student_payload, "class": "Nursery", "age": 3}
    response = await client.post("/api/students", json=payload, headers=teacher_headers)
    assert response.status_code == 422
    assert "Nursery" in response.json()["message"]

    payload["writing_speed"] = "N/A"
    response = await client.post("/api/students", json=payload, headers=teacher_headers)
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_age_is_bounded(client: AsyncClient, teacher_headers, student_payload):
    response = await client.post("/api/students", json={**student_payload, "age": 7}, headers=teacher_headers)
    assert response.status_code == 422
    assert "errors" in response.json()


@pytest.mark.asyncio
async def test_moving_to_nursery_rechecks_writing_speed(client: AsyncClient, db_session, teacher, teacher_headers):
    student = await make_student(db_session, teacher, "Aarav Sharma")
    response = await client.put(
        f"/api/students/{student.id}", json={"class": "Nursery"}, headers=teacher_headers
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_is_scoped_to_teacher(client: AsyncClient, db_session, teacher, other_teacher, teacher_headers):
    await make_student(db_session, teacher, "Aarav Sharma")
    await make_student(db_session, other_teacher, "Bipana Karki")

    # The teacherId filter cannot widen a teacher's view
    response = await client.get(
        "/api/students", params={"teacherId": other_teacher.id}, headers=teacher_headers
    )
    assert response.status_code == 200
    assert [s["name"] for s in response.json()] == ["Aarav Sharma"]


@pytest.mark.asyncio
async def test_admin_list_filters(client: AsyncClient, db_session, admin_headers, teacher, other_teacher):
    from school_records.models import ClassLevel

    await make_student(db_session, teacher, "Aarav Sharma")
    await make_student(db_session, other_teacher, "Bipana Karki", class_name=ClassLevel.UKG)
    await make_student(db_session, other_teacher, "Chirag Thapa", class_name=ClassLevel.UKG)

    response = await client.get("/api/students", headers=admin_headers)
    assert [s["name"] for s in response.json()] == ["Aarav Sharma", "Bipana Karki", "Chirag Thapa"]

    response = await client.get("/api/students", params={"class": "UKG", "search": "chi"}, headers=admin_headers)
    assert [s["name"] for s in response.json()] == ["Chirag Thapa"]

    response = await client.get("/api/students", params={"class": "all"}, headers=admin_headers)
    assert len(response.json()) == 3


@pytest.mark.asyncio
async def test_teacher_cannot_read_other_students(client: AsyncClient, db_session, other_teacher, teacher_headers):
    student = await make_student(db_session, other_teacher, "Bipana Karki")
    response = await client.get(f"/api/students/{student.id}", headers=teacher_headers)
    assert response.status_code == 403
    assert response.json()["message"] == "Unauthorized access to this student"


@pytest.mark.asyncio
async def test_missing_student(client: AsyncClient, teacher_headers):
    response = await client.get("/api/students/999", headers=teacher_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_student_removes_progress(client: AsyncClient, db_session, teacher, teacher_headers):
    student = await make_student(db_session, teacher, "Aarav Sharma")
    await make_progress(db_session, student, date(2024, 1, 10))

    response = await client.delete(f"/api/students/{student.id}", headers=teacher_headers)
    assert response.status_code == 204

    response = await client.get("/api/progress", headers=teacher_headers)
    assert response.json() == []


@pytest.mark.asyncio
async def test_assign_is_admin_only(client: AsyncClient, db_session, teacher, other_teacher, admin_headers):
    student = await make_student(db_session, teacher, "Aarav Sharma")

    response = await client.post(
        f"/api/students/{student.id}/assign",
        json={"teacher_id": other_teacher.id},
        headers=auth_headers(teacher),
    )
    assert response.status_code == 403

    response = await client.post(
        f"/api/students/{student.id}/assign",
        json={"teacher_id": other_teacher.id},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["teacher_id"] == other_teacher.id


# ============================================================================
# Progress
# ============================================================================

@pytest.mark.asyncio
async def test_record_and_list_progress(client: AsyncClient, db_session, teacher, teacher_headers):
    student = await make_student(db_session, teacher, "Aarav Sharma")

    response = await client.post(
        "/api/progress",
        json={"student_id": student.id, "date": "2024-01-15", "comments": "Settling in", **ratings()},
        headers=teacher_headers,
    )
    assert response.status_code == 201
    assert response.json()["emotional_development"] == "Good"

    await make_progress(db_session, student, date(2024, 2, 15))

    response = await client.get("/api/progress", params={"studentId": student.id}, headers=teacher_headers)
    assert [e["date"] for e in response.json()] == ["2024-02-15", "2024-01-15"]

    response = await client.get(
        "/api/progress",
        params={"startDate": "2024-01-01", "endDate": "2024-01-31"},
        headers=teacher_headers,
    )
    assert [e["comments"] for e in response.json()] == ["Settling in"]


@pytest.mark.asyncio
async def test_progress_rejects_unknown_rating(client: AsyncClient, db_session, teacher, teacher_headers):
    student = await make_student(db_session, teacher, "Aarav Sharma")
    payload = {"student_id": student.id, **ratings(), "motor_skills": "Amazing"}
    response = await client.post("/api/progress", json=payload, headers=teacher_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_progress_for_foreign_student_is_forbidden(
    client: AsyncClient, db_session, other_teacher, teacher_headers
):
    student = await make_student(db_session, other_teacher, "Bipana Karki")
    response = await client.post(
        "/api/progress", json={"student_id": student.id, **ratings()}, headers=teacher_headers
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_update_and_delete_progress(client: AsyncClient, db_session, teacher, teacher_headers):
    student = await make_student(db_session, teacher, "Aarav Sharma")
    entry = await make_progress(db_session, student, date(2024, 1, 15))

    response = await client.put(
        f"/api/progress/{entry.id}",
        json={"pre_literacy": "Excellent", "comments": "Reads own name"},
        headers=teacher_headers,
    )
    assert response.status_code == 200
    assert response.json()["pre_literacy"] == "Excellent"
    assert response.json()["social_skills"] == "Good"

    response = await client.delete(f"/api/progress/{entry.id}", headers=teacher_headers)
    assert response.status_code == 204
    response = await client.get(f"/api/progress/{entry.id}", headers=teacher_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field, value",
    [("parent_contact", "9" * 101), ("photo_url", "https://img.test/" + "a" * 500)],
)
async def test_oversized_contact_and_photo_are_rejected(
    client: AsyncClient, db_session, teacher, teacher_headers, student_payload, field, value
):
    response = await client.post(
        "/api/students", json={**student_payload, field: value}, headers=teacher_headers
    )
    assert response.status_code == 422

    student = await make_student(db_session, teacher, "Bipana Karki")
    response = await client.put(
        f"/api/students/{student.id}", json={field: value}, headers=teacher_headers
    )
    assert response.status_code == 422
