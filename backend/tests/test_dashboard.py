"""
School Records - Dashboard API Tests
"""
from datetime import date

import pytest
from httpx import AsyncClient

from conftest import make_plan, make_progress, make_student
from school_records.models import ClassLevel, PlanType, WritingSpeed


@pytest.mark.asyncio
async def test_dashboard_stats_for_admin(client: AsyncClient, db_session, teacher, other_teacher, admin_headers):
    aarav = await make_student(db_session, teacher, "Aarav Sharma")
    await make_student(db_session, teacher, "Bipana Karki")
    await make_student(
        db_session, other_teacher, "Diya Gurung",
        class_name=ClassLevel.NURSERY, writing_speed=WritingSpeed.NOT_APPLICABLE,
    )
    await make_progress(db_session, aarav, date(2024, 1, 10), comments="First week")
    await make_progress(db_session, aarav, date(2024, 2, 10), comments="Second month")
    await make_plan(db_session, teacher, "Colours week")
    await make_plan(db_session, other_teacher, "Year of play", PlanType.ANNUAL)

    response = await client.get("/api/dashboard/stats", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()

    assert data["total_students"] == 3
    assert data["class_count"] == 2
    assert {c["class"]: c["count"] for c in data["students_by_class"]} == {"Nursery": 1, "LKG": 2, "UKG": 0}
    assert data["total_teachers"] == 2
    assert {p["type"]: p["count"] for p in data["plans_by_type"]} == {"Annual": 1, "Monthly": 0, "Weekly": 1}
    assert [p["comments"] for p in data["recent_progress"]] == ["Second month", "First week"]
    assert data["recent_progress"][0]["student_name"] == "Aarav Sharma"


@pytest.mark.asyncio
async def test_dashboard_stats_are_scoped_for_teachers(
    client: AsyncClient, db_session, teacher, other_teacher, teacher_headers
):
    await make_student(db_session, teacher, "Aarav Sharma")
    bipana = await make_student(db_session, other_teacher, "Bipana Karki", class_name=ClassLevel.UKG)
    await make_progress(db_session, bipana, date(2024, 1, 10))

    response = await client.get("/api/dashboard/stats", headers=teacher_headers)
    data = response.json()
    assert data["total_students"] == 1
    assert data["class_count"] == 1
    assert data["recent_progress"] == []


@pytest.mark.asyncio
async def test_dashboard_requires_login(client: AsyncClient):
    response = await client.get("/api/dashboard/stats")
    assert response.status_code == 401
