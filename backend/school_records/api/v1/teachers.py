"""
School Records - Teacher API Routes
Admin-only management of teacher accounts
"""
from fastapi import APIRouter, status

from school_records.api.deps import AdminSession, DbSession
from school_records.schemas.user import (
    PasswordReset,
    TeacherCreate,
    TeacherResponse,
    TeacherUpdate,
)
from school_records.services.teachers import TeacherService

router = APIRouter(prefix="/teachers", tags=["Teachers"])


@router.get(
    "",
    response_model=list[TeacherResponse],
    summary="List teachers",
)
async def list_teachers(
    session: AdminSession,
    db: DbSession,
) -> list[TeacherResponse]:
    teachers = await TeacherService(db).list_teachers()
    return [TeacherResponse.model_validate(t) for t in teachers]


@router.post(
    "",
    response_model=TeacherResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a teacher account",
)
async def create_teacher(
    data: TeacherCreate,
    session: AdminSession,
    db: DbSession,
) -> TeacherResponse:
    teacher = await TeacherService(db).create_teacher(data)
    return TeacherResponse.model_validate(teacher)


@router.get(
    "/{teacher_id}",
    response_model=TeacherResponse,
    summary="Get a teacher",
)
async def get_teacher(
    teacher_id: int,
    session: AdminSession,
    db: DbSession,
) -> TeacherResponse:
    teacher = await TeacherService(db).get_teacher(teacher_id)
    return TeacherResponse.model_validate(teacher)


@router.put(
    "/{teacher_id}",
    response_model=TeacherResponse,
    summary="Update a teacher",
)
async def update_teacher(
    teacher_id: int,
    data: TeacherUpdate,
    session: AdminSession,
    db: DbSession,
) -> TeacherResponse:
    teacher = await TeacherService(db).update_teacher(teacher_id, data)
    return TeacherResponse.model_validate(teacher)


@router.delete(
    "/{teacher_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a teacher",
    description="Fails with 409 while the teacher still owns students.",
)
async def delete_teacher(
    teacher_id: int,
    session: AdminSession,
    db: DbSession,
) -> None:
    await TeacherService(db).delete_teacher(teacher_id)


@router.post(
    "/{teacher_id}/reset-password",
    response_model=TeacherResponse,
    summary="Reset a teacher's password",
)
async def reset_password(
    teacher_id: int,
    data: PasswordReset,
    session: AdminSession,
    db: DbSession,
) -> TeacherResponse:
    teacher = await TeacherService(db).reset_password(teacher_id, data.new_password)
    return TeacherResponse.model_validate(teacher)
