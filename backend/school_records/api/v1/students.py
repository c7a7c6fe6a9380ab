"""
School Records - Student API Routes
Roster endpoints; teachers only ever see their own students
"""
from typing import Annotated

from fastapi import APIRouter, Query, status

from school_records.api.deps import CurrentSession, DbSession
from school_records.models.enums import LearningAbility
from school_records.schemas.student import (
    StudentAssign,
    StudentCreate,
    StudentResponse,
    StudentUpdate,
)
from school_records.services.filters import FilterSpec, filter_students
from school_records.services.students import StudentService

router = APIRouter(prefix="/students", tags=["Students"])


@router.get(
    "",
    response_model=list[StudentResponse],
    summary="List students",
    description="Filter by class, teacher, learning ability and a name search. "
                "Unknown or 'all' values are ignored.",
)
async def list_students(
    session: CurrentSession,
    db: DbSession,
    class_name: Annotated[str | None, Query(alias="class")] = None,
    teacher_id: Annotated[str | None, Query(alias="teacherId")] = None,
    learning_ability: Annotated[str | None, Query(alias="learningAbility")] = None,
    search: str | None = None,
) -> list[StudentResponse]:
    spec = FilterSpec.from_query(
        class_name=class_name,
        teacher_id=teacher_id,
        search=search,
    ).for_owner(session.owner_scope)
    try:
        ability = LearningAbility(learning_ability) if learning_ability else None
    except ValueError:
        ability = None

    students = await StudentService(db, session).list_students(
        class_name=spec.class_name,
        teacher_id=spec.teacher_id,
        learning_ability=ability,
    )
    return [StudentResponse.model_validate(s) for s in filter_students(students, spec)]


@router.post(
    "",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a student",
)
async def create_student(
    data: StudentCreate,
    session: CurrentSession,
    db: DbSession,
) -> StudentResponse:
    student = await StudentService(db, session).create_student(data)
    return StudentResponse.model_validate(student)


@router.get(
    "/{student_id}",
    response_model=StudentResponse,
    summary="Get a student",
)
async def get_student(
    student_id: int,
    session: CurrentSession,
    db: DbSession,
) -> StudentResponse:
    student = await StudentService(db, session).get_student(student_id)
    return StudentResponse.model_validate(student)


@router.put(
    "/{student_id}",
    response_model=StudentResponse,
    summary="Update a student",
)
async def update_student(
    student_id: int,
    data: StudentUpdate,
    session: CurrentSession,
    db: DbSession,
) -> StudentResponse:
    student = await StudentService(db, session).update_student(student_id, data)
    return StudentResponse.model_validate(student)


@router.delete(
    "/{student_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a student and their progress history",
)
async def delete_student(
    student_id: int,
    session: CurrentSession,
    db: DbSession,
) -> None:
    await StudentService(db, session).delete_student(student_id)


@router.post(
    "/{student_id}/assign",
    response_model=StudentResponse,
    summary="Assign a student to a teacher",
    description="Admin only.",
)
async def assign_student(
    student_id: int,
    data: StudentAssign,
    session: CurrentSession,
    db: DbSession,
) -> StudentResponse:
    student = await StudentService(db, session).assign_student(student_id, data.teacher_id)
    return StudentResponse.model_validate(student)
