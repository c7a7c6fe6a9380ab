"""
School Records - Progress API Routes
Dated developmental progress entries per student
"""
from typing import Annotated

from fastapi import APIRouter, Query, status

from school_records.api.deps import CurrentSession, DbSession
from school_records.schemas.student import (
    ProgressCreate,
    ProgressResponse,
    ProgressUpdate,
)
from school_records.services.filters import FilterSpec
from school_records.services.students import StudentService

router = APIRouter(prefix="/progress", tags=["Progress"])


@router.get(
    "",
    response_model=list[ProgressResponse],
    summary="List progress entries",
    description="Newest first. A date range keeps entries within both ends inclusive.",
)
async def list_progress(
    session: CurrentSession,
    db: DbSession,
    student_id: Annotated[int | None, Query(alias="studentId")] = None,
    start_date: Annotated[str | None, Query(alias="startDate")] = None,
    end_date: Annotated[str | None, Query(alias="endDate")] = None,
) -> list[ProgressResponse]:
    spec = FilterSpec.from_query(start_date=start_date, end_date=end_date)
    entries = await StudentService(db, session).list_progress(
        [student_id] if student_id is not None else None,
        start_date=spec.start_date,
        end_date=spec.end_date,
    )
    return [ProgressResponse.model_validate(e) for e in entries]


@router.post(
    "",
    response_model=ProgressResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a progress entry",
)
async def create_progress(
    data: ProgressCreate,
    session: CurrentSession,
    db: DbSession,
) -> ProgressResponse:
    entry = await StudentService(db, session).create_progress(data)
    return ProgressResponse.model_validate(entry)


@router.get(
    "/{progress_id}",
    response_model=ProgressResponse,
    summary="Get a progress entry",
)
async def get_progress(
    progress_id: int,
    session: CurrentSession,
    db: DbSession,
) -> ProgressResponse:
    entry = await StudentService(db, session).get_progress(progress_id)
    return ProgressResponse.model_validate(entry)


@router.put(
    "/{progress_id}",
    response_model=ProgressResponse,
    summary="Update a progress entry",
)
async def update_progress(
    progress_id: int,
    data: ProgressUpdate,
    session: CurrentSession,
    db: DbSession,
) -> ProgressResponse:
    entry = await StudentService(db, session).update_progress(progress_id, data)
    return ProgressResponse.model_validate(entry)


@router.delete(
    "/{progress_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a progress entry",
)
async def delete_progress(
    progress_id: int,
    session: CurrentSession,
    db: DbSession,
) -> None:
    await StudentService(db, session).delete_progress(progress_id)
