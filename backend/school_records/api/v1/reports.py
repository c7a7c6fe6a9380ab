"""
School Records - Report API Routes
Filtered previews and PDF / Excel downloads of student and plan reports
"""
from io import BytesIO
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from school_records.api.deps import CurrentSession, DbSession
from school_records.schemas.plan import PlanResponse
from school_records.schemas.report import (
    PlanPreviewRow,
    ReportPreview,
    StudentPreviewRow,
)
from school_records.schemas.student import ProgressResponse, StudentResponse
from school_records.services.filters import FilterSpec
from school_records.services.report import ReportService
from school_records.services.reports import ReportFormat, ReportKind

router = APIRouter(prefix="/reports", tags=["Reports"])


def report_filters(
    class_name: Annotated[str | None, Query(alias="class")] = None,
    teacher_id: Annotated[str | None, Query(alias="teacherId")] = None,
    plan_type: Annotated[str | None, Query(alias="type")] = None,
    start_date: Annotated[str | None, Query(alias="startDate")] = None,
    end_date: Annotated[str | None, Query(alias="endDate")] = None,
    search: str | None = None,
) -> FilterSpec:
    """Query parameters shared by previews and downloads."""
    return FilterSpec.from_query(
        class_name=class_name,
        teacher_id=teacher_id,
        plan_type=plan_type,
        start_date=start_date,
        end_date=end_date,
        search=search,
    )


ReportFilters = Annotated[FilterSpec, Depends(report_filters)]


@router.get(
    "/{kind}/preview",
    response_model=ReportPreview,
    summary="Preview report rows",
    description="The rows a report would contain for the given filters.",
)
async def preview_report(
    kind: ReportKind,
    spec: ReportFilters,
    session: CurrentSession,
    db: DbSession,
) -> ReportPreview:
    rows = await ReportService(db, session).list_filtered(kind, spec)
    preview = ReportPreview(kind=kind.value, total=len(rows), filters=dict(spec.describe()))

    if kind == ReportKind.STUDENT:
        preview.students = [
            StudentPreviewRow(
                student=StudentResponse.model_validate(row.student),
                teacher_name=row.teacher_name,
                progress=[ProgressResponse.model_validate(e) for e in row.progress],
            )
            for row in rows
        ]
    else:
        preview.plans = [
            PlanPreviewRow(plan=PlanResponse.model_validate(row.plan), creator_name=row.creator_name)
            for row in rows
        ]
    return preview


@router.get(
    "/{kind}/{fmt}",
    summary="Download a report",
    description="Generate a PDF or Excel report. Photos are embedded in student PDFs "
                "when includePhotos is true.",
)
async def download_report(
    kind: ReportKind,
    fmt: ReportFormat,
    spec: ReportFilters,
    session: CurrentSession,
    db: DbSession,
    include_photos: Annotated[bool, Query(alias="includePhotos")] = False,
) -> StreamingResponse:
    report = await ReportService(db, session).generate_report(kind, fmt, spec, include_photos)
    headers = {"Content-Disposition": f"attachment; filename={report.filename}"}
    return StreamingResponse(
        BytesIO(report.content),
        media_type=report.media_type,
        headers=headers,
    )
