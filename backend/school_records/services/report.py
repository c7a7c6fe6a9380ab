"""
School Records - Report Service
Filter composition and report generation exposed to the API layer
"""
import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from school_records.services.auth import UserSession
from school_records.services.errors import ValidationFailedError
from school_records.services.filters import (
    FilterSpec,
    filter_plans,
    filter_progress,
    filter_students,
    group_progress,
)
from school_records.services.photos import PhotoFetcher
from school_records.services.plans import PlanService
from school_records.services.reports import (
    PlanRow,
    ReportFormat,
    ReportKind,
    ReportOptions,
    StudentRow,
    build_plan_pdf,
    build_plan_workbook,
    build_student_pdf,
    build_student_workbook,
    report_filename,
)
from school_records.services.reports.common import MEDIA_TYPES
from school_records.services.students import StudentService
from school_records.services.teachers import TeacherService

logger = logging.getLogger(__name__)


class ReportValidationError(ValidationFailedError):
    """Filter values are missing or inconsistent; nothing was generated."""
    pass


@dataclass(frozen=True)
class GeneratedReport:
    content: bytes
    media_type: str
    filename: str


class ReportService:
    """
    Builds report rows from a filter spec and renders them.

    Each call reads its own snapshot of the records, so concurrent requests
    (a PDF and an Excel export fired together) never share state.
    """

    def __init__(
        self,
        db: AsyncSession,
        session: UserSession,
        photo_fetcher: PhotoFetcher | None = None,
    ):
        self.db = db
        self.session = session
        self.students = StudentService(db, session)
        self.plans = PlanService(db, session)
        self.teachers = TeacherService(db)
        self.photo_fetcher = photo_fetcher or PhotoFetcher()

    @staticmethod
    def validate(spec: FilterSpec) -> None:
        """Reject unusable filters before any work begins."""
        if spec.has_partial_date_range:
            raise ReportValidationError("Both start date and end date are required for a date range")
        if spec.start_date and spec.end_date and spec.start_date > spec.end_date:
            raise ReportValidationError("Start date must be on or before end date")

    async def student_rows(self, spec: FilterSpec) -> list[StudentRow]:
        students = await self.students.list_students(
            class_name=spec.class_name,
            teacher_id=spec.teacher_id,
        )
        students = filter_students(students, spec)
        entries = await self.students.list_progress(
            [s.id for s in students],
            start_date=spec.start_date,
            end_date=spec.end_date,
        )
        grouped = group_progress(filter_progress(entries, spec))
        names = await self.teachers.names_by_id(s.teacher_id for s in students)
        return [
            StudentRow(
                student=s,
                teacher_name=names.get(s.teacher_id),
                progress=grouped.get(s.id, []),
            )
            for s in students
        ]

    async def plan_rows(self, spec: FilterSpec) -> list[PlanRow]:
        plans = await self.plans.list_plans(
            plan_type=spec.plan_type,
            class_name=spec.class_name,
            teacher_id=spec.teacher_id,
        )
        plans = filter_plans(plans, spec)
        names = await self.teachers.names_by_id(p.created_by for p in plans)
        return [PlanRow(plan=p, creator_name=names.get(p.created_by)) for p in plans]

    async def list_filtered(self, kind: ReportKind, spec: FilterSpec) -> list[StudentRow] | list[PlanRow]:
        """Rows matching every filter in ``spec``, in stable order."""
        self.validate(spec)
        spec = spec.for_owner(self.session.owner_scope)
        if kind == ReportKind.STUDENT:
            return await self.student_rows(spec)
        return await self.plan_rows(spec)

    async def generate_report(
        self,
        kind: ReportKind,
        fmt: ReportFormat,
        spec: FilterSpec,
        include_photos: bool = False,
    ) -> GeneratedReport:
        """
        Render a report as a downloadable document.

        Raises:
            ReportValidationError: If the filters cannot produce a report
        """
        spec = spec.for_owner(self.session.owner_scope)
        rows = await self.list_filtered(kind, spec)
        options = ReportOptions(include_photos=include_photos, filters=spec)
        logger.info(
            "Generating %s %s report with %d rows for user %s",
            kind.value, fmt.value, len(rows), self.session.user_id,
        )

        if fmt == ReportFormat.EXCEL:
            if kind == ReportKind.STUDENT:
                content = build_student_workbook(rows, options)
            else:
                content = build_plan_workbook(rows, options)
        elif kind == ReportKind.STUDENT:
            photos = None
            if include_photos:
                photos = await self.photo_fetcher.fetch_many([row.student.photo_url for row in rows])
            content = build_student_pdf(rows, options, photos)
        else:
            content = build_plan_pdf(rows, options)

        return GeneratedReport(
            content=content,
            media_type=MEDIA_TYPES[fmt],
            filename=report_filename(kind, fmt, options.generated_at.date()),
        )
