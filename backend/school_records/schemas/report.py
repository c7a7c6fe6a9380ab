"""
School Records - Dashboard and Report Schemas
Response models for dashboard stats and report previews
"""
from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from school_records.schemas.plan import PlanResponse
from school_records.schemas.student import ProgressResponse, StudentResponse


class ClassCount(BaseModel):
    """Number of students in one class."""
    model_config = ConfigDict(populate_by_name=True)

    class_name: str = Field(alias="class")
    count: int


class PlanTypeCount(BaseModel):
    type: str
    count: int


class RecentProgress(BaseModel):
    """A progress entry as listed on the dashboard."""
    id: int
    student_id: int
    student_name: str
    date: date
    comments: str | None = None


class DashboardStats(BaseModel):
    """Headline numbers for the dashboard."""
    total_students: int
    class_count: int
    students_by_class: list[ClassCount]
    total_teachers: int
    plans_by_type: list[PlanTypeCount]
    recent_progress: list[RecentProgress]


class StudentPreviewRow(BaseModel):
    student: StudentResponse
    teacher_name: str | None = None
    progress: list[ProgressResponse] = []


class PlanPreviewRow(BaseModel):
    plan: PlanResponse
    creator_name: str | None = None


class ReportPreview(BaseModel):
    """Rows a report would contain for the given filters."""
    kind: str
    total: int
    filters: dict[str, str]
    students: list[StudentPreviewRow] | None = None
    plans: list[PlanPreviewRow] | None = None
