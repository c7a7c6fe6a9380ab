"""
Shared pieces of the document synthesizers: report rows, options, labels
and value formatting conventions.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from school_records.core.config import settings
from school_records.models.enums import ClassLevel, ProgressRating, WritingSpeed
from school_records.models.plan import TeachingPlan
from school_records.models.student import ProgressEntry, Student
from school_records.services.filters import FilterSpec, latest_entry

NOT_AVAILABLE = "N/A"
NO_DATA = "No data available for the selected filters"
NO_PROGRESS = "No progress entries available."


class ReportKind(str, Enum):
    STUDENT = "student"
    PLAN = "plan"


class ReportFormat(str, Enum):
    PDF = "pdf"
    EXCEL = "excel"


REPORT_TITLES = {
    ReportKind.STUDENT: "Student Progress Report",
    ReportKind.PLAN: "Teaching Plans Report",
}

FILE_EXTENSIONS = {
    ReportFormat.PDF: "pdf",
    ReportFormat.EXCEL: "xlsx",
}

MEDIA_TYPES = {
    ReportFormat.PDF: "application/pdf",
    ReportFormat.EXCEL: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

# (attribute, column label) for the five developmental categories
PROGRESS_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("social_skills", "Social Skills"),
    ("pre_literacy", "Pre-Literacy"),
    ("pre_numeracy", "Pre-Numeracy"),
    ("motor_skills", "Motor Skills"),
    ("emotional_development", "Emotional Development"),
)

# Hex text colors per rating; unknown values fall back to RATING_DEFAULT_COLOR
RATING_COLORS = {
    ProgressRating.EXCELLENT: "#15803d",
    ProgressRating.GOOD: "#1d4ed8",
    ProgressRating.NEEDS_IMPROVEMENT: "#b45309",
}
RATING_DEFAULT_COLOR = "#374151"


def rating_color(value: str | None) -> str:
    try:
        return RATING_COLORS[ProgressRating(value)]
    except ValueError:
        return RATING_DEFAULT_COLOR


@dataclass(frozen=True)
class Branding:
    """Fixed institution lines printed on every report."""
    school_name: str
    subtitle: str
    address: str

    @classmethod
    def from_settings(cls) -> "Branding":
        return cls(
            school_name=settings.SCHOOL_NAME,
            subtitle=settings.SCHOOL_SUBTITLE,
            address=settings.SCHOOL_ADDRESS,
        )


@dataclass
class ReportOptions:
    include_photos: bool = False
    filters: FilterSpec = field(default_factory=FilterSpec)
    generated_at: datetime = field(default_factory=datetime.now)
    branding: Branding = field(default_factory=Branding.from_settings)

    @property
    def period_label(self) -> str | None:
        """Human-readable date range, when one was requested."""
        if not self.filters.has_date_range:
            return None
        start = fmt_date(self.filters.start_date)
        end = fmt_date(self.filters.end_date)
        return f"{start} to {end}"


@dataclass
class StudentRow:
    """A student joined with its teacher's name and in-range progress entries."""
    student: Student
    teacher_name: str | None = None
    progress: list[ProgressEntry] = field(default_factory=list)

    @property
    def latest(self) -> ProgressEntry | None:
        return latest_entry(self.progress)

    @property
    def writing_speed(self) -> str:
        return display_writing_speed(self.student)


@dataclass
class PlanRow:
    plan: TeachingPlan
    creator_name: str | None = None

    @property
    def date_range(self) -> str:
        return f"{fmt_date(self.plan.start_date)} to {fmt_date(self.plan.end_date)}"


def fmt_date(value: date | datetime | None) -> str:
    """Dates are reported as YYYY-MM-DD."""
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def fmt_optional(value: object) -> str:
    """Absent or blank optional values render as N/A."""
    if value is None:
        return NOT_AVAILABLE
    text = str(value.value if isinstance(value, Enum) else value)
    return text if text.strip() else NOT_AVAILABLE


def display_writing_speed(student: Student) -> str:
    """Nursery students are always reported as N/A whatever is stored."""
    if student.class_name == ClassLevel.NURSERY:
        return WritingSpeed.NOT_APPLICABLE.value
    return fmt_optional(student.writing_speed)


def latest_ratings(row: StudentRow) -> list[str]:
    """Latest rating per category, or N/A for students without history."""
    entry = row.latest
    if entry is None:
        return [NOT_AVAILABLE] * len(PROGRESS_CATEGORIES)
    return [fmt_optional(getattr(entry, attr)) for attr, _ in PROGRESS_CATEGORIES]


def report_filename(kind: ReportKind, fmt: ReportFormat, on: date | None = None) -> str:
    """``<type>_report_<YYYY-MM-DD>.<ext>``"""
    on = on or date.today()
    return f"{kind.value}_report_{on.isoformat()}.{FILE_EXTENSIONS[fmt]}"
