"""
Excel synthesis with openpyxl.

Headers are display labels, dates are YYYY-MM-DD strings and absent optional
values are written as "N/A" so no data cell is ever blank.
"""
from collections.abc import Sequence
from io import BytesIO

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from school_records.services.reports.common import (
    NO_DATA,
    NOT_AVAILABLE,
    PROGRESS_CATEGORIES,
    REPORT_TITLES,
    PlanRow,
    ReportKind,
    ReportOptions,
    StudentRow,
    fmt_date,
    fmt_optional,
    latest_ratings,
)

HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill("solid", fgColor="7C3AED")
MAX_COLUMN_WIDTH = 60

STUDENT_COLUMNS = [
    "Name", "Class", "Age", "Learning Ability", "Writing Speed", "Teacher",
    "Parent Contact", "Latest Assessment Date",
    *(label for _, label in PROGRESS_CATEGORIES),
    "Latest Comments",
]
HISTORY_COLUMNS = [
    "Student Name", "Class", "Date",
    *(label for _, label in PROGRESS_CATEGORIES),
    "Comments",
]
PLAN_COLUMNS = [
    "Title", "Type", "Class", "Start Date", "End Date", "Creator",
    "Description", "Activities", "Goals",
]


def _clean(value: object) -> object:
    """Drop characters that are not allowed in worksheet XML."""
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def _append_values(ws: Worksheet, values: Sequence[object]) -> None:
    """Append one data row; text is always stored as text, never as a formula."""
    ws.append([_clean(value) for value in values])
    for cell in ws[ws.max_row]:
        if isinstance(cell.value, str):
            cell.data_type = "s"


def _write_sheet(ws: Worksheet, header: Sequence[str], rows: Sequence[Sequence[object]]) -> None:
    """Header row plus data rows, or a single no-data row."""
    ws.append(list(header))
    for cell in ws[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(vertical="center")
    if rows:
        for row in rows:
            _append_values(ws, row)
    else:
        ws.append([NO_DATA])
    ws.freeze_panes = "A2"
    _fit_columns(ws)


def _fit_columns(ws: Worksheet) -> None:
    widths: dict[int, int] = {}
    for row in ws.iter_rows():
        for cell in row:
            if cell.value is None:
                continue
            length = max(len(line) for line in str(cell.value).splitlines() or [""])
            widths[cell.column] = max(widths.get(cell.column, 0), length)
    for column, width in widths.items():
        ws.column_dimensions[get_column_letter(column)].width = min(width + 2, MAX_COLUMN_WIDTH)


def _write_summary(wb: Workbook, kind: ReportKind, options: ReportOptions, count: int) -> None:
    ws = wb.create_sheet("Summary")
    branding = options.branding
    rows = [
        ("Report", REPORT_TITLES[kind]),
        ("School", branding.school_name),
        ("Subtitle", branding.subtitle),
        ("Address", branding.address),
        ("Generated On", options.generated_at.strftime("%Y-%m-%d %H:%M")),
        ("Total Records", count),
        *options.filters.describe(),
    ]
    _write_sheet(ws, ["Field", "Value"], rows)


def _save(wb: Workbook) -> bytes:
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def student_sheet_rows(rows: Sequence[StudentRow]) -> list[list[object]]:
    result = []
    for row in rows:
        student = row.student
        latest = row.latest
        result.append([
            student.name,
            fmt_optional(student.class_name),
            student.age,
            fmt_optional(student.learning_ability),
            row.writing_speed,
            fmt_optional(row.teacher_name),
            fmt_optional(student.parent_contact),
            fmt_date(latest.date) if latest else NOT_AVAILABLE,
            *latest_ratings(row),
            fmt_optional(latest.comments) if latest else NOT_AVAILABLE,
        ])
    return result


def history_sheet_rows(rows: Sequence[StudentRow]) -> list[list[object]]:
    return [
        [
            row.student.name,
            fmt_optional(row.student.class_name),
            fmt_date(entry.date),
            *(fmt_optional(getattr(entry, attr)) for attr, _ in PROGRESS_CATEGORIES),
            fmt_optional(entry.comments),
        ]
        for row in rows
        for entry in row.progress
    ]


def plan_sheet_rows(rows: Sequence[PlanRow]) -> list[list[object]]:
    return [
        [
            row.plan.title,
            fmt_optional(row.plan.type),
            fmt_optional(row.plan.class_name),
            fmt_date(row.plan.start_date),
            fmt_date(row.plan.end_date),
            fmt_optional(row.creator_name),
            fmt_optional(row.plan.description),
            fmt_optional(row.plan.activities),
            fmt_optional(row.plan.goals),
        ]
        for row in rows
    ]


def build_student_workbook(rows: Sequence[StudentRow], options: ReportOptions) -> bytes:
    """Sheets: Students, Progress History, Summary."""
    wb = Workbook()
    students = wb.active
    students.title = "Students"
    _write_sheet(students, STUDENT_COLUMNS, student_sheet_rows(rows))
    _write_sheet(wb.create_sheet("Progress History"), HISTORY_COLUMNS, history_sheet_rows(rows))
    _write_summary(wb, ReportKind.STUDENT, options, len(rows))
    return _save(wb)


def build_plan_workbook(rows: Sequence[PlanRow], options: ReportOptions) -> bytes:
    """Sheets: Plans, Summary."""
    wb = Workbook()
    plans = wb.active
    plans.title = "Plans"
    _write_sheet(plans, PLAN_COLUMNS, plan_sheet_rows(rows))
    _write_summary(wb, ReportKind.PLAN, options, len(rows))
    return _save(wb)
