"""Document synthesizers for student and teaching plan reports."""
from school_records.services.reports.common import (
    Branding,
    PlanRow,
    ReportFormat,
    ReportKind,
    ReportOptions,
    StudentRow,
    report_filename,
)
from school_records.services.reports.excel import build_plan_workbook, build_student_workbook
from school_records.services.reports.pdf import build_plan_pdf, build_student_pdf

__all__ = [
    "Branding",
    "PlanRow",
    "ReportFormat",
    "ReportKind",
    "ReportOptions",
    "StudentRow",
    "report_filename",
    "build_plan_pdf",
    "build_plan_workbook",
    "build_student_pdf",
    "build_student_workbook",
]
