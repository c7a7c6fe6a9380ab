"""
School Records - Filter/Aggregation Layer
Pure filtering and joining over already-fetched records.

Every predicate in a FilterSpec is optional and the present ones combine
with logical AND. Functions never mutate their inputs and keep input order,
so applying the same spec twice yields the same list.
"""
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Any, TypeVar

from school_records.models.enums import ClassLevel, PlanType
from school_records.models.plan import TeachingPlan
from school_records.models.student import ProgressEntry, Student

ALL = "all"

E = TypeVar("E", bound=Enum)


def _coerce_enum(enum_cls: type[E], value: Any) -> E | None:
    """Map a raw filter value onto an enum member; unknown values mean no filter."""
    if value is None or isinstance(value, enum_cls):
        return value
    text = str(value).strip()
    if not text or text.lower() == ALL:
        return None
    for member in enum_cls:
        if member.value.lower() == text.lower():
            return member
    return None


def _coerce_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _coerce_date(value: Any) -> date | None:
    if value is None or isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


@dataclass(frozen=True)
class FilterSpec:
    """Normalized filter specification shared by listing and reports."""
    class_name: ClassLevel | None = None
    teacher_id: int | None = None
    plan_type: PlanType | None = None
    start_date: date | None = None
    end_date: date | None = None
    search: str | None = None

    @classmethod
    def from_query(
        cls,
        class_name: Any = None,
        teacher_id: Any = None,
        plan_type: Any = None,
        start_date: Any = None,
        end_date: Any = None,
        search: Any = None,
    ) -> "FilterSpec":
        """Build a spec from raw request values, dropping "all" and unknown values."""
        term = str(search).strip() if search is not None else ""
        return cls(
            class_name=_coerce_enum(ClassLevel, class_name),
            teacher_id=_coerce_int(teacher_id),
            plan_type=_coerce_enum(PlanType, plan_type),
            start_date=_coerce_date(start_date),
            end_date=_coerce_date(end_date),
            search=term or None,
        )

    def for_owner(self, owner_id: int | None) -> "FilterSpec":
        """The same spec narrowed to one owner; None leaves it unchanged."""
        return self if owner_id is None else replace(self, teacher_id=owner_id)

    @property
    def has_date_range(self) -> bool:
        return self.start_date is not None or self.end_date is not None

    @property
    def has_partial_date_range(self) -> bool:
        return (self.start_date is None) != (self.end_date is None)

    def describe(self) -> list[tuple[str, str]]:
        """Human-readable (label, value) pairs for the filters in effect."""
        return [
            ("Class", self.class_name.value if self.class_name else "All"),
            ("Teacher ID", str(self.teacher_id) if self.teacher_id is not None else "All"),
            ("Plan Type", self.plan_type.value if self.plan_type else "All"),
            ("Start Date", self.start_date.isoformat() if self.start_date else "N/A"),
            ("End Date", self.end_date.isoformat() if self.end_date else "N/A"),
            ("Search", self.search or "N/A"),
        ]


def _contains(haystack: str | None, needle: str) -> bool:
    return needle.lower() in (haystack or "").lower()


def in_date_range(day: date, start: date | None, end: date | None) -> bool:
    """Inclusive range check; a missing bound is open."""
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True


def matches_student(student: Student, spec: FilterSpec) -> bool:
    if spec.class_name is not None and student.class_name != spec.class_name:
        return False
    if spec.teacher_id is not None and student.teacher_id != spec.teacher_id:
        return False
    if spec.search and not _contains(student.name, spec.search):
        return False
    return True


def matches_plan(plan: TeachingPlan, spec: FilterSpec) -> bool:
    if spec.class_name is not None and plan.class_name != spec.class_name:
        return False
    if spec.plan_type is not None and plan.type != spec.plan_type:
        return False
    if spec.teacher_id is not None and plan.created_by != spec.teacher_id:
        return False
    if spec.search and not (_contains(plan.title, spec.search) or _contains(plan.description, spec.search)):
        return False
    # Plans span a period, so keep any that overlap the requested range
    if spec.start_date is not None and plan.end_date < spec.start_date:
        return False
    if spec.end_date is not None and plan.start_date > spec.end_date:
        return False
    return True


def filter_students(students: Iterable[Student], spec: FilterSpec) -> list[Student]:
    return [s for s in students if matches_student(s, spec)]


def filter_plans(plans: Iterable[TeachingPlan], spec: FilterSpec) -> list[TeachingPlan]:
    return [p for p in plans if matches_plan(p, spec)]


def filter_progress(entries: Iterable[ProgressEntry], spec: FilterSpec) -> list[ProgressEntry]:
    return [e for e in entries if in_date_range(e.date, spec.start_date, spec.end_date)]


def group_progress(entries: Iterable[ProgressEntry]) -> dict[int, list[ProgressEntry]]:
    """Group entries by student, newest first within each student."""
    grouped: dict[int, list[ProgressEntry]] = defaultdict(list)
    for entry in entries:
        grouped[entry.student_id].append(entry)
    return {
        student_id: sorted(items, key=lambda e: (e.date, e.id or 0), reverse=True)
        for student_id, items in grouped.items()
    }


def latest_entry(entries: Sequence[ProgressEntry]) -> ProgressEntry | None:
    """Most recent entry, or None when the student has no history."""
    if not entries:
        return None
    return max(entries, key=lambda e: (e.date, e.id or 0))
