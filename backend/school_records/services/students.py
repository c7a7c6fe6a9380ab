"""
School Records - Student Service
Data access for the roster and progress entries, scoped to the caller's session
"""
import logging
from collections.abc import Sequence
from datetime import date

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from school_records.models.enums import ClassLevel, LearningAbility, UserRole
from school_records.models.student import ProgressEntry, Student
from school_records.models.user import User
from school_records.schemas.student import (
    ProgressCreate,
    ProgressUpdate,
    StudentCreate,
    StudentUpdate,
    check_writing_speed,
)
from school_records.services.auth import UserSession
from school_records.services.errors import (
    PermissionDeniedError,
    RecordNotFoundError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

# Columns that may be cleared by sending null
OPTIONAL_STUDENT_FIELDS = frozenset({"parent_contact", "notes", "photo_url"})


class StudentService:
    """
    Roster and progress persistence.

    Teachers only see and change their own students; admins see everyone.
    """

    def __init__(self, db: AsyncSession, session: UserSession):
        self.db = db
        self.session = session

    # ------------------------------------------------------------------
    # Students
    # ------------------------------------------------------------------

    async def list_students(
        self,
        class_name: ClassLevel | None = None,
        teacher_id: int | None = None,
        learning_ability: LearningAbility | None = None,
    ) -> list[Student]:
        """List students matching the query parameters, ordered by name."""
        if not self.session.is_admin:
            teacher_id = self.session.user_id

        query = select(Student).order_by(Student.name, Student.id)
        if class_name is not None:
            query = query.where(Student.class_name == class_name.value)
        if teacher_id is not None:
            query = query.where(Student.teacher_id == teacher_id)
        if learning_ability is not None:
            query = query.where(Student.learning_ability == learning_ability.value)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_student(self, student_id: int) -> Student:
        student = await self.db.get(Student, student_id)
        if not student:
            raise RecordNotFoundError("Student not found")
        if not self.session.owns(student.teacher_id):
            raise PermissionDeniedError("Unauthorized access to this student")
        return student

    async def create_student(self, data: StudentCreate) -> Student:
        teacher_id = data.teacher_id
        if not self.session.is_admin or teacher_id is None:
            # Teachers always own what they create
            teacher_id = self.session.user_id
        await self._require_teacher(teacher_id)

        student = Student(
            teacher_id=teacher_id,
            **data.model_dump(exclude={"teacher_id"}),
        )
        self.db.add(student)
        await self.db.flush()
        await self.db.refresh(student)
        logger.info("Student %s created by user %s", student.id, self.session.user_id)
        return student

    async def update_student(self, student_id: int, data: StudentUpdate) -> Student:
        student = await self.get_student(student_id)
        update_data = {
            name: value
            for name, value in data.model_dump(exclude_unset=True).items()
            if value is not None or name in OPTIONAL_STUDENT_FIELDS
        }

        class_name = update_data.get("class_name", student.class_name)
        writing_speed = update_data.get("writing_speed", student.writing_speed)
        try:
            check_writing_speed(ClassLevel(class_name), writing_speed)
        except ValueError as e:
            raise ValidationFailedError(str(e)) from e

        for name, value in update_data.items():
            setattr(student, name, value)

        await self.db.flush()
        await self.db.refresh(student)
        return student

    async def delete_student(self, student_id: int) -> None:
        student = await self.get_student(student_id)
        await self.db.execute(delete(ProgressEntry).where(ProgressEntry.student_id == student.id))
        await self.db.delete(student)
        await self.db.flush()
        logger.info("Student %s deleted by user %s", student_id, self.session.user_id)

    async def assign_student(self, student_id: int, teacher_id: int) -> Student:
        """Move a student to another teacher (admin only)."""
        if not self.session.is_admin:
            raise PermissionDeniedError("Only admins can reassign students")
        student = await self.get_student(student_id)
        await self._require_teacher(teacher_id)
        student.teacher_id = teacher_id
        await self.db.flush()
        await self.db.refresh(student)
        return student

    async def _require_teacher(self, teacher_id: int) -> User:
        teacher = await self.db.get(User, teacher_id)
        if not teacher or teacher.role not in (UserRole.TEACHER.value, UserRole.ADMIN.value):
            raise RecordNotFoundError("Teacher not found")
        return teacher

    # ------------------------------------------------------------------
    # Progress entries
    # ------------------------------------------------------------------

    async def list_progress(
        self,
        student_ids: Sequence[int] | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[ProgressEntry]:
        """
        Progress entries, newest first.

        ``student_ids=None`` means every student the session can see.
        """
        query = select(ProgressEntry).order_by(ProgressEntry.date.desc(), ProgressEntry.id.desc())
        if student_ids is not None:
            if not student_ids:
                return []
            query = query.where(ProgressEntry.student_id.in_(list(student_ids)))
        if not self.session.is_admin:
            owned = select(Student.id).where(Student.teacher_id == self.session.user_id)
            query = query.where(ProgressEntry.student_id.in_(owned))
        if start_date is not None:
            query = query.where(ProgressEntry.date >= start_date)
        if end_date is not None:
            query = query.where(ProgressEntry.date <= end_date)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_progress(self, progress_id: int) -> ProgressEntry:
        entry = await self.db.get(ProgressEntry, progress_id)
        if not entry:
            raise RecordNotFoundError("Progress entry not found")
        # Raises if the caller cannot see the owning student
        await self.get_student(entry.student_id)
        return entry

    async def create_progress(self, data: ProgressCreate) -> ProgressEntry:
        await self.get_student(data.student_id)
        entry = ProgressEntry(**data.model_dump())
        self.db.add(entry)
        await self.db.flush()
        await self.db.refresh(entry)
        return entry

    async def update_progress(self, progress_id: int, data: ProgressUpdate) -> ProgressEntry:
        entry = await self.get_progress(progress_id)
        for name, value in data.model_dump(exclude_unset=True).items():
            if value is None and name != "comments":
                continue
            setattr(entry, name, value)
        await self.db.flush()
        await self.db.refresh(entry)
        return entry

    async def delete_progress(self, progress_id: int) -> None:
        entry = await self.get_progress(progress_id)
        await self.db.delete(entry)
        await self.db.flush()
