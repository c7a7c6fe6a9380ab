"""
School Records - Teacher Service
Admin-side management of teacher accounts
"""
import logging
from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from school_records.core.security import get_password_hash
from school_records.models.enums import UserRole
from school_records.models.student import Student
from school_records.models.user import User
from school_records.schemas.user import TeacherCreate, TeacherUpdate
from school_records.services.errors import ConflictError, RecordNotFoundError

logger = logging.getLogger(__name__)


class TeacherService:
    """CRUD for teacher accounts. Callers are expected to be admins."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_teachers(self) -> list[User]:
        result = await self.db.execute(
            select(User).where(User.role == UserRole.TEACHER.value).order_by(User.name, User.id)
        )
        return list(result.scalars().all())

    async def get_teacher(self, teacher_id: int) -> User:
        teacher = await self.db.get(User, teacher_id)
        if not teacher or teacher.role != UserRole.TEACHER.value:
            raise RecordNotFoundError("Teacher not found")
        return teacher

    async def create_teacher(self, data: TeacherCreate) -> User:
        email = data.email.lower()
        await self._ensure_email_free(email)

        user = User(
            email=email,
            name=data.name,
            hashed_password=get_password_hash(data.password),
            role=data.role.value,
            assigned_classes=[c.value for c in data.assigned_classes],
        )
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        logger.info("Created %s account %s", user.role, user.email)
        return user

    async def update_teacher(self, teacher_id: int, data: TeacherUpdate) -> User:
        teacher = await self.get_teacher(teacher_id)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)

        if "email" in update_data:
            update_data["email"] = update_data["email"].lower()
            if update_data["email"] != teacher.email:
                await self._ensure_email_free(update_data["email"])
        if "assigned_classes" in update_data:
            update_data["assigned_classes"] = list(dict.fromkeys(c.value for c in data.assigned_classes))

        for name, value in update_data.items():
            setattr(teacher, name, value)

        await self.db.flush()
        await self.db.refresh(teacher)
        return teacher

    async def delete_teacher(self, teacher_id: int) -> None:
        teacher = await self.get_teacher(teacher_id)
        owned = await self.db.scalar(
            select(func.count(Student.id)).where(Student.teacher_id == teacher.id)
        )
        if owned:
            raise ConflictError(
                f"Teacher still owns {owned} student(s); reassign them before deleting"
            )
        await self.db.delete(teacher)
        await self.db.flush()
        logger.info("Deleted teacher account %s", teacher_id)

    async def reset_password(self, teacher_id: int, new_password: str) -> User:
        teacher = await self.get_teacher(teacher_id)
        teacher.hashed_password = get_password_hash(new_password)
        await self.db.flush()
        logger.info("Password reset for teacher %s", teacher_id)
        return teacher

    async def names_by_id(self, user_ids: Iterable[int | None]) -> dict[int, str]:
        """Display names for the given user IDs (any role)."""
        ids = {i for i in user_ids if i is not None}
        if not ids:
            return {}
        result = await self.db.execute(select(User.id, User.name).where(User.id.in_(ids)))
        return {row.id: row.name for row in result}

    async def _ensure_email_free(self, email: str) -> None:
        existing = await self.db.execute(select(User.id).where(User.email == email))
        if existing.scalar_one_or_none() is not None:
            raise ConflictError("Email already registered")
