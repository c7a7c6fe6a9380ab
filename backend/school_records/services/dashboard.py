"""
School Records - Dashboard Service
Aggregate counts for the landing dashboard
"""
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from school_records.models.enums import ClassLevel, PlanType, UserRole
from school_records.models.plan import TeachingPlan
from school_records.models.student import ProgressEntry, Student
from school_records.models.user import User
from school_records.schemas.report import (
    ClassCount,
    DashboardStats,
    PlanTypeCount,
    RecentProgress,
)
from school_records.services.auth import UserSession

RECENT_PROGRESS_LIMIT = 5


class DashboardService:
    """
    Service for aggregating roster and planning counts.

    Teachers only see numbers for their own students and plans.
    """

    def __init__(self, db: AsyncSession, session: UserSession):
        self.db = db
        self.session = session

    async def get_stats(self) -> DashboardStats:
        students_by_class = await self._students_by_class()
        total_students = sum(c.count for c in students_by_class)

        return DashboardStats(
            total_students=total_students,
            class_count=sum(1 for c in students_by_class if c.count),
            students_by_class=students_by_class,
            total_teachers=await self._teacher_count(),
            plans_by_type=await self._plans_by_type(),
            recent_progress=await self._recent_progress(),
        )

    async def _students_by_class(self) -> list[ClassCount]:
        query = select(Student.class_name, func.count(Student.id)).group_by(Student.class_name)
        if not self.session.is_admin:
            query = query.where(Student.teacher_id == self.session.user_id)
        result = await self.db.execute(query)
        counts = dict(result.all())

        # Every class is listed, even when empty
        return [ClassCount(class_name=c.value, count=counts.get(c.value, 0)) for c in ClassLevel]

    async def _teacher_count(self) -> int:
        result = await self.db.execute(
            select(func.count(User.id)).where(
                User.role == UserRole.TEACHER.value,
                User.is_active.is_(True),
            )
        )
        return result.scalar() or 0

    async def _plans_by_type(self) -> list[PlanTypeCount]:
        query = select(TeachingPlan.type, func.count(TeachingPlan.id)).group_by(TeachingPlan.type)
        if not self.session.is_admin:
            query = query.where(TeachingPlan.created_by == self.session.user_id)
        result = await self.db.execute(query)
        counts = dict(result.all())
        return [PlanTypeCount(type=t.value, count=counts.get(t.value, 0)) for t in PlanType]

    async def _recent_progress(self) -> list[RecentProgress]:
        query = (
            select(ProgressEntry, Student.name)
            .join(Student, ProgressEntry.student_id == Student.id)
            .order_by(ProgressEntry.date.desc(), ProgressEntry.id.desc())
            .limit(RECENT_PROGRESS_LIMIT)
        )
        if not self.session.is_admin:
            query = query.where(Student.teacher_id == self.session.user_id)
        result = await self.db.execute(query)

        return [
            RecentProgress(
                id=entry.id,
                student_id=entry.student_id,
                student_name=name,
                date=entry.date,
                comments=entry.comments,
            )
            for entry, name in result.all()
        ]
