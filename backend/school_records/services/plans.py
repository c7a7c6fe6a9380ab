"""
School Records - Teaching Plan Service
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_records.models.enums import ClassLevel, PlanType
from school_records.models.plan import TeachingPlan
from school_records.schemas.plan import DATE_ORDER_ERROR, PlanCreate, PlanUpdate
from school_records.services.auth import UserSession
from school_records.services.errors import (
    PermissionDeniedError,
    RecordNotFoundError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)


class PlanService:
    """Teaching plan persistence; teachers see only the plans they created."""

    def __init__(self, db: AsyncSession, session: UserSession):
        self.db = db
        self.session = session

    async def list_plans(
        self,
        plan_type: PlanType | None = None,
        class_name: ClassLevel | None = None,
        teacher_id: int | None = None,
    ) -> list[TeachingPlan]:
        """Plans ordered by start date, most recent first."""
        if not self.session.is_admin:
            teacher_id = self.session.user_id

        query = select(TeachingPlan).order_by(TeachingPlan.start_date.desc(), TeachingPlan.id.desc())
        if plan_type is not None:
            query = query.where(TeachingPlan.type == plan_type.value)
        if class_name is not None:
            query = query.where(TeachingPlan.class_name == class_name.value)
        if teacher_id is not None:
            query = query.where(TeachingPlan.created_by == teacher_id)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_plan(self, plan_id: int) -> TeachingPlan:
        plan = await self.db.get(TeachingPlan, plan_id)
        if not plan:
            raise RecordNotFoundError("Teaching plan not found")
        if not self.session.owns(plan.created_by):
            raise PermissionDeniedError("Unauthorized access to this teaching plan")
        return plan

    async def create_plan(self, data: PlanCreate) -> TeachingPlan:
        created_by = data.created_by if self.session.is_admin and data.created_by else self.session.user_id
        plan = TeachingPlan(
            created_by=created_by,
            **data.model_dump(exclude={"created_by"}),
        )
        self.db.add(plan)
        await self.db.flush()
        await self.db.refresh(plan)
        logger.info("Teaching plan %s created by user %s", plan.id, self.session.user_id)
        return plan

    async def update_plan(self, plan_id: int, data: PlanUpdate) -> TeachingPlan:
        plan = await self.get_plan(plan_id)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)

        start = update_data.get("start_date", plan.start_date)
        end = update_data.get("end_date", plan.end_date)
        if start > end:
            raise ValidationFailedError(DATE_ORDER_ERROR)

        for name, value in update_data.items():
            setattr(plan, name, value)

        await self.db.flush()
        await self.db.refresh(plan)
        return plan

    async def delete_plan(self, plan_id: int) -> None:
        plan = await self.get_plan(plan_id)
        await self.db.delete(plan)
        await self.db.flush()
