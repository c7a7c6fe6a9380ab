"""
School Records - Teaching Plan API Routes
Weekly, monthly and annual plans per class
"""
from typing import Annotated

from fastapi import APIRouter, Query, status

from school_records.api.deps import CurrentSession, DbSession
from school_records.schemas.plan import PlanCreate, PlanResponse, PlanUpdate
from school_records.services.filters import FilterSpec, filter_plans
from school_records.services.plans import PlanService

router = APIRouter(prefix="/teaching-plans", tags=["Teaching Plans"])


@router.get(
    "",
    response_model=list[PlanResponse],
    summary="List teaching plans",
)
async def list_plans(
    session: CurrentSession,
    db: DbSession,
    plan_type: Annotated[str | None, Query(alias="type")] = None,
    class_name: Annotated[str | None, Query(alias="class")] = None,
    teacher_id: Annotated[str | None, Query(alias="teacherId")] = None,
    search: str | None = None,
) -> list[PlanResponse]:
    spec = FilterSpec.from_query(
        class_name=class_name,
        teacher_id=teacher_id,
        plan_type=plan_type,
        search=search,
    ).for_owner(session.owner_scope)
    plans = await PlanService(db, session).list_plans(
        plan_type=spec.plan_type,
        class_name=spec.class_name,
        teacher_id=spec.teacher_id,
    )
    return [PlanResponse.model_validate(p) for p in filter_plans(plans, spec)]


@router.post(
    "",
    response_model=PlanResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a teaching plan",
    description="When no end date is given it is derived from the plan type.",
)
async def create_plan(
    data: PlanCreate,
    session: CurrentSession,
    db: DbSession,
) -> PlanResponse:
    plan = await PlanService(db, session).create_plan(data)
    return PlanResponse.model_validate(plan)


@router.get(
    "/{plan_id}",
    response_model=PlanResponse,
    summary="Get a teaching plan",
)
async def get_plan(
    plan_id: int,
    session: CurrentSession,
    db: DbSession,
) -> PlanResponse:
    plan = await PlanService(db, session).get_plan(plan_id)
    return PlanResponse.model_validate(plan)


@router.put(
    "/{plan_id}",
    response_model=PlanResponse,
    summary="Update a teaching plan",
)
async def update_plan(
    plan_id: int,
    data: PlanUpdate,
    session: CurrentSession,
    db: DbSession,
) -> PlanResponse:
    plan = await PlanService(db, session).update_plan(plan_id, data)
    return PlanResponse.model_validate(plan)


@router.delete(
    "/{plan_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a teaching plan",
)
async def delete_plan(
    plan_id: int,
    session: CurrentSession,
    db: DbSession,
) -> None:
    await PlanService(db, session).delete_plan(plan_id)
