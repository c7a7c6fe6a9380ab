"""
School Records - Dashboard API Routes
"""
from fastapi import APIRouter

from school_records.api.deps import CurrentSession, DbSession
from school_records.schemas.report import DashboardStats
from school_records.services.dashboard import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "/stats",
    response_model=DashboardStats,
    summary="Dashboard statistics",
    description="Student totals per class, teacher and plan counts, and the latest progress entries.",
)
async def get_stats(
    session: CurrentSession,
    db: DbSession,
) -> DashboardStats:
    return await DashboardService(db, session).get_stats()
