"""School Records - API Router."""
from fastapi import APIRouter

from school_records.api.v1.auth import router as auth_router
from school_records.api.v1.teachers import router as teachers_router
from school_records.api.v1.students import router as students_router
from school_records.api.v1.progress import router as progress_router
from school_records.api.v1.plans import router as plans_router
from school_records.api.v1.photos import router as photos_router
from school_records.api.v1.dashboard import router as dashboard_router
from school_records.api.v1.reports import router as reports_router
from school_records.api.v1.suggestions import router as suggestions_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(teachers_router)
api_router.include_router(students_router)
api_router.include_router(progress_router)
api_router.include_router(plans_router)
api_router.include_router(photos_router)
api_router.include_router(dashboard_router)
api_router.include_router(reports_router)
api_router.include_router(suggestions_router)
