"""
School Records - Activity Suggestion Route
"""
from typing import Annotated

from fastapi import APIRouter, Depends

from school_records.ai.activity_suggester import ActivitySuggester
from school_records.api.deps import CurrentSession
from school_records.schemas.suggestion import SuggestionRequest, SuggestionResponse

router = APIRouter(prefix="/ai-suggestions", tags=["AI Suggestions"])


def get_activity_suggester() -> ActivitySuggester:
    return ActivitySuggester()


@router.post(
    "",
    response_model=SuggestionResponse,
    summary="Suggest classroom activities",
    description="Asks the configured LLM for activity ideas; built-in suggestions are returned when it is unavailable.",
)
async def suggest_activities(
    request: SuggestionRequest,
    session: CurrentSession,
    suggester: Annotated[ActivitySuggester, Depends(get_activity_suggester)],
) -> SuggestionResponse:
    result = await suggester.suggest(request.prompt)
    return SuggestionResponse(suggestion=result.suggestion, source=result.source)
