"""
School Records - Activity Suggestion Schemas
"""
from typing import Annotated, Literal

from pydantic import BaseModel, StringConstraints


class SuggestionRequest(BaseModel):
    prompt: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=2000)]


class SuggestionResponse(BaseModel):
    suggestion: str
    source: Literal["ai", "fallback"]
