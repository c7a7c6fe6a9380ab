"""
School Records - AI Module
"""
from school_records.ai.activity_suggester import ActivitySuggester, ActivitySuggestion, fallback_suggestion
from school_records.ai.core.llm import LLMClient, LLMResponse, get_llm_client

__all__ = [
    "ActivitySuggester",
    "ActivitySuggestion",
    "fallback_suggestion",
    "LLMClient",
    "LLMResponse",
    "get_llm_client",
]
