"""
School Records - Activity Suggestion Tests
The chat model is replaced at the LLM client boundary.
"""
import pytest
from httpx import AsyncClient
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from school_records.ai.activity_suggester import SYSTEM_PROMPT, ActivitySuggester, fallback_suggestion
from school_records.ai.core.llm import LLMClient
from school_records.api.v1.suggestions import get_activity_suggester
from school_records.core.config import settings
from school_records.main import app


class FakeChatModel:
    """Stands in for the provider chat model."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.error:
            raise self.error
        return self.reply


def _client(chat: FakeChatModel) -> LLMClient:
    llm = LLMClient(provider="openai", model="deepseek-chat")
    llm._llm = chat
    return llm


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "test-key")


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "")


# ============================================================================
# Built-in suggestions
# ============================================================================

def test_fallback_picks_class_and_area():
    text = fallback_suggestion("Counting games for LKG please")
    assert text.startswith("Here are some pre-numeracy activities for LKG students (age 4):")
    assert "1. Number Formation:" in text
    assert "5. Measuring Activities:" in text


def test_fallback_reading_for_nursery():
    text = fallback_suggestion("Reading ideas for my nursery class")
    assert text.startswith("Here are some pre-literacy activities for Nursery students (age 3):")


def test_fallback_motor_skills_use_general_activities():
    text = fallback_suggestion("motor skills for UKG")
    assert text.startswith("Here are some general activities for UKG students (age 5):")


def test_fallback_without_class():
    text = fallback_suggestion("Ideas for a rainy day")
    assert text.startswith("Here are some general teaching activities for pre-primary students:")
    assert fallback_suggestion("Ideas for a rainy day") == text


# ============================================================================
# Suggester
# ============================================================================

@pytest.mark.asyncio
async def test_suggestion_from_llm(api_key):
    chat = FakeChatModel(reply=AIMessage(
        content="Try leaf printing.",
        response_metadata={"token_usage": {"prompt_tokens": 40, "completion_tokens": 5}},
    ))
    result = await ActivitySuggester(_client(chat)).suggest("Art for UKG")

    assert result.source == "ai"
    assert result.suggestion == "Try leaf printing."
    system, human = chat.calls[0]
    assert isinstance(system, SystemMessage) and system.content == SYSTEM_PROMPT
    assert isinstance(human, HumanMessage) and human.content == "Art for UKG"


@pytest.mark.asyncio
async def test_llm_failure_falls_back(api_key):
    chat = FakeChatModel(error=RuntimeError("connection reset"))
    result = await ActivitySuggester(_client(chat)).suggest("Counting for UKG")

    assert result.source == "fallback"
    assert result.suggestion == fallback_suggestion("Counting for UKG")


@pytest.mark.asyncio
async def test_empty_llm_reply_falls_back(api_key):
    chat = FakeChatModel(reply=AIMessage(content="   "))
    result = await ActivitySuggester(_client(chat)).suggest("Songs for LKG")
    assert result.source == "fallback"


@pytest.mark.asyncio
async def test_missing_api_key_skips_llm(no_api_key):
    chat = FakeChatModel(reply=AIMessage(content="unused"))
    result = await ActivitySuggester(_client(chat)).suggest("Reading for LKG")

    assert result.source == "fallback"
    assert chat.calls == []


# ============================================================================
# API
# ============================================================================

@pytest.mark.asyncio
async def test_suggestion_endpoint(client: AsyncClient, teacher_headers, api_key):
    chat = FakeChatModel(reply=AIMessage(content="Make paper boats."))
    app.dependency_overrides[get_activity_suggester] = lambda: ActivitySuggester(_client(chat))

    response = await client.post(
        "/api/ai-suggestions", json={"prompt": "Water play for Nursery"}, headers=teacher_headers
    )
    assert response.status_code == 200
    assert response.json() == {"suggestion": "Make paper boats.", "source": "ai"}


@pytest.mark.asyncio
async def test_suggestion_endpoint_without_key(client: AsyncClient, admin_headers, no_api_key):
    response = await client.post(
        "/api/ai-suggestions", json={"prompt": "numbers for UKG"}, headers=admin_headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["source"] == "fallback"
    assert data["suggestion"].startswith("Here are some pre-numeracy activities for UKG students")


@pytest.mark.asyncio
async def test_blank_prompt_is_rejected(client: AsyncClient, teacher_headers):
    response = await client.post("/api/ai-suggestions", json={"prompt": "   "}, headers=teacher_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_suggestions_require_login(client: AsyncClient):
    response = await client.post("/api/ai-suggestions", json={"prompt": "Art for LKG"})
    assert response.status_code == 401
