"""
School Records - LLM Client
Thin async wrapper over the configured chat model provider.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

from langchain_core.messages import HumanMessage, SystemMessage

from school_records.core.config import settings

logger = logging.getLogger(__name__)


class LLMNotConfiguredError(Exception):
    """No API key is set for the configured provider."""
    pass


@dataclass
class LLMResponse:
    """Standardized response from LLM client."""
    content: str
    model: str
    tokens_prompt: int = 0
    tokens_completion: int = 0
    tokens_total: int = 0
    raw_response: Any = None


class LLMClient:
    """
    LLM client shared by the AI helpers.

    Supports an OpenAI-compatible endpoint (DeepSeek by default) or
    Anthropic, chosen by ``LLM_PROVIDER``.
    """

    def __init__(
        self,
        provider: str = None,
        model: str = None,
        temperature: float = 0.7,
        timeout: int = None,
        max_tokens: int = None,
    ):
        self.provider = provider or settings.LLM_PROVIDER
        self.model = model or (
            settings.OPENAI_MODEL if self.provider == "openai"
            else settings.ANTHROPIC_MODEL
        )
        self.temperature = temperature
        self.timeout = timeout or settings.LLM_TIMEOUT_SECONDS
        self.max_tokens = max_tokens or settings.LLM_MAX_TOKENS

        self._llm = None

    @property
    def api_key(self) -> str:
        if self.provider == "openai":
            return settings.OPENAI_API_KEY
        return settings.ANTHROPIC_API_KEY

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def llm(self):
        """Lazy-load the LLM instance."""
        if self._llm is None:
            if not self.is_configured:
                raise LLMNotConfiguredError(f"No API key configured for provider '{self.provider}'")
            if self.provider == "openai":
                from langchain_openai import ChatOpenAI
                self._llm = ChatOpenAI(
                    model=self.model,
                    api_key=self.api_key,
                    base_url=settings.OPENAI_BASE_URL or None,
                    temperature=self.temperature,
                    timeout=self.timeout,
                    max_tokens=self.max_tokens,
                )
            else:
                from langchain_anthropic import ChatAnthropic
                self._llm = ChatAnthropic(
                    model=self.model,
                    api_key=self.api_key,
                    temperature=self.temperature,
                    timeout=self.timeout,
                    max_tokens=self.max_tokens,
                )
        return self._llm

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
    ) -> LLMResponse:
        """
        Generate a response from the LLM.

        Args:
            prompt: The user prompt.
            system_prompt: Optional system prompt.

        Returns:
            LLMResponse with content and token usage.
        """
        messages = []
        if system_prompt:
            messages.append(SystemMessage(content=system_prompt))
        messages.append(HumanMessage(content=prompt))

        response = await self.llm.ainvoke(messages)

        tokens_prompt = 0
        tokens_completion = 0
        if hasattr(response, "response_metadata"):
            usage = response.response_metadata.get("token_usage", {})
            tokens_prompt = usage.get("prompt_tokens", 0)
            tokens_completion = usage.get("completion_tokens", 0)

        logger.info(
            "LLM call model=%s prompt_tokens=%d completion_tokens=%d",
            self.model, tokens_prompt, tokens_completion,
        )
        return LLMResponse(
            content=response.content,
            model=self.model,
            tokens_prompt=tokens_prompt,
            tokens_completion=tokens_completion,
            tokens_total=tokens_prompt + tokens_completion,
            raw_response=response,
        )


# Default client instance
_default_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get the default LLM client instance."""
    global _default_client
    if _default_client is None:
        _default_client = LLMClient()
    return _default_client
