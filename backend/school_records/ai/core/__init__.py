from school_records.ai.core.llm import LLMClient, LLMNotConfiguredError, LLMResponse, get_llm_client

__all__ = [
    "LLMClient",
    "LLMNotConfiguredError",
    "LLMResponse",
    "get_llm_client",
]
