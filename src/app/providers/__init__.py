"""
AI Provider Abstraction.

모델 교체 가능하게 설계.
모델명은 config만 SSOT.
"""

from typing import Any

from src.domain.errors import ErrorCodes
from src.utils.retry import RetryPolicy

from .anthropic import RETRYABLE_EXCEPTIONS, ClaudeProvider
from .base import (
    AIRawStorageConfig,
    CompletionError,
    CompletionResult,
    LLMProvider,
    ProviderError,
    RawStorageLevel,
)
from .gemini import GeminiProvider

__all__ = [
    "LLMProvider",
    "CompletionResult",
    "ProviderError",
    "CompletionError",
    "AIRawStorageConfig",
    "RawStorageLevel",
    "ClaudeProvider",
    "GeminiProvider",
    "create_provider",
]


def create_provider(config: dict[str, Any]) -> LLMProvider:
    """
    설정 기반 Provider 생성.

    Args:
        config: 전체 설정 (ai.provider, ai.llm, ai.raw_storage)

    Returns:
        LLMProvider

    Raises:
        ProviderError: 알 수 없는 provider 이름
    """
    ai_config = config.get("ai", {}) or {}
    llm_config = ai_config.get("llm", {}) or {}
    provider_name = str(ai_config.get("provider", "gemini")).lower()
    raw_storage = AIRawStorageConfig.from_config(ai_config.get("raw_storage"))

    if provider_name == "gemini":
        return GeminiProvider(
            model=llm_config.get("model", "gemini-2.0-flash"),
            fallback=llm_config.get("fallback"),
            temperature=llm_config.get("temperature"),
            max_tokens=llm_config.get("max_tokens"),
            raw_storage_config=raw_storage,
        )

    if provider_name == "anthropic":
        return ClaudeProvider(
            model=llm_config.get("model", "claude-sonnet-4-20250514"),
            max_tokens=llm_config.get("max_tokens") or 1024,
            temperature=llm_config.get("temperature"),
            raw_storage_config=raw_storage,
            retry_policy=RetryPolicy.from_config(llm_config, retry_on=RETRYABLE_EXCEPTIONS),
        )

    raise ProviderError(
        ErrorCodes.PROVIDER_UNKNOWN,
        f"Unknown AI provider: {provider_name!r} (expected 'gemini' or 'anthropic')",
    )
