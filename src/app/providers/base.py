"""
AI Provider 추상 인터페이스.

- Provider 추상화로 모델 교체 가능 (Gemini ↔ Claude)
- model_requested + model_used 필수 기록

재현성 메타데이터:
- provider, model_params, request_id, prompt_hash 기록
- "조건부 재현성": 동일 파라미터로 유사 결과 기대 가능
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from src.core.hashing import compute_hash

# =============================================================================
# Raw Storage Configuration
# =============================================================================

class RawStorageLevel(str, Enum):
    """
    AI raw 데이터 보관 레벨.

    none: prompt/response 보관 안 함
    minimal: response_hash만
    full: prompt/response 원문 보관 (디버깅 최대)
    """
    NONE = "none"
    MINIMAL = "minimal"
    FULL = "full"


@dataclass
class AIRawStorageConfig:
    """AI raw 데이터 보관 설정."""
    storage_level: RawStorageLevel = RawStorageLevel.MINIMAL

    # 크기 제한 (bytes) - 초과 시 truncation
    max_raw_size: int = 64 * 1024

    @classmethod
    def from_config(cls, raw_config: dict[str, Any] | None) -> "AIRawStorageConfig":
        """default.yaml의 ai.raw_storage 섹션에서 생성."""
        raw_config = raw_config or {}
        return cls(
            storage_level=RawStorageLevel(raw_config.get("level", RawStorageLevel.MINIMAL.value)),
            max_raw_size=int(raw_config.get("max_raw_size", 64 * 1024)),
        )


# =============================================================================
# Result Data Classes
# =============================================================================

@dataclass
class CompletionResult:
    """
    LLM 완성 결과.

    필수 메타데이터:
    - model_requested: config에 설정된 모델
    - model_used: 실제 호출된 모델 (fallback 시 다를 수 있음)
    - provider: gemini, anthropic
    - prompt_hash: 프롬프트 해시
    """
    success: bool = True
    text: str = ""

    # 모델 추적
    model_requested: str | None = None
    model_used: str | None = None
    fallback_triggered: bool = False

    provider: str | None = None
    model_params: dict[str, Any] | None = None
    request_id: str | None = None
    completed_at: str | None = None

    # Raw 보관 (storage_level에 따라 조건부)
    prompt_hash: str | None = None
    prompt_rendered: str | None = None
    llm_raw_output: str | None = None
    llm_raw_output_hash: str | None = None
    llm_raw_truncated: bool = False

    warnings: list[str] = field(default_factory=list)
    error_message: str | None = None


def apply_raw_storage(
    result: CompletionResult,
    response_text: str,
    prompt: str,
    config: AIRawStorageConfig,
) -> None:
    """
    storage_level에 따라 raw 데이터 기록.

    - FULL: 원문 (truncation 적용) + 해시
    - MINIMAL: 해시만
    - NONE: 기록 안 함
    prompt_hash는 레벨과 무관하게 항상 기록.
    """
    result.prompt_hash = compute_hash(prompt)

    if config.storage_level == RawStorageLevel.NONE:
        result.llm_raw_output = None
        result.llm_raw_output_hash = None
        result.prompt_rendered = None
        return

    result.llm_raw_output_hash = compute_hash(response_text)

    if config.storage_level == RawStorageLevel.MINIMAL:
        result.llm_raw_output = None
        result.prompt_rendered = None
        return

    # FULL
    if len(response_text) > config.max_raw_size:
        result.llm_raw_output = response_text[: config.max_raw_size]
        result.llm_raw_truncated = True
    else:
        result.llm_raw_output = response_text
        result.llm_raw_truncated = False

    result.prompt_rendered = prompt[: config.max_raw_size]


# =============================================================================
# Provider Exceptions
# =============================================================================

class ProviderError(Exception):
    """Provider 관련 에러."""

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")


class CompletionError(ProviderError):
    """LLM 완성 호출 에러."""
    pass


# =============================================================================
# Abstract Provider
# =============================================================================

class LLMProvider(ABC):
    """
    LLM Provider 추상 인터페이스.

    역할: 프롬프트 → 텍스트 응답 (판정 해석은 flow 담당)
    """

    name: str = "unknown"

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        json_output: bool = False,
        safety_settings: list[dict[str, str]] | None = None,
    ) -> CompletionResult:
        """
        프롬프트로 응답 생성.

        Args:
            prompt: 렌더링된 프롬프트
            json_output: JSON 응답 요청 여부
            safety_settings: 모델 안전 설정 (지원하는 provider만 적용)

        Returns:
            CompletionResult

        Raises:
            CompletionError: 전송/인증/모델 오류
        """
        ...
