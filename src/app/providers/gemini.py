"""
Google Gemini Provider (기본 provider).

Fallback 예외 정책:
- FALLBACK_ERRORS: NotFound, ServiceUnavailable, ResourceExhausted → fallback 모델
- REJECT_IMMEDIATELY: InvalidArgument, PermissionDenied, Unauthenticated → 즉시 reject
"""

import logging
import os
from datetime import UTC, datetime
from typing import Any

from google.api_core.exceptions import (
    InvalidArgument,
    NotFound,
    PermissionDenied,
    ResourceExhausted,
    ServiceUnavailable,
    Unauthenticated,
)

from .base import (
    AIRawStorageConfig,
    CompletionError,
    CompletionResult,
    LLMProvider,
    apply_raw_storage,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Exception Mapping
# =============================================================================

# Fallback 타는 예외
FALLBACK_ERRORS: tuple[type[Exception], ...] = (
    NotFound,            # 모델명 오류/미지원
    ServiceUnavailable,  # 5xx
    ResourceExhausted,   # 429 쿼터/레이트리밋
)

# 즉시 reject하는 예외
REJECT_IMMEDIATELY: tuple[type[Exception], ...] = (
    InvalidArgument,   # 입력 오류
    PermissionDenied,  # 권한 오류
    Unauthenticated,   # API 키 오류
)


class GeminiProvider(LLMProvider):
    """
    Gemini Provider.

    Usage:
        provider = GeminiProvider(model="gemini-2.0-flash", fallback="gemini-1.5-flash")
        result = await provider.generate(prompt, json_output=True)
    """

    name = "gemini"

    def __init__(
        self,
        model: str = "gemini-2.0-flash",
        fallback: str | None = None,
        api_key: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        raw_storage_config: AIRawStorageConfig | None = None,
    ):
        """
        Args:
            model: 기본 모델 ID (config에서 주입)
            fallback: Fallback 모델 (None이면 재시도 없이 실패)
            api_key: API 키 (환경변수 GEMINI_API_KEY 또는 GOOGLE_API_KEY 사용 가능)
            temperature: 샘플링 온도 (None이면 API 기본값)
            max_tokens: 최대 출력 토큰 (None이면 API 기본값)
            raw_storage_config: AI raw 데이터 보관 설정
        """
        self.model = model
        self.fallback = fallback
        self.api_key = (
            api_key
            or os.environ.get("GEMINI_API_KEY")
            or os.environ.get("GOOGLE_API_KEY")
        )
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.raw_storage_config = raw_storage_config or AIRawStorageConfig()
        self._client: Any = None

    def _get_client(self) -> Any:
        """Gemini 클라이언트 (lazy init)."""
        if self._client is None:
            import google.generativeai as genai

            genai.configure(api_key=self.api_key)
            self._client = genai
        return self._client

    async def generate(
        self,
        prompt: str,
        *,
        json_output: bool = False,
        safety_settings: list[dict[str, str]] | None = None,
    ) -> CompletionResult:
        """
        프롬프트로 응답 생성.

        Fallback 정책:
        - FALLBACK_ERRORS → fallback 모델로 재시도
        - REJECT_IMMEDIATELY → 즉시 에러
        """
        model_requested = self.model

        # 1차 시도: 기본 모델
        try:
            result = await self._call_api(self.model, prompt, json_output, safety_settings)
            result.model_requested = model_requested
            result.model_used = self.model
            result.fallback_triggered = False
            return result

        except FALLBACK_ERRORS as e:
            logger.warning(
                f"Primary model ({self.model}) failed with fallback error: {e}. "
                f"Attempting fallback..."
            )

            if self.fallback is None:
                raise CompletionError(
                    "NO_FALLBACK",
                    self._get_user_friendly_error_message(e),
                    model=self.model,
                ) from e

            try:
                logger.info(f"Trying fallback model: {self.fallback}")
                result = await self._call_api(
                    self.fallback, prompt, json_output, safety_settings
                )
                result.model_requested = model_requested
                result.model_used = self.fallback
                result.fallback_triggered = True
                logger.info("Fallback model succeeded")
                return result
            except Exception as fallback_error:
                logger.error(f"Fallback model also failed: {fallback_error}")
                raise CompletionError(
                    "FALLBACK_FAILED",
                    f"{self._get_user_friendly_error_message(fallback_error)} "
                    f"Both the primary and the fallback model failed.",
                    primary_model=self.model,
                    fallback_model=self.fallback,
                ) from fallback_error

        except REJECT_IMMEDIATELY as e:
            logger.error(f"Authentication or input error: {e}", exc_info=True)
            raise CompletionError(
                "AUTH_OR_INPUT_ERROR",
                self._get_user_friendly_error_message(e),
                model=self.model,
            ) from e

        except Exception as e:
            logger.error(f"Gemini call failed with unexpected error: {e}", exc_info=True)
            raise CompletionError(
                "COMPLETION_FAILED",
                self._get_user_friendly_error_message(e),
                model=self.model,
            ) from e

    def _get_user_friendly_error_message(self, error: Exception) -> str:
        """사용자 친화적인 에러 메시지 생성."""
        if isinstance(error, Unauthenticated):
            return "Google API authentication failed. Check the GEMINI_API_KEY environment variable."
        elif isinstance(error, PermissionDenied):
            return "The API key is not allowed to perform this operation."
        elif isinstance(error, ResourceExhausted):
            return "API quota exceeded. Please try again later."
        elif isinstance(error, ServiceUnavailable):
            return "The Gemini API is temporarily unavailable. Please try again later."
        elif isinstance(error, InvalidArgument):
            return "The request was rejected as invalid."
        elif isinstance(error, NotFound):
            return "The configured Gemini model was not found."

        # 기본 메시지
        error_str = str(error)
        lowered = error_str.lower()
        if "api_key" in lowered or "api key" in lowered:
            return "Check the API key configuration."
        elif "quota" in lowered or "limit" in lowered:
            return "API quota exceeded. Please try again later."
        elif "connection" in lowered:
            return "A network connection error occurred."
        elif "timeout" in lowered:
            return "The request timed out. Please try again."

        return f"Model call failed: {error_str}"

    def _collect_model_params(self) -> dict[str, Any]:
        """호출에 사용된 모델 파라미터 수집."""
        params: dict[str, Any] = {}
        if self.temperature is not None:
            params["temperature"] = self.temperature
        if self.max_tokens is not None:
            params["max_output_tokens"] = self.max_tokens
        return params

    async def _call_api(
        self,
        model: str,
        prompt: str,
        json_output: bool,
        safety_settings: list[dict[str, str]] | None,
    ) -> CompletionResult:
        """실제 Gemini API 호출. 예외는 상위로 전파 (fallback 정책 적용)."""
        now = datetime.now(UTC).isoformat()
        genai = self._get_client()

        generation_config = self._collect_model_params()
        if json_output:
            generation_config["response_mime_type"] = "application/json"

        model_instance = genai.GenerativeModel(
            model,
            generation_config=generation_config or None,
            safety_settings=safety_settings or None,
        )

        response = await model_instance.generate_content_async(prompt)
        text = response.text or ""

        result = CompletionResult(
            success=True,
            text=text,
            provider=self.name,
            model_params=generation_config,
            completed_at=now,
        )
        apply_raw_storage(result, text, prompt, self.raw_storage_config)
        return result
