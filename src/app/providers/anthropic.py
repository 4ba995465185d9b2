"""
Anthropic (Claude) Provider.

- ai.provider: anthropic 설정 시 사용
- safety_settings는 Gemini 전용이라 무시
- JSON 응답은 system 프롬프트로 요청 (response_mime_type 없음)
"""

import logging
import os
from datetime import UTC, datetime
from typing import Any

import anthropic

from src.utils.retry import RetryPolicy, retry_with_exponential_backoff

from .base import (
    AIRawStorageConfig,
    CompletionError,
    CompletionResult,
    LLMProvider,
    apply_raw_storage,
)

logger = logging.getLogger(__name__)

JSON_SYSTEM_PROMPT = "Respond with a single JSON object only. Do not add any other text."

# 재시도 가능한 예외
RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    anthropic.RateLimitError,
    anthropic.APIConnectionError,
    anthropic.APITimeoutError,
    anthropic.InternalServerError,
)


class ClaudeProvider(LLMProvider):
    """
    Claude API Provider.

    Usage:
        provider = ClaudeProvider(model="claude-sonnet-4-20250514")
        result = await provider.generate(prompt, json_output=True)
    """

    name = "anthropic"

    def __init__(
        self,
        model: str = "claude-sonnet-4-20250514",
        api_key: str | None = None,
        max_tokens: int = 1024,
        temperature: float | None = None,
        max_retries: int = 0,
        raw_storage_config: AIRawStorageConfig | None = None,
        retry_policy: RetryPolicy | None = None,
    ):
        """
        Args:
            model: 모델 ID (config에서 주입)
            api_key: API 키 (환경변수 MY_ANTHROPIC_KEY 또는 ANTHROPIC_API_KEY 사용 가능)
            max_tokens: 최대 토큰 수
            temperature: 샘플링 온도 (None이면 API 기본값)
            max_retries: 재시도 횟수 (0이면 재시도 없음)
            raw_storage_config: AI raw 데이터 보관 설정
            retry_policy: 재시도 정책 (지정 시 max_retries 대신 사용)

        Raises:
            CompletionError: API 키가 없을 때 (fail-fast)
        """
        self.model = model
        # API 키 결정: 인자 > MY_ANTHROPIC_KEY > ANTHROPIC_API_KEY
        self.api_key = (
            api_key
            or os.environ.get("MY_ANTHROPIC_KEY")
            or os.environ.get("ANTHROPIC_API_KEY")
        )

        # Fail-fast: 키가 없으면 즉시 에러
        if not self.api_key:
            raise CompletionError(
                "ANTHROPIC_KEY_MISSING",
                "Anthropic API key is missing. "
                "Set the MY_ANTHROPIC_KEY or ANTHROPIC_API_KEY environment variable.",
            )

        self.max_tokens = max_tokens
        self.temperature = temperature
        self.retry_policy = retry_policy or RetryPolicy(
            max_retries=max_retries,
            retry_on=RETRYABLE_EXCEPTIONS,
        )
        self.max_retries = self.retry_policy.max_retries
        self.raw_storage_config = raw_storage_config or AIRawStorageConfig()
        self._client: Any = None

    def _get_client(self) -> Any:
        """Anthropic 클라이언트 (lazy init)."""
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(api_key=self.api_key)
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

        자동 재시도 (max_retries > 0):
        - RateLimitError, APIConnectionError, APITimeoutError, InternalServerError
        - 지수 백오프
        """
        now = datetime.now(UTC).isoformat()
        model_params = self._collect_model_params()

        if safety_settings:
            logger.debug("safety_settings are not supported by Claude; ignoring")

        try:
            response = await self._call_api_with_retry(prompt, json_output)
        except Exception as e:
            logger.error(f"Claude completion failed: {e}", exc_info=True)
            raise CompletionError(
                "COMPLETION_FAILED",
                self._get_user_friendly_error_message(e),
                model=self.model,
            ) from e

        response_text: str = response.content[0].text

        result = CompletionResult(
            success=True,
            text=response_text,
            model_requested=self.model,
            model_used=getattr(response, "model", None) or self.model,
            provider=self.name,
            model_params=model_params,
            request_id=getattr(response, "id", None),
            completed_at=now,
        )
        apply_raw_storage(result, response_text, prompt, self.raw_storage_config)
        return result

    def _collect_model_params(self) -> dict[str, Any]:
        """호출에 사용된 모델 파라미터 수집."""
        params: dict[str, Any] = {
            "max_tokens": self.max_tokens,
        }
        if self.temperature is not None:
            params["temperature"] = self.temperature
        return params

    async def _call_api_with_retry(self, prompt: str, json_output: bool) -> Any:
        """재시도 로직이 적용된 API 호출."""

        async def _api_call() -> Any:
            client = self._get_client()
            api_kwargs: dict[str, Any] = {
                "model": self.model,
                "messages": [{"role": "user", "content": prompt}],
                **self._collect_model_params(),
            }
            if json_output:
                api_kwargs["system"] = JSON_SYSTEM_PROMPT

            return await client.messages.create(**api_kwargs)

        if not self.retry_policy.enabled:
            return await _api_call()

        return await retry_with_exponential_backoff(_api_call, self.retry_policy)

    def _get_user_friendly_error_message(self, error: Exception) -> str:
        """사용자 친화적인 에러 메시지 생성."""
        if isinstance(error, anthropic.APITimeoutError):
            return "The Anthropic API timed out. Please try again later."
        elif isinstance(error, anthropic.APIConnectionError):
            return "Could not connect to the Anthropic API. Check the network connection."
        elif isinstance(error, anthropic.RateLimitError):
            return "API quota exceeded. Please try again later."
        elif isinstance(error, anthropic.AuthenticationError):
            return "Anthropic API authentication failed. Check the MY_ANTHROPIC_KEY environment variable."
        elif isinstance(error, anthropic.PermissionDeniedError):
            return "The API key is not allowed to perform this operation."
        elif isinstance(error, anthropic.BadRequestError):
            return "The request was rejected as invalid."

        error_str = str(error)
        if "timeout" in error_str.lower():
            return "The request timed out. Please try again."
        elif "connection" in error_str.lower():
            return "A network connection error occurred."

        return f"Model call failed: {error_str}"
