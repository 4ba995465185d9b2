"""
test_gemini.py - Gemini Provider 테스트

Fallback 예외 정책 검증:
- FALLBACK_ERRORS: NotFound, ServiceUnavailable, ResourceExhausted → fallback
- REJECT_IMMEDIATELY: InvalidArgument, PermissionDenied, Unauthenticated → 즉시 reject
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from google.api_core.exceptions import (
    InvalidArgument,
    NotFound,
    PermissionDenied,
    ResourceExhausted,
    ServiceUnavailable,
    Unauthenticated,
)

from src.app.providers.base import AIRawStorageConfig, CompletionError, RawStorageLevel
from src.app.providers.gemini import (
    FALLBACK_ERRORS,
    REJECT_IMMEDIATELY,
    GeminiProvider,
)

# =============================================================================
# Helpers / Fixtures
# =============================================================================


def make_genai(*responses_or_errors) -> MagicMock:
    """
    google.generativeai 모듈 mock.

    generate_content_async는 인자 순서대로 응답/예외를 돌려준다.
    """
    side_effect = []
    for item in responses_or_errors:
        if isinstance(item, Exception):
            side_effect.append(item)
        else:
            response = MagicMock()
            response.text = item
            side_effect.append(response)

    mock_model = MagicMock()
    mock_model.generate_content_async = AsyncMock(side_effect=side_effect)

    mock_genai = MagicMock()
    mock_genai.GenerativeModel.return_value = mock_model
    return mock_genai


@pytest.fixture
def provider():
    """기본 Gemini provider."""
    return GeminiProvider(
        model="gemini-2.0-flash",
        fallback="gemini-1.5-flash",
        api_key="test-api-key",
    )


@pytest.fixture
def provider_no_fallback():
    """Fallback 없는 provider."""
    return GeminiProvider(
        model="gemini-2.0-flash",
        fallback=None,
        api_key="test-api-key",
    )


# =============================================================================
# 초기화 테스트
# =============================================================================


class TestGeminiProviderInit:
    """GeminiProvider 초기화 테스트."""

    def test_init_with_defaults(self):
        """기본값으로 초기화."""
        provider = GeminiProvider(api_key="k")

        assert provider.model == "gemini-2.0-flash"
        assert provider.fallback is None
        assert provider.name == "gemini"

    def test_init_uses_gemini_env_key(self, monkeypatch):
        """GEMINI_API_KEY 우선."""
        monkeypatch.setenv("GEMINI_API_KEY", "gemini-key")
        monkeypatch.setenv("GOOGLE_API_KEY", "google-key")

        assert GeminiProvider().api_key == "gemini-key"

    def test_init_falls_back_to_google_env_key(self, monkeypatch):
        """GEMINI_API_KEY가 없으면 GOOGLE_API_KEY."""
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.setenv("GOOGLE_API_KEY", "google-key")

        assert GeminiProvider().api_key == "google-key"

    def test_client_lazy_init(self, provider):
        """클라이언트는 lazy init."""
        assert provider._client is None


class TestExceptionMapping:
    """예외 매핑 테스트."""

    def test_fallback_errors(self):
        assert set(FALLBACK_ERRORS) == {NotFound, ServiceUnavailable, ResourceExhausted}

    def test_reject_immediately(self):
        assert set(REJECT_IMMEDIATELY) == {InvalidArgument, PermissionDenied, Unauthenticated}

    @pytest.mark.parametrize(
        ("error", "fragment"),
        [
            (Unauthenticated("bad key"), "GEMINI_API_KEY"),
            (ResourceExhausted("quota"), "quota exceeded"),
            (ServiceUnavailable("down"), "temporarily unavailable"),
            (NotFound("model"), "not found"),
            (RuntimeError("connection reset"), "network connection"),
        ],
    )
    def test_user_friendly_messages(self, provider, error, fragment):
        """SDK 예외 → 사용자 메시지."""
        assert fragment in provider._get_user_friendly_error_message(error)


# =============================================================================
# generate 테스트
# =============================================================================


class TestGenerate:
    """generate 메서드 테스트."""

    @pytest.mark.asyncio
    async def test_successful_generation(self, provider):
        """성공 → 모델 추적 메타데이터 기록."""
        provider._client = make_genai('{"status": "safe"}')

        result = await provider.generate("prompt")

        assert result.success is True
        assert result.text == '{"status": "safe"}'
        assert result.provider == "gemini"
        assert result.model_requested == "gemini-2.0-flash"
        assert result.model_used == "gemini-2.0-flash"
        assert result.fallback_triggered is False
        assert result.prompt_hash is not None

    @pytest.mark.asyncio
    async def test_json_output_sets_mime_type(self, provider):
        """json_output → response_mime_type 설정, safety_settings 전달."""
        provider._client = make_genai("{}")
        settings = [{"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_NONE"}]

        await provider.generate("prompt", json_output=True, safety_settings=settings)

        _, kwargs = provider._client.GenerativeModel.call_args
        assert kwargs["generation_config"]["response_mime_type"] == "application/json"
        assert kwargs["safety_settings"] == settings

    @pytest.mark.asyncio
    async def test_model_params_passed(self):
        """temperature/max_tokens → generation_config."""
        provider = GeminiProvider(api_key="k", temperature=0.2, max_tokens=512)
        provider._client = make_genai("ok")

        result = await provider.generate("prompt")

        _, kwargs = provider._client.GenerativeModel.call_args
        assert kwargs["generation_config"] == {"temperature": 0.2, "max_output_tokens": 512}
        assert result.model_params == {"temperature": 0.2, "max_output_tokens": 512}

    @pytest.mark.asyncio
    async def test_no_params_passes_none(self, provider):
        """파라미터가 없으면 generation_config=None."""
        provider._client = make_genai("ok")

        await provider.generate("prompt")

        _, kwargs = provider._client.GenerativeModel.call_args
        assert kwargs["generation_config"] is None
        assert kwargs["safety_settings"] is None

    @pytest.mark.asyncio
    async def test_fallback_on_service_unavailable(self, provider):
        """ServiceUnavailable → fallback 시도."""
        provider._client = make_genai(ServiceUnavailable("down"), "fallback result")

        result = await provider.generate("prompt")

        assert result.text == "fallback result"
        assert result.model_requested == "gemini-2.0-flash"
        assert result.model_used == "gemini-1.5-flash"
        assert result.fallback_triggered is True

    @pytest.mark.asyncio
    async def test_fallback_on_resource_exhausted(self, provider):
        """ResourceExhausted → fallback 시도."""
        provider._client = make_genai(ResourceExhausted("quota"), "ok")

        result = await provider.generate("prompt")

        assert result.fallback_triggered is True

    @pytest.mark.asyncio
    async def test_reject_on_invalid_argument(self, provider):
        """InvalidArgument → 즉시 reject (fallback 안 함)."""
        provider._client = make_genai(InvalidArgument("bad input"), "never used")

        with pytest.raises(CompletionError) as exc_info:
            await provider.generate("prompt")

        assert exc_info.value.code == "AUTH_OR_INPUT_ERROR"
        assert provider._client.GenerativeModel.call_count == 1

    @pytest.mark.asyncio
    async def test_reject_on_unauthenticated(self, provider):
        """Unauthenticated → 즉시 reject."""
        provider._client = make_genai(Unauthenticated("bad key"))

        with pytest.raises(CompletionError) as exc_info:
            await provider.generate("prompt")

        assert exc_info.value.code == "AUTH_OR_INPUT_ERROR"
        assert "GEMINI_API_KEY" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_no_fallback_configured_raises_error(self, provider_no_fallback):
        """Fallback 없음 → NO_FALLBACK."""
        provider_no_fallback._client = make_genai(NotFound("model"))

        with pytest.raises(CompletionError) as exc_info:
            await provider_no_fallback.generate("prompt")

        assert exc_info.value.code == "NO_FALLBACK"

    @pytest.mark.asyncio
    async def test_both_primary_and_fallback_fail(self, provider):
        """기본/fallback 모두 실패 → FALLBACK_FAILED."""
        provider._client = make_genai(ServiceUnavailable("down"), ServiceUnavailable("down"))

        with pytest.raises(CompletionError) as exc_info:
            await provider.generate("prompt")

        assert exc_info.value.code == "FALLBACK_FAILED"

    @pytest.mark.asyncio
    async def test_generic_exception_raises_completion_error(self, provider):
        """그 밖의 예외 → COMPLETION_FAILED (원인 보존)."""
        provider._client = make_genai(RuntimeError("boom"))

        with pytest.raises(CompletionError) as exc_info:
            await provider.generate("prompt")

        assert exc_info.value.code == "COMPLETION_FAILED"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_full_raw_storage(self):
        """FULL 레벨 → 원문 보관."""
        provider = GeminiProvider(
            api_key="k",
            raw_storage_config=AIRawStorageConfig(storage_level=RawStorageLevel.FULL),
        )
        provider._client = make_genai("raw text")

        result = await provider.generate("the prompt")

        assert result.llm_raw_output == "raw text"
        assert result.prompt_rendered == "the prompt"
