"""
Pytest fixtures for Guardian Eye tests.

- 모델 호출은 FakeProvider로 대체 (네트워크 없음)
- 정상 응답 / 전송 실패 / 비JSON 응답 케이스 분리
"""

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from src.app.providers.base import CompletionError, CompletionResult, LLMProvider

# =============================================================================
# Fake Provider
# =============================================================================


class FakeProvider(LLMProvider):
    """
    테스트용 Provider.

    - text: 고정 응답 텍스트
    - error: 설정 시 generate에서 raise
    - calls: 받은 (prompt, kwargs) 기록
    """

    name = "fake"

    def __init__(
        self,
        text: str = "",
        error: Exception | None = None,
        model: str = "fake-model",
    ):
        self.text = text
        self.error = error
        self.model = model
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def generate(
        self,
        prompt: str,
        *,
        json_output: bool = False,
        safety_settings: list[dict[str, str]] | None = None,
    ) -> CompletionResult:
        self.calls.append(
            (prompt, {"json_output": json_output, "safety_settings": safety_settings})
        )
        if self.error is not None:
            raise self.error
        return CompletionResult(
            success=True,
            text=self.text,
            model_requested=self.model,
            model_used=self.model,
            provider=self.name,
        )


def make_provider(output: Any = None, *, text: str | None = None) -> FakeProvider:
    """dict 출력이면 JSON 문자열로, text가 있으면 그대로 응답하는 FakeProvider."""
    if text is None:
        text = json.dumps(output)
    return FakeProvider(text=text)


# =============================================================================
# Path / Config Fixtures
# =============================================================================


@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config_path(project_root: Path) -> Path:
    """default.yaml 경로."""
    return project_root / "default.yaml"


@pytest.fixture
def default_config(default_config_path: Path) -> dict:
    """기본 설정 로드."""
    with open(default_config_path, encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def test_config() -> dict:
    """테스트용 최소 설정 (짧은 타임아웃)."""
    return {
        "ai": {
            "provider": "gemini",
            "llm": {"model": "fake-model"},
            "request_timeout": 1,
        },
        "logging": {"level": "INFO"},
    }


# =============================================================================
# Provider Fixtures
# =============================================================================


@pytest.fixture
def safe_url_provider() -> FakeProvider:
    """안전 판정 URL 응답."""
    return make_provider(
        {
            "status": "safe",
            "confidence": "92%",
            "threats": ["none"],
            "details": "Well-known domain with valid HTTPS.",
        }
    )


@pytest.fixture
def unsafe_url_provider() -> FakeProvider:
    """위험 판정 URL 응답."""
    return make_provider(
        {
            "status": "unsafe",
            "confidence": "88%",
            "threats": ["phishing"],
            "details": "Domain imitates a bank login page.",
        }
    )


@pytest.fixture
def malicious_apk_provider() -> FakeProvider:
    """악성 판정 APK 응답."""
    return make_provider(
        {
            "isMalicious": True,
            "reason": "Downloaded from an unofficial mirror with a misspelled name.",
        }
    )


@pytest.fixture
def clean_apk_provider() -> FakeProvider:
    """정상 판정 APK 응답."""
    return make_provider(
        {"isMalicious": False, "reason": "Official Google Play Store listing."}
    )


@pytest.fixture
def failing_provider() -> FakeProvider:
    """전송 실패 Provider."""
    return FakeProvider(
        error=CompletionError("COMPLETION_FAILED", "A network connection error occurred.")
    )


@pytest.fixture
def non_json_provider() -> FakeProvider:
    """JSON이 아닌 응답."""
    return FakeProvider(text="I think this website looks fine to me.")


@pytest.fixture
def provider_factory():
    """
    FakeProvider 생성 함수.

    Usage:
        provider = provider_factory({"isMalicious": True, "reason": "..."})
        provider = provider_factory(text="not json")
        provider = provider_factory(error=TimeoutError())
    """

    def _factory(
        output: Any = None,
        *,
        text: str | None = None,
        error: Exception | None = None,
    ) -> FakeProvider:
        if error is not None:
            return FakeProvider(error=error)
        return make_provider(output, text=text)

    return _factory
