"""
E2E API 테스트 설정.

- 실제 app 인스턴스 (예외 핸들러, 라우트 prefix 포함)
- ScanService는 FakeProvider 기반으로 교체 (네트워크 없음)
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.app.dependencies import get_scan_service
from src.app.main import app
from src.app.services.scan import ScanService


@pytest.fixture
def override_provider() -> Generator:
    """
    app의 ScanService를 주어진 provider로 교체하는 함수.

    Usage:
        override_provider(safe_url_provider)
    """

    def _override(provider, config: dict | None = None) -> ScanService:
        service = ScanService(config or {}, provider=provider)
        app.dependency_overrides[get_scan_service] = lambda: service
        return service

    yield _override
    app.dependency_overrides.clear()


@pytest.fixture
def client() -> TestClient:
    """lifespan 없이 동작하는 클라이언트."""
    return TestClient(app)


@pytest.fixture
def keyless_anthropic_app(monkeypatch) -> None:
    """API 키 없는 anthropic 설정으로 앱 상태 교체 (dependency override 없음)."""
    monkeypatch.delenv("MY_ANTHROPIC_KEY", raising=False)
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.setattr(app.state, "config", {"ai": {"provider": "anthropic"}}, raising=False)
    monkeypatch.setattr(app.state, "scan_service", None, raising=False)
