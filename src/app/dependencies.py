"""
FastAPI 의존성.

ScanService는 앱당 1개, 첫 요청에서 생성 (provider 키 검사 지연).
테스트는 app.dependency_overrides[get_scan_service]로 교체.
"""

from fastapi import Request

from src.app.services.scan import ScanService


def get_scan_service(request: Request) -> ScanService:
    """앱 상태에 캐시된 ScanService 반환."""
    service: ScanService | None = getattr(request.app.state, "scan_service", None)
    if service is None:
        config = getattr(request.app.state, "config", {}) or {}
        service = ScanService(config)
        request.app.state.scan_service = service
    return service
