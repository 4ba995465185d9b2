"""
URL Scanner Routes.

- GET /url-scanner → 스캐너 화면 (HTMX)
- POST /api/url-scanner/check → 결과 조각 (form)
- POST /api/url-scanner/analyze → JSON {status, confidence, threats, details}
"""

from typing import Any

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from src.app.dependencies import get_scan_service
from src.app.services.scan import ScanService
from src.app.templating import render_fragment, render_page
from src.domain.errors import ActionError, InputValidationError
from src.domain.schemas import UrlAnalysisRequest

# Routers
router = APIRouter()  # HTML pages
api_router = APIRouter()  # API endpoints


# =============================================================================
# Page Routes (HTML)
# =============================================================================


@router.get("", response_class=HTMLResponse)
async def url_scanner_page(request: Request) -> HTMLResponse:
    """URL 스캐너 화면 (idle 상태)."""
    return render_page(request, "url_scanner.html")


# =============================================================================
# API Routes
# =============================================================================


@api_router.post("/check", response_class=HTMLResponse)
async def check_url(
    request: Request,
    url: str = Form(""),  # 빈 문자열은 422 대신 검증 메시지로 처리
    service: ScanService = Depends(get_scan_service),
) -> HTMLResponse:
    """
    URL 검사 (HTMX).

    Returns:
        결과 카드 / 검증 메시지 / 실패 배너 중 하나의 조각.
        HTMX swap을 위해 항상 200.
    """
    try:
        result = await service.analyze_url(url)
    except InputValidationError as e:
        return render_fragment(request, "partials/form_error.html", message=e.message)
    except ActionError as e:
        return render_fragment(request, "partials/error_banner.html", message=e.message)

    return render_fragment(request, "partials/url_result.html", result=result)


@api_router.post("/analyze")
async def analyze_url(
    payload: UrlAnalysisRequest,
    service: ScanService = Depends(get_scan_service),
) -> dict[str, Any]:
    """
    URL 분석 (JSON).

    - 422: 입력 검증 실패 {code, message} (main의 예외 핸들러)
    - 502: 서버 측 분석 실패 {code, message}
    - 200: status=error sentinel 포함 모든 결과
    """
    result = await service.analyze_url(payload.url)
    return result.to_wire()
