"""
APK Scanner Routes.

- GET /apk-scanner → 스캐너 화면 (HTMX)
- POST /api/apk-scanner/check → 결과 조각 (form: source, mode)
- POST /api/apk-scanner/analyze → JSON {isMalicious, reason}
"""

from typing import Any, Literal

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from src.app.dependencies import get_scan_service
from src.app.services.scan import ScanService
from src.app.templating import render_fragment, render_page
from src.domain.errors import ActionError, InputValidationError
from src.domain.schemas import ApkAnalysisRequest, ApkAnalysisResult

# Routers
router = APIRouter()  # HTML pages
api_router = APIRouter()  # API endpoints

ScanMode = Literal["source", "metadata"]


async def _run_scan(service: ScanService, value: str, mode: ScanMode) -> ApkAnalysisResult:
    if mode == "metadata":
        return await service.analyze_apk(value)
    return await service.analyze_apk_source(value)


# =============================================================================
# Page Routes (HTML)
# =============================================================================


@router.get("", response_class=HTMLResponse)
async def apk_scanner_page(request: Request) -> HTMLResponse:
    """APK 스캐너 화면 (idle 상태)."""
    return render_page(request, "apk_scanner.html")


# =============================================================================
# API Routes
# =============================================================================


@api_router.post("/check", response_class=HTMLResponse)
async def check_apk(
    request: Request,
    source: str = Form(""),
    mode: ScanMode = Form("source"),
    service: ScanService = Depends(get_scan_service),
) -> HTMLResponse:
    """
    APK 검사 (HTMX).

    실패는 "Analysis Failed" 배너로 표시. 항상 200.
    """
    try:
        result = await _run_scan(service, source, mode)
    except InputValidationError as e:
        return render_fragment(request, "partials/form_error.html", message=e.message)
    except ActionError as e:
        return render_fragment(request, "partials/error_banner.html", message=e.message)

    return render_fragment(request, "partials/apk_result.html", result=result)


@api_router.post("/analyze")
async def analyze_apk(
    payload: ApkAnalysisRequest,
    service: ScanService = Depends(get_scan_service),
) -> dict[str, Any]:
    """
    APK 분석 (JSON).

    apkMetadata가 있으면 메타데이터 flow, 아니면 출처 flow.
    실패 응답은 URL 분석과 같은 {code, message} 형식 (422 / 502).
    """
    if payload.apk_metadata is not None:
        result = await _run_scan(service, payload.apk_metadata, "metadata")
    else:
        result = await _run_scan(service, payload.apk_source or "", "source")

    return result.to_wire()
