"""
Threat Feed Routes.

고정 위협 목록 (실시간 수집 없음).
"""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from src.app.templating import render_page
from src.domain.sample_data import THREAT_FEED

# Routers
router = APIRouter()  # HTML pages
api_router = APIRouter()  # API endpoints


@router.get("", response_class=HTMLResponse)
async def threat_feed_page(request: Request) -> HTMLResponse:
    """위협 피드 화면."""
    return render_page(request, "threat_feed.html", threats=THREAT_FEED)


@api_router.get("")
async def list_threats(severity: str | None = None) -> list[dict[str, Any]]:
    """
    위협 목록 (JSON).

    Args:
        severity: 지정 시 해당 심각도만 (대소문자 무시)
    """
    entries = THREAT_FEED
    if severity:
        entries = tuple(e for e in entries if e.severity.lower() == severity.lower())
    return [entry.to_dict() for entry in entries]
