"""
Dashboard Routes.

샘플 데이터만 렌더링 (영속화 없음).
"""

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from src.app.templating import render_page
from src.domain.sample_data import RECENT_ACTIVITIES, STAT_CARDS, build_chart_data

# Routers
router = APIRouter()  # HTML pages
api_router = APIRouter()  # API endpoints


@router.get("", response_class=HTMLResponse)
async def dashboard_page(request: Request) -> HTMLResponse:
    """대시보드 화면."""
    chart_data = build_chart_data()
    chart_max = max(point["total"] for point in chart_data)
    return render_page(
        request,
        "dashboard.html",
        stat_cards=STAT_CARDS,
        chart_data=chart_data,
        chart_max=chart_max,
        recent_activities=RECENT_ACTIVITIES,
    )


@api_router.get("/summary")
async def dashboard_summary() -> dict[str, Any]:
    """대시보드 데이터 (JSON)."""
    return {
        "stats": [asdict(card) for card in STAT_CARDS],
        "chart": build_chart_data(),
        "recentActivity": [asdict(activity) for activity in RECENT_ACTIVITIES],
    }
