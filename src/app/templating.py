"""
Jinja2 렌더링 헬퍼.

- 페이지: 공통 레이아웃 컨텍스트(앱 제목, 사이드바, 헤더 제목) 주입
- 조각(fragment): HTMX swap용, 레이아웃 없음
"""

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from src.domain.constants import APP_NAME, NAV_ITEMS, get_page_title

_templates_dir = Path(__file__).parent / "templates"
jinja_templates = Jinja2Templates(directory=_templates_dir)


def get_app_title(request: Request) -> str:
    """설정의 app.title (없으면 기본 앱 이름)."""
    config = getattr(request.app.state, "config", None) or {}
    app_config = config.get("app", {}) or {}
    return str(app_config.get("title") or APP_NAME)


def render_page(request: Request, template_name: str, **context: Any) -> HTMLResponse:
    """레이아웃 포함 페이지 렌더링."""
    path = request.url.path
    return jinja_templates.TemplateResponse(
        request,
        template_name,
        {
            "app_name": get_app_title(request),
            "nav_items": NAV_ITEMS,
            "current_path": path,
            "page_title": get_page_title(path),
            **context,
        },
    )


def render_fragment(
    request: Request,
    template_name: str,
    **context: Any,
) -> HTMLResponse:
    """HTMX 조각 렌더링."""
    return jinja_templates.TemplateResponse(request, template_name, context)
