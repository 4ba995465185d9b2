"""
FastAPI Routes.

페이지 라우트 (HTML) + API 라우트 (HTMX 조각 + JSON)
"""

from . import apk_scanner, dashboard, threat_feed, url_scanner

__all__ = ["apk_scanner", "dashboard", "threat_feed", "url_scanner"]
