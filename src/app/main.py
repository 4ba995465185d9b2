"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uvicorn src.app.main:app --reload
- 프로덕션: uvicorn src.app.main:app
"""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from src.app.flows import list_flows

# Routes
from src.app.routes import apk_scanner, dashboard, threat_feed, url_scanner
from src.core.logging import configure_logging
from src.domain.errors import ActionError, InputValidationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "GUARDIAN_EYE_CONFIG"

# =============================================================================
# Configuration
# =============================================================================


def load_config(config_path: Path | None = None) -> dict:
    """
    설정 파일 로드.

    우선순위: 인자 > GUARDIAN_EYE_CONFIG 환경변수 > 프로젝트 루트 default.yaml
    """
    if config_path is None:
        env_path = os.getenv(CONFIG_ENV_VAR)
        if env_path:
            config_path = Path(env_path)
        else:
            # 프로젝트 루트의 default.yaml
            config_path = Path(__file__).parent.parent.parent / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] | None = yaml.safe_load(f)
        return data or {}


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: .env 로드, 설정 로드, 로깅 설정
    종료 시: 스캔 서비스 해제
    """
    # Startup
    load_dotenv()
    app.state.config = load_config()
    configure_logging(app.state.config)
    logger.info(f"Guardian Eye started (provider={_provider_name(app.state.config)})")

    yield

    # Shutdown
    app.state.scan_service = None


def _provider_name(config: dict) -> str:
    return str((config.get("ai", {}) or {}).get("provider", "gemini"))


# =============================================================================
# App Instance
# =============================================================================

app = FastAPI(
    title="Guardian Eye",
    description="AI 기반 URL / APK 보안 점검 도구",
    version="0.1.0",
    lifespan=lifespan,
)

# Static files (CSS)
static_dir = Path(__file__).parent / "static"
if static_dir.exists():
    app.mount("/static", StaticFiles(directory=static_dir), name="static")


# =============================================================================
# Error Handlers
# =============================================================================


@app.exception_handler(InputValidationError)
async def input_validation_error_handler(
    request: Request, exc: InputValidationError
) -> JSONResponse:
    """입력 검증 실패 → 422 {code, message}."""
    return JSONResponse(status_code=422, content=exc.to_dict())


@app.exception_handler(ActionError)
async def action_error_handler(request: Request, exc: ActionError) -> JSONResponse:
    """분석 실패 → 502 {code, message}. 원인 예외는 노출하지 않음."""
    return JSONResponse(status_code=502, content=exc.to_dict())


# =============================================================================
# Routes
# =============================================================================

# 페이지 라우트 (HTML)
app.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
app.include_router(url_scanner.router, prefix="/url-scanner", tags=["URL Scanner"])
app.include_router(apk_scanner.router, prefix="/apk-scanner", tags=["APK Scanner"])
app.include_router(threat_feed.router, prefix="/threat-feed", tags=["Threat Feed"])

# API 라우트
app.include_router(
    dashboard.api_router, prefix="/api/dashboard", tags=["Dashboard API"]
)
app.include_router(
    url_scanner.api_router, prefix="/api/url-scanner", tags=["URL Scanner API"]
)
app.include_router(
    apk_scanner.api_router, prefix="/api/apk-scanner", tags=["APK Scanner API"]
)
app.include_router(
    threat_feed.api_router, prefix="/api/threat-feed", tags=["Threat Feed API"]
)


# =============================================================================
# Root Endpoints
# =============================================================================


@app.get("/")
async def root() -> RedirectResponse:
    """홈 → 대시보드."""
    return RedirectResponse(url="/dashboard")


@app.get("/api/flows")
async def flows() -> list[dict[str, Any]]:
    """등록된 flow 목록."""
    return list_flows()


@app.get("/health")
async def health() -> dict[str, str]:
    """헬스 체크."""
    return {"status": "ok"}


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
