"""
Logging: 로깅 설정 + scan log 레코드

규칙:
- 모듈별 logger = logging.getLogger(__name__)
- scan 1회 = 구조화 로그 1줄 (파일 저장 없음)
- 사용자 입력 원문은 기록하지 않음 (target_hash만)
"""

import json
import logging
from datetime import UTC, datetime
from typing import Any

from src.core.hashing import hash_target
from src.core.ids import generate_scan_id
from src.domain.schemas import ScanLog

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

scan_logger = logging.getLogger("guardian_eye.scan")


# =============================================================================
# Logging Setup
# =============================================================================


def configure_logging(config: dict[str, Any]) -> None:
    """
    default.yaml의 logging 섹션으로 루트 로거 설정.

    Args:
        config: 전체 설정 (logging.level, logging.format)
    """
    logging_config = config.get("logging", {}) or {}
    level_name = str(logging_config.get("level", "INFO")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=logging_config.get("format", DEFAULT_LOG_FORMAT),
        force=True,
    )

    # 외부 SDK 로그는 WARNING 이상만
    for noisy in ("httpx", "httpcore", "anthropic", "google"):
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))


# =============================================================================
# Scan Log Management
# =============================================================================


def create_scan_log(kind: str, target: str) -> ScanLog:
    """
    새 ScanLog 생성.

    Args:
        kind: url, apk_metadata, apk_source
        target: 스캔 대상 원문 (해시로만 저장됨)

    Returns:
        초기화된 ScanLog
    """
    return ScanLog(
        scan_id=generate_scan_id(),
        kind=kind,
        target_hash=hash_target(target),
        started_at=datetime.now(UTC).isoformat(),
        result="pending",
    )


def complete_scan_log(
    scan_log: ScanLog,
    success: bool,
    verdict: str | None = None,
    model_used: str | None = None,
    error_code: str | None = None,
) -> None:
    """
    ScanLog 완료 처리.

    Args:
        scan_log: ScanLog 인스턴스
        success: 성공 여부
        verdict: 판정 (safe, unsafe, malicious 등)
        model_used: 실제 호출된 모델
        error_code: 에러 코드 (실패 시)
    """
    finished = datetime.now(UTC)
    scan_log.finished_at = finished.isoformat()
    scan_log.result = "success" if success else "failed"
    scan_log.verdict = verdict
    scan_log.model_used = model_used

    started = datetime.fromisoformat(scan_log.started_at)
    scan_log.duration_ms = int((finished - started).total_seconds() * 1000)

    if not success:
        scan_log.error_code = error_code


def emit_scan_log(scan_log: ScanLog, logger: logging.Logger | None = None) -> None:
    """
    ScanLog를 JSON 한 줄로 기록.

    실패한 스캔은 WARNING, 나머지는 INFO.
    """
    target_logger = logger or scan_logger
    level = logging.WARNING if scan_log.result == "failed" else logging.INFO
    target_logger.log(level, json.dumps(scan_log.to_dict(), ensure_ascii=False))
