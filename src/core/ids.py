"""
ID 생성: scan_id

규칙:
- 스캔마다 새 ID 발급 (결정론 불필요)
- 로그 한 줄에서 요청을 추적하는 용도
"""

import uuid
from datetime import UTC, datetime

SCAN_ID_PREFIX = "SCAN-"


def generate_scan_id() -> str:
    """
    Scan ID 생성.

    고유성 보장: UUID v4
    포맷: SCAN-{timestamp}-{uuid[:8]}

    Returns:
        scan_id 문자열
    """
    now = datetime.now(UTC)
    timestamp = now.strftime("%Y%m%d%H%M%S")
    unique = uuid.uuid4().hex[:8]

    return f"{SCAN_ID_PREFIX}{timestamp}-{unique}"
