"""
Application Services.

역할:
- scan: URL/APK 분석 action (flow 호출 + 타임아웃 + scan log)
- validate: 스캔 입력 검증
"""

from .scan import ScanService
from .validate import ValidationResult, validate_apk_source, validate_url

__all__ = [
    "ScanService",
    "ValidationResult",
    "validate_url",
    "validate_apk_source",
]
