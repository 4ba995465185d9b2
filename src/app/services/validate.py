"""
Validation Service: 스캔 입력 검증.

- URL: 비어있음 / '.' 없음 / 5자 미만 → 거부
- APK 메타데이터/출처: 공백 제거 후 5자 미만 → 거부

메시지는 그대로 폼 아래에 표시된다.
"""

from dataclasses import dataclass

from src.domain.constants import (
    APK_SOURCE_MIN_LENGTH,
    MSG_APK_SOURCE_INVALID,
    MSG_URL_INVALID,
    MSG_URL_REQUIRED,
    URL_MIN_LENGTH,
)
from src.domain.errors import ErrorCodes, InputValidationError


@dataclass
class ValidationResult:
    """검증 결과."""
    valid: bool
    value: str = ""  # 정리된 입력 (strip)
    code: str | None = None
    message: str | None = None

    def raise_for_error(self) -> str:
        """
        실패면 InputValidationError, 성공이면 정리된 값 반환.

        Raises:
            InputValidationError: valid=False
        """
        if not self.valid:
            raise InputValidationError(self.code or "INVALID_INPUT", self.message or "")
        return self.value


def validate_url(url: str | None) -> ValidationResult:
    """URL 입력 검증."""
    value = (url or "").strip()

    if not value:
        return ValidationResult(
            valid=False,
            code=ErrorCodes.URL_REQUIRED,
            message=MSG_URL_REQUIRED,
        )

    if "." not in value or len(value) < URL_MIN_LENGTH:
        return ValidationResult(
            valid=False,
            value=value,
            code=ErrorCodes.URL_INVALID,
            message=MSG_URL_INVALID,
        )

    return ValidationResult(valid=True, value=value)


def validate_apk_source(source: str | None) -> ValidationResult:
    """APK 메타데이터/출처 입력 검증."""
    value = (source or "").strip()

    if len(value) < APK_SOURCE_MIN_LENGTH:
        return ValidationResult(
            valid=False,
            value=value,
            code=ErrorCodes.APK_SOURCE_INVALID,
            message=MSG_APK_SOURCE_INVALID,
        )

    return ValidationResult(valid=True, value=value)
