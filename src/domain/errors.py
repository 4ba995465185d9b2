"""
Error definitions for Guardian Eye.

규칙:
- flow/action 경계에서만 잡는다
- 코드 + 컨텍스트로 명시적 실패 (조용한 실패 금지)
- 사용자에게는 일반 메시지만 노출 (raw 에러 금지)
"""

from typing import Any


class GuardianError(Exception):
    """
    코드 기반 에러의 공통 베이스.

    Usage:
        raise FlowError("OUTPUT_PARSE_FAILED", flow="analyzeUrlPrompt", cause=e)
    """

    def __init__(self, code: str, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **{k: str(v) for k, v in self.context.items()},
        }


class FlowError(GuardianError):
    """
    Flow 실행 실패 (모델 응답을 선언된 스키마로 해석할 수 없음).

    - OUTPUT_PARSE_FAILED: JSON 추출 실패
    - OUTPUT_SCHEMA_MISMATCH: JSON은 있지만 스키마 불일치
    """


class InputValidationError(GuardianError):
    """사용자 입력 검증 실패. message는 그대로 UI에 표시 가능."""

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.message = message
        super().__init__(code, **context)

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


class ActionError(GuardianError):
    """
    Action 레이어 실패.

    원인은 __cause__로 보존하고, message는 UI 배너용 일반 문구만 담는다.
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.message = message
        super().__init__(code, **context)

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Input ===
    URL_REQUIRED = "URL_REQUIRED"
    URL_INVALID = "URL_INVALID"
    APK_SOURCE_INVALID = "APK_SOURCE_INVALID"

    # === Flow ===
    FLOW_NOT_FOUND = "FLOW_NOT_FOUND"
    OUTPUT_PARSE_FAILED = "OUTPUT_PARSE_FAILED"
    OUTPUT_SCHEMA_MISMATCH = "OUTPUT_SCHEMA_MISMATCH"

    # === Action ===
    URL_ANALYSIS_FAILED = "URL_ANALYSIS_FAILED"
    APK_ANALYSIS_FAILED = "APK_ANALYSIS_FAILED"
    ANALYSIS_TIMEOUT = "ANALYSIS_TIMEOUT"

    # === Provider ===
    PROVIDER_UNKNOWN = "PROVIDER_UNKNOWN"
    COMPLETION_FAILED = "COMPLETION_FAILED"
    PROVIDER_UNAVAILABLE = "PROVIDER_UNAVAILABLE"
