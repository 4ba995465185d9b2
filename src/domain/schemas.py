"""
Data schemas for Guardian Eye.

규칙:
- Flow 입출력은 pydantic 모델로 선언 (모델에 보내는 스키마의 SSOT)
- 와이어 필드명은 camelCase (isMalicious 등), 파이썬 속성은 snake_case
- 모든 레코드는 요청 단위로 생성/소멸 (영속화 없음)
"""

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from src.domain.constants import (
    SENTINEL_CONFIDENCE,
    STATUS_ERROR,
    STATUS_SAFE,
    STATUS_UNSAFE,
    THREAT_NONE,
    THREAT_PHISHING,
    URL_THREATS,
)

UrlStatus = Literal["safe", "unsafe", "suspicious", "error"]
UrlThreat = Literal["malware", "phishing", "spam", "none"]


class CamelModel(BaseModel):
    """camelCase alias를 쓰는 공통 베이스 (snake_case 입력도 허용)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """JSON 응답용 (camelCase)."""
        return self.model_dump(by_alias=True)


# =============================================================================
# Confidence 정규화
# =============================================================================

def normalize_confidence(value: Any) -> str:
    """
    confidence 값을 "NN%" 문자열로 정규화.

    - "85%" → "85%"
    - 85 → "85%"
    - 0.85 (float, 0~1) → "85%"
    - "0.85" → "85%"
    - 범위 밖은 0~100으로 clamp

    Raises:
        ValueError: 숫자로 해석할 수 없는 값
    """
    if isinstance(value, bool):
        raise ValueError(f"confidence must be a percentage, got {value!r}")

    fraction_allowed = isinstance(value, float)

    if isinstance(value, str):
        text = value.strip()
        if text.endswith("%"):
            text = text[:-1].strip()
        else:
            fraction_allowed = "." in text
        try:
            number = float(text)
        except ValueError as e:
            raise ValueError(f"confidence must be a percentage, got {value!r}") from e
    elif isinstance(value, int | float):
        number = float(value)
    else:
        raise ValueError(f"confidence must be a percentage, got {value!r}")

    if fraction_allowed and 0.0 <= number <= 1.0:
        number *= 100

    number = min(max(number, 0.0), 100.0)
    return f"{round(number)}%"


# =============================================================================
# URL Analysis
# =============================================================================

class UrlAnalysisRequest(CamelModel):
    """URL 분석 입력."""

    url: str = Field(description="The URL to analyze.")


class UrlAnalysisResult(CamelModel):
    """
    URL 분석 결과 (표준 형태).

    {status, confidence, threats[], details}
    """

    status: UrlStatus = Field(description="The security status of the URL.")
    confidence: str = Field(
        description="The confidence level (0% to 100%) in the status assessment."
    )
    threats: list[UrlThreat] = Field(
        default_factory=list,
        description="A list of potential threats identified.",
    )
    details: str = Field(description="A short explanation for the security assessment.")

    @field_validator("status", mode="before")
    @classmethod
    def _lower_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("confidence", mode="before")
    @classmethod
    def _normalize_confidence(cls, value: Any) -> str:
        return normalize_confidence(value)

    @field_validator("threats", mode="before")
    @classmethod
    def _normalize_threats(cls, value: Any) -> Any:
        # 모델이 단일 문자열이나 대문자로 주는 경우 보정, 모르는 값은 버림
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list):
            return value

        threats: list[str] = []
        for item in value:
            if not isinstance(item, str):
                continue
            threat = item.strip().lower()
            if threat in URL_THREATS and threat not in threats:
                threats.append(threat)
        return threats

    @property
    def is_error(self) -> bool:
        return self.status == STATUS_ERROR

    @classmethod
    def error(cls, details: str) -> "UrlAnalysisResult":
        """Sentinel error 결과 (status=error, confidence=0%, threats=[])."""
        return cls(
            status=STATUS_ERROR,
            confidence=SENTINEL_CONFIDENCE,
            threats=[],
            details=details,
        )

    @classmethod
    def from_model_output(cls, data: dict[str, Any]) -> "UrlAnalysisResult":
        """
        모델 출력(dict)을 표준 형태로 변환.

        이전 버전 응답 형태도 허용:
        - {isPhishing, confidence, explanation}
        - {isSafe, reason}

        Raises:
            ValueError: 어느 형태에도 맞지 않음 (pydantic ValidationError 포함)
        """
        if "status" in data:
            return cls.model_validate(data)

        if "isPhishing" in data or "is_phishing" in data:
            legacy = LegacyPhishingResult.model_validate(data)
            return cls(
                status=STATUS_UNSAFE if legacy.is_phishing else STATUS_SAFE,
                confidence=legacy.confidence,
                threats=[THREAT_PHISHING] if legacy.is_phishing else [THREAT_NONE],
                details=legacy.explanation,
            )

        if "isSafe" in data or "is_safe" in data:
            legacy_safety = LegacySafetyResult.model_validate(data)
            return cls(
                status=STATUS_SAFE if legacy_safety.is_safe else STATUS_UNSAFE,
                # 이 형태는 confidence를 보고하지 않음
                confidence=SENTINEL_CONFIDENCE,
                threats=[THREAT_NONE] if legacy_safety.is_safe else [],
                details=legacy_safety.reason,
            )

        raise ValueError(f"Unrecognized URL analysis shape: keys={sorted(data)}")


class LegacyPhishingResult(CamelModel):
    """이전 URL 결과 형태: {isPhishing, confidence, explanation}."""

    is_phishing: bool
    confidence: Any = SENTINEL_CONFIDENCE
    explanation: str = ""


class LegacySafetyResult(CamelModel):
    """이전 URL 결과 형태: {isSafe, reason}."""

    is_safe: bool
    reason: str = ""


# =============================================================================
# APK Analysis
# =============================================================================

class ApkMetadataInput(CamelModel):
    """APK 메타데이터 flow 입력."""

    apk_metadata: str = Field(
        description="The APK metadata to analyze, including permissions, size, and source."
    )


class ApkSourceInput(CamelModel):
    """APK 출처 flow 입력."""

    apk_source: str = Field(
        description="Where the APK comes from, e.g. a download URL or an app store page."
    )


class ApkAnalysisRequest(CamelModel):
    """
    APK 분석 요청.

    {apkMetadata} 또는 {apkSource} 중 하나 (둘 다 있으면 metadata 우선).
    """

    apk_metadata: str | None = None
    apk_source: str | None = None

    @model_validator(mode="after")
    def _require_one(self) -> "ApkAnalysisRequest":
        if self.apk_metadata is None and self.apk_source is None:
            raise ValueError("Either apkMetadata or apkSource is required")
        return self


class ApkAnalysisResult(CamelModel):
    """APK 분석 결과."""

    is_malicious: bool = Field(description="Whether the APK is likely to be malicious.")
    reason: str = Field(
        description=(
            "The reason why the APK is considered malicious, including suspicious "
            "permissions or other metadata anomalies."
        )
    )


# =============================================================================
# Scan Logging Schema
# =============================================================================

@dataclass
class ScanLog:
    """
    스캔 1회의 로그 레코드.

    저장하지 않고 구조화 로그 한 줄로만 남긴다.
    target은 원문 대신 해시만 기록.
    """
    scan_id: str
    kind: str  # url, apk_metadata, apk_source
    target_hash: str
    started_at: str  # ISO 8601
    finished_at: str | None = None
    result: str = "pending"  # pending, success, failed
    verdict: str | None = None  # safe, unsafe, suspicious, error, malicious, clean
    model_used: str | None = None
    duration_ms: int | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "scan_id": self.scan_id,
            "kind": self.kind,
            "target_hash": self.target_hash,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "result": self.result,
            "verdict": self.verdict,
            "model_used": self.model_used,
            "duration_ms": self.duration_ms,
            "error_code": self.error_code,
        }
