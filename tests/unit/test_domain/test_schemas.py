"""
test_schemas.py - 요청/응답 스키마 테스트

검증 포인트:
- confidence "NN%" 정규화
- URL 결과 표준 형태 + 이전 형태 변환
- camelCase 와이어 필드
- APK 요청은 metadata/source 중 하나 필수
"""

import pytest
from pydantic import ValidationError

from src.domain.schemas import (
    ApkAnalysisRequest,
    ApkAnalysisResult,
    ScanLog,
    UrlAnalysisResult,
    normalize_confidence,
)

# =============================================================================
# normalize_confidence 테스트
# =============================================================================


class TestNormalizeConfidence:
    """confidence 정규화 테스트."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("85%", "85%"),
            (" 85 % ", "85%"),
            (85, "85%"),
            (0.85, "85%"),
            ("0.85", "85%"),
            ("72.6%", "73%"),
            (1, "1%"),
            (1.0, "100%"),
            ("100", "100%"),
        ],
    )
    def test_valid_values(self, value, expected):
        """숫자/문자열/비율 입력 → NN%."""
        assert normalize_confidence(value) == expected

    def test_clamps_out_of_range(self):
        """0~100 밖은 clamp."""
        assert normalize_confidence(150) == "100%"
        assert normalize_confidence(-5) == "0%"

    @pytest.mark.parametrize("value", ["high", None, True, [85]])
    def test_rejects_non_numeric(self, value):
        """숫자로 해석 불가 → ValueError."""
        with pytest.raises(ValueError):
            normalize_confidence(value)


# =============================================================================
# UrlAnalysisResult 테스트
# =============================================================================


class TestUrlAnalysisResult:
    """URL 분석 결과 스키마 테스트."""

    def test_canonical_shape(self):
        """표준 형태 검증."""
        result = UrlAnalysisResult.model_validate(
            {
                "status": "Unsafe",
                "confidence": 0.9,
                "threats": ["Phishing", "phishing", "ransomware"],
                "details": "Lookalike domain.",
            }
        )

        assert result.status == "unsafe"
        assert result.confidence == "90%"
        # 대소문자 정리, 중복/미지원 값 제거
        assert result.threats == ["phishing"]
        assert not result.is_error

    def test_single_threat_string(self):
        """threats가 문자열 하나여도 리스트로."""
        result = UrlAnalysisResult.model_validate(
            {"status": "safe", "confidence": "99%", "threats": "none", "details": "ok"}
        )

        assert result.threats == ["none"]

    def test_unknown_status_rejected(self):
        """허용되지 않은 status → ValidationError."""
        with pytest.raises(ValidationError):
            UrlAnalysisResult.model_validate(
                {"status": "dangerous", "confidence": "50%", "threats": [], "details": "x"}
            )

    def test_error_sentinel(self):
        """sentinel 결과."""
        result = UrlAnalysisResult.error("Unable to analyze due to server or scanning issue.")

        assert result.is_error
        assert result.confidence == "0%"
        assert result.threats == []

    def test_to_wire_keys(self):
        """와이어 형태 키."""
        result = UrlAnalysisResult.error("x")

        assert set(result.to_wire()) == {"status", "confidence", "threats", "details"}


class TestFromModelOutput:
    """모델 출력 → 표준 형태 변환 테스트."""

    def test_canonical(self):
        """status 키가 있으면 그대로 검증."""
        result = UrlAnalysisResult.from_model_output(
            {"status": "suspicious", "confidence": "60%", "threats": ["spam"], "details": "d"}
        )

        assert result.status == "suspicious"
        assert result.threats == ["spam"]

    def test_legacy_phishing_positive(self):
        """{isPhishing: true} → unsafe + phishing."""
        result = UrlAnalysisResult.from_model_output(
            {"isPhishing": True, "confidence": 0.95, "explanation": "Fake login form."}
        )

        assert result.status == "unsafe"
        assert result.confidence == "95%"
        assert result.threats == ["phishing"]
        assert result.details == "Fake login form."

    def test_legacy_phishing_negative(self):
        """{isPhishing: false} → safe + none."""
        result = UrlAnalysisResult.from_model_output(
            {"isPhishing": False, "confidence": "80%", "explanation": "Official site."}
        )

        assert result.status == "safe"
        assert result.threats == ["none"]

    def test_legacy_safety(self):
        """{isSafe, reason} → confidence는 보고되지 않으므로 0%."""
        result = UrlAnalysisResult.from_model_output(
            {"isSafe": False, "reason": "Typosquatted domain."}
        )

        assert result.status == "unsafe"
        assert result.confidence == "0%"
        assert result.details == "Typosquatted domain."

    def test_unknown_shape(self):
        """알 수 없는 형태 → ValueError."""
        with pytest.raises(ValueError):
            UrlAnalysisResult.from_model_output({"verdict": "ok"})

    def test_canonical_missing_field(self):
        """표준 형태인데 필드 누락 → ValueError (ValidationError)."""
        with pytest.raises(ValueError):
            UrlAnalysisResult.from_model_output({"status": "safe"})


# =============================================================================
# APK 스키마 테스트
# =============================================================================


class TestApkSchemas:
    """APK 요청/결과 스키마 테스트."""

    def test_request_accepts_camel_case(self):
        """camelCase 입력."""
        request = ApkAnalysisRequest.model_validate({"apkSource": "Google Play Store"})

        assert request.apk_source == "Google Play Store"
        assert request.apk_metadata is None

    def test_request_requires_one_field(self):
        """둘 다 없으면 ValidationError."""
        with pytest.raises(ValidationError):
            ApkAnalysisRequest.model_validate({})

    def test_result_wire_format(self):
        """결과는 isMalicious/reason으로 직렬화."""
        result = ApkAnalysisResult(is_malicious=True, reason="Excessive permissions.")

        assert result.to_wire() == {"isMalicious": True, "reason": "Excessive permissions."}

    def test_result_from_camel_case(self):
        """모델 응답(camelCase)에서 생성."""
        result = ApkAnalysisResult.model_validate({"isMalicious": False, "reason": "ok"})

        assert result.is_malicious is False

    def test_result_schema_uses_aliases(self):
        """모델에 보내는 JSON 스키마는 camelCase."""
        schema = ApkAnalysisResult.model_json_schema(by_alias=True)

        assert set(schema["properties"]) == {"isMalicious", "reason"}


class TestScanLog:
    """ScanLog 직렬화 테스트."""

    def test_to_dict(self):
        """모든 필드 포함."""
        scan_log = ScanLog(
            scan_id="SCAN-1",
            kind="url",
            target_hash="sha256:abc",
            started_at="2026-01-01T00:00:00+00:00",
        )

        data = scan_log.to_dict()

        assert data["scan_id"] == "SCAN-1"
        assert data["result"] == "pending"
        assert data["error_code"] is None
