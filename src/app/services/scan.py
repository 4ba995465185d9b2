"""
Scan Service: action 레이어.

UI → action → flow → 결과. 요청당 모델 호출 1회.

실패 정책:
- 입력 검증 실패 → InputValidationError (그대로 전파)
- URL: flow가 sentinel을 반환하므로 보통 실패하지 않음.
  그 밖의 예외만 ActionError("Failed to analyze URL ...")
- APK: 모든 실패 → ActionError("Failed to analyze APK metadata ...")
- 타임아웃은 전송 실패와 같은 경로
- Provider 생성 실패 (API 키 없음, 알 수 없는 provider) → ActionError(PROVIDER_UNAVAILABLE)
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from src.app.flows import (
    analyze_apk_metadata_for_malice,
    analyze_apk_source_for_malice,
    analyze_url_for_phishing,
)
from src.app.providers import LLMProvider, ProviderError, create_provider
from src.core.logging import complete_scan_log, create_scan_log, emit_scan_log
from src.domain.constants import (
    ACTION_APK_FAILED_MESSAGE,
    ACTION_URL_FAILED_MESSAGE,
    SENTINEL_DETAILS_UNAVAILABLE,
)
from src.domain.errors import ActionError, ErrorCodes
from src.domain.schemas import (
    ApkAnalysisResult,
    ApkMetadataInput,
    ApkSourceInput,
    ScanLog,
    UrlAnalysisRequest,
    UrlAnalysisResult,
)

from .validate import validate_apk_source, validate_url

logger = logging.getLogger(__name__)

# Default timeout for a single model call (seconds)
DEFAULT_REQUEST_TIMEOUT = 60.0


class ScanService:
    """
    스캔 서비스.

    Usage:
        service = ScanService(config)
        result = await service.analyze_url("https://example.com")
    """

    def __init__(
        self,
        config: dict,
        provider: LLMProvider | None = None,
    ):
        """
        Args:
            config: 설정 (ai.provider, ai.llm, ai.request_timeout)
            provider: LLM Provider (None이면 첫 분석 시 config 기반 생성)
        """
        self.config = config
        self._provider = provider

        ai_config = config.get("ai", {}) or {}
        self.timeout = float(ai_config.get("request_timeout", DEFAULT_REQUEST_TIMEOUT))

    @property
    def provider(self) -> LLMProvider:
        """
        LLM Provider (지연 생성).

        Raises:
            ProviderError: API 키 없음, 알 수 없는 provider
        """
        if self._provider is None:
            self._provider = create_provider(self.config)
        return self._provider

    @property
    def model_name(self) -> str | None:
        model = getattr(self._provider, "model", None)
        return str(model) if model is not None else None

    async def analyze_url(self, url: str) -> UrlAnalysisResult:
        """
        URL 분석.

        Raises:
            InputValidationError: URL 형식 오류
            ActionError: 예상치 못한 서버 측 오류
        """
        target = validate_url(url).raise_for_error()
        scan_log = create_scan_log("url", target)
        provider = self._get_provider(scan_log, ACTION_URL_FAILED_MESSAGE)

        try:
            result = await asyncio.wait_for(
                analyze_url_for_phishing(provider, UrlAnalysisRequest(url=target)),
                timeout=self.timeout,
            )
        except TimeoutError:
            logger.error(f"URL analysis timed out after {self.timeout:.0f}s")
            result = UrlAnalysisResult.error(SENTINEL_DETAILS_UNAVAILABLE)
        except Exception as e:
            logger.error(f"Error analyzing URL: {e}", exc_info=True)
            self._fail(scan_log, ErrorCodes.URL_ANALYSIS_FAILED)
            raise ActionError(
                ErrorCodes.URL_ANALYSIS_FAILED,
                ACTION_URL_FAILED_MESSAGE,
            ) from e

        complete_scan_log(
            scan_log,
            success=not result.is_error,
            verdict=result.status,
            model_used=self.model_name,
            error_code=ErrorCodes.URL_ANALYSIS_FAILED if result.is_error else None,
        )
        emit_scan_log(scan_log)
        return result

    async def analyze_apk(self, apk_metadata: str) -> ApkAnalysisResult:
        """
        APK 메타데이터 분석.

        Raises:
            InputValidationError: 입력이 너무 짧음
            ActionError: 모델 호출/응답 해석 실패, 타임아웃
        """
        target = validate_apk_source(apk_metadata).raise_for_error()
        return await self._analyze_apk(
            "apk_metadata",
            target,
            analyze_apk_metadata_for_malice,
            ApkMetadataInput(apk_metadata=target),
        )

    async def analyze_apk_source(self, apk_source: str) -> ApkAnalysisResult:
        """
        APK 출처 분석.

        Raises:
            InputValidationError: 입력이 너무 짧음
            ActionError: 모델 호출/응답 해석 실패, 타임아웃
        """
        target = validate_apk_source(apk_source).raise_for_error()
        return await self._analyze_apk(
            "apk_source",
            target,
            analyze_apk_source_for_malice,
            ApkSourceInput(apk_source=target),
        )

    async def _analyze_apk(
        self,
        kind: str,
        target: str,
        flow_fn: Callable[[LLMProvider, Any], Awaitable[ApkAnalysisResult]],
        flow_input: ApkMetadataInput | ApkSourceInput,
    ) -> ApkAnalysisResult:
        scan_log = create_scan_log(kind, target)
        provider = self._get_provider(scan_log, ACTION_APK_FAILED_MESSAGE)

        try:
            result = await asyncio.wait_for(
                flow_fn(provider, flow_input),
                timeout=self.timeout,
            )
        except TimeoutError as e:
            logger.error(f"APK analysis timed out after {self.timeout:.0f}s")
            self._fail(scan_log, ErrorCodes.ANALYSIS_TIMEOUT)
            raise ActionError(ErrorCodes.ANALYSIS_TIMEOUT, ACTION_APK_FAILED_MESSAGE) from e
        except Exception as e:
            logger.error(f"Error analyzing APK metadata: {e}", exc_info=True)
            self._fail(scan_log, ErrorCodes.APK_ANALYSIS_FAILED)
            raise ActionError(
                ErrorCodes.APK_ANALYSIS_FAILED,
                ACTION_APK_FAILED_MESSAGE,
            ) from e

        complete_scan_log(
            scan_log,
            success=True,
            verdict="malicious" if result.is_malicious else "clean",
            model_used=self.model_name,
        )
        emit_scan_log(scan_log)
        return result

    def _get_provider(self, scan_log: ScanLog, message: str) -> LLMProvider:
        """Provider 조회. 생성 실패는 ActionError로 변환."""
        try:
            return self.provider
        except ProviderError as e:
            logger.error(f"Provider unavailable: [{e.code}] {e.message}")
            self._fail(scan_log, ErrorCodes.PROVIDER_UNAVAILABLE)
            raise ActionError(
                ErrorCodes.PROVIDER_UNAVAILABLE,
                message,
                provider_code=e.code,
            ) from e

    def _fail(self, scan_log: ScanLog, error_code: str) -> None:
        complete_scan_log(
            scan_log,
            success=False,
            model_used=self.model_name,
            error_code=error_code,
        )
        emit_scan_log(scan_log)
