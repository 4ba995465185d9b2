"""
APK 악성 여부 분석 flow.

- metadata 변형: 권한/크기/출처가 담긴 메타데이터 텍스트
- source 변형: 다운로드 URL 또는 스토어 페이지

출력 {isMalicious, reason}. 실패는 FlowError/ProviderError로 전파 (action이 처리).
"""

from typing import Any

from src.app.providers.base import LLMProvider
from src.domain.constants import FLOW_ANALYZE_APK_METADATA, FLOW_ANALYZE_APK_SOURCE
from src.domain.schemas import ApkAnalysisResult, ApkMetadataInput, ApkSourceInput

from .base import define_flow

ANALYZE_APK_METADATA_PROMPT = """\
You are an expert in Android security. You will analyze the provided APK metadata \
to determine if the app is likely to be malicious. Pay close attention to the \
requested permissions and the source of the APK.

APK Metadata: {{ apk_metadata }}

Based on the metadata, determine if the APK is likely to be malicious and provide \
a reason for your determination.
"""

ANALYZE_APK_SOURCE_PROMPT = """\
You are an expert in Android security. You will assess where an APK comes from \
to determine if installing it is likely to be risky. Consider whether the source \
is an official app store, a known developer site, or an unofficial mirror, and \
look for signs of impersonation in the domain or package name.

APK Source: {{ apk_source }}

Based on the source, determine if the APK is likely to be malicious and provide \
a reason for your determination.
"""

analyze_apk_metadata_flow = define_flow(
    name=FLOW_ANALYZE_APK_METADATA,
    prompt_name="analyzeApkMetadataForMalicePrompt",
    template=ANALYZE_APK_METADATA_PROMPT,
    input_model=ApkMetadataInput,
    output_model=ApkAnalysisResult,
)

analyze_apk_source_flow = define_flow(
    name=FLOW_ANALYZE_APK_SOURCE,
    prompt_name="analyzeApkSourceForMalicePrompt",
    template=ANALYZE_APK_SOURCE_PROMPT,
    input_model=ApkSourceInput,
    output_model=ApkAnalysisResult,
)


async def analyze_apk_metadata_for_malice(
    provider: LLMProvider,
    flow_input: ApkMetadataInput | dict[str, Any],
) -> ApkAnalysisResult:
    """
    APK 메타데이터 분석.

    Raises:
        ProviderError: 모델 호출 실패
        FlowError: 응답을 {isMalicious, reason}로 해석할 수 없음
    """
    return await analyze_apk_metadata_flow(provider, flow_input)


async def analyze_apk_source_for_malice(
    provider: LLMProvider,
    flow_input: ApkSourceInput | dict[str, Any],
) -> ApkAnalysisResult:
    """
    APK 출처 분석.

    Raises:
        ProviderError: 모델 호출 실패
        FlowError: 응답을 {isMalicious, reason}로 해석할 수 없음
    """
    return await analyze_apk_source_flow(provider, flow_input)
