"""
URL 피싱 분석 flow.

입력 {url} → 출력 {status, confidence, threats[], details}

실패 정책:
- 예외를 던지지 않는다
- 전송/모델 오류 → "Unable to analyze ..." sentinel
- 파싱 불가 응답 → "Failed to parse ..." sentinel
"""

import logging
from typing import Any

from src.app.providers.base import LLMProvider
from src.domain.constants import (
    FLOW_ANALYZE_URL,
    SENTINEL_DETAILS_PARSE_FAILED,
    SENTINEL_DETAILS_UNAVAILABLE,
)
from src.domain.schemas import UrlAnalysisRequest, UrlAnalysisResult

from .base import define_flow

logger = logging.getLogger(__name__)

ANALYZE_URL_PROMPT = """\
You are an AI security analyzer for the "Guardian Eye" application. \
Your task is to analyze any given URL and return the result in **strict JSON format** only.

Output JSON must follow this structure:

{
  "status": "safe | unsafe | suspicious | error",
  "confidence": "0% to 100%",
  "threats": ["malware", "phishing", "spam", "none"],
  "details": "Short explanation of why this result was given."
}

Rules:
- Never write extra text, only output JSON.
- If URL cannot be analyzed, return:
  {
    "status": "error",
    "confidence": "0%",
    "threats": [],
    "details": "Unable to analyze due to server or scanning issue."
  }

URL to analyze: {{ url }}
"""

URL_SAFETY_SETTINGS = [
    {
        "category": "HARM_CATEGORY_DANGEROUS_CONTENT",
        "threshold": "BLOCK_NONE",
    },
]

analyze_url_flow = define_flow(
    name=FLOW_ANALYZE_URL,
    prompt_name="analyzeUrlPrompt",
    template=ANALYZE_URL_PROMPT,
    input_model=UrlAnalysisRequest,
    output_model=UrlAnalysisResult,
    output_format="json",
    safety_settings=URL_SAFETY_SETTINGS,
)


async def analyze_url_for_phishing(
    provider: LLMProvider,
    flow_input: UrlAnalysisRequest | dict[str, Any],
) -> UrlAnalysisResult:
    """
    URL 피싱 분석.

    Args:
        provider: LLM Provider
        flow_input: {url}

    Returns:
        UrlAnalysisResult (실패 시 status=error sentinel)
    """
    try:
        response = await analyze_url_flow.generate(provider, flow_input)
    except Exception as e:
        logger.error(f"Error analyzing URL: {e}", exc_info=True)
        return UrlAnalysisResult.error(SENTINEL_DETAILS_UNAVAILABLE)

    output = response.output
    if not isinstance(output, dict):
        logger.error("Error parsing JSON output from model: not a JSON object")
        return UrlAnalysisResult.error(SENTINEL_DETAILS_PARSE_FAILED)

    try:
        return UrlAnalysisResult.from_model_output(output)
    except ValueError as e:
        logger.error(f"Error parsing JSON output from model: {e}")
        return UrlAnalysisResult.error(SENTINEL_DETAILS_PARSE_FAILED)
