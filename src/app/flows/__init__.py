"""
Model Flows.

Flow = 프롬프트 템플릿 + 입출력 스키마.
import 시점에 모든 flow가 레지스트리에 등록된다.
"""

from .apk_malice import (
    analyze_apk_metadata_flow,
    analyze_apk_metadata_for_malice,
    analyze_apk_source_flow,
    analyze_apk_source_for_malice,
)
from .base import Flow, FlowResponse, define_flow, extract_json, get_flow, list_flows
from .url_phishing import analyze_url_flow, analyze_url_for_phishing

__all__ = [
    "Flow",
    "FlowResponse",
    "define_flow",
    "get_flow",
    "list_flows",
    "extract_json",
    "analyze_url_flow",
    "analyze_url_for_phishing",
    "analyze_apk_metadata_flow",
    "analyze_apk_metadata_for_malice",
    "analyze_apk_source_flow",
    "analyze_apk_source_for_malice",
]
