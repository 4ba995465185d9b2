"""
Flow: 프롬프트 템플릿 + 입출력 스키마 묶음.

역할:
- 입력 스키마 검증 → 프롬프트 렌더링 (Jinja2)
- JSON 출력 flow는 출력 스키마 지시문을 프롬프트 끝에 덧붙임
- provider 호출 → 응답 텍스트에서 JSON 추출 (best-effort)

판정 해석/실패 정책은 각 flow 모듈이 결정한다.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

from jinja2 import Environment, StrictUndefined
from pydantic import BaseModel, ValidationError

from src.app.providers.base import CompletionResult, LLMProvider
from src.domain.errors import ErrorCodes, FlowError

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)

OutputFormat = Literal["json", "text"]

SCHEMA_INSTRUCTION = (
    "\n\nOutput should be in JSON format and conform to the following schema:\n\n"
    "```\n{schema}\n```\n"
)

_prompt_env = Environment(
    undefined=StrictUndefined,
    autoescape=False,
    keep_trailing_newline=True,
)


# =============================================================================
# JSON 추출
# =============================================================================


def extract_json(text: str) -> Any:
    """
    모델 응답 텍스트에서 JSON 값 추출.

    - ```json ... ``` 블록
    - 순수 JSON
    - 앞뒤 설명이 붙은 경우 첫 '{' ~ 마지막 '}'

    Raises:
        ValueError: JSON을 찾을 수 없거나 파싱 실패 (JSONDecodeError 포함)
    """
    stripped = text.strip()

    if "```json" in stripped:
        start = stripped.find("```json") + 7
        end = stripped.find("```", start)
        json_str = stripped[start:end if end != -1 else None].strip()
    elif stripped.startswith("```"):
        start = stripped.find("\n") + 1
        end = stripped.rfind("```")
        json_str = stripped[start:end].strip()
    elif stripped.startswith(("{", "[")):
        json_str = stripped
    elif "{" in stripped:
        start = stripped.find("{")
        end = stripped.rfind("}") + 1
        json_str = stripped[start:end]
    else:
        raise ValueError("No JSON found in response")

    return json.loads(json_str)


# =============================================================================
# Flow
# =============================================================================


@dataclass
class FlowResponse:
    """
    Flow 원시 응답.

    output: JSON 파싱 성공 시 dict/list, 실패 시 원문 문자열
    """
    output: Any
    completion: CompletionResult

    @property
    def parsed(self) -> bool:
        return not isinstance(self.output, str)


class Flow(Generic[InputT, OutputT]):
    """
    이름 붙은 프롬프트 + 스키마 쌍.

    Usage:
        flow = define_flow(
            name="analyzeUrlForPhishingFlow",
            prompt_name="analyzeUrlPrompt",
            template="... {{ url }} ...",
            input_model=UrlAnalysisRequest,
            output_model=UrlAnalysisResult,
        )
        result = await flow(provider, {"url": "https://example.com"})
    """

    def __init__(
        self,
        name: str,
        prompt_name: str,
        template: str,
        input_model: type[InputT],
        output_model: type[OutputT],
        output_format: OutputFormat = "json",
        safety_settings: list[dict[str, str]] | None = None,
        version: str = "1.0.0",
    ):
        self.name = name
        self.prompt_name = prompt_name
        self.template_source = template
        self.input_model = input_model
        self.output_model = output_model
        self.output_format = output_format
        self.safety_settings = safety_settings or []
        self.version = version
        self._template = _prompt_env.from_string(template)

    def coerce_input(self, flow_input: InputT | dict[str, Any]) -> InputT:
        """dict 입력도 입력 스키마로 검증."""
        if isinstance(flow_input, self.input_model):
            return flow_input
        return self.input_model.model_validate(flow_input)

    def render_prompt(self, flow_input: InputT | dict[str, Any]) -> str:
        """프롬프트 렌더링 (+ JSON 출력이면 스키마 지시문)."""
        validated = self.coerce_input(flow_input)
        prompt = self._template.render(**validated.model_dump())

        if self.output_format == "json":
            schema = json.dumps(
                self.output_model.model_json_schema(by_alias=True), indent=2
            )
            prompt += SCHEMA_INSTRUCTION.format(schema=schema)

        return prompt

    async def generate(
        self,
        provider: LLMProvider,
        flow_input: InputT | dict[str, Any],
    ) -> FlowResponse:
        """
        모델 호출 후 원시 응답 반환.

        Provider 에러는 그대로 전파.
        """
        prompt = self.render_prompt(flow_input)
        completion = await provider.generate(
            prompt,
            json_output=self.output_format == "json",
            safety_settings=self.safety_settings or None,
        )

        if self.output_format != "json":
            return FlowResponse(output=completion.text, completion=completion)

        try:
            output = extract_json(completion.text)
        except ValueError as e:
            logger.warning(f"[{self.name}] model output is not JSON: {e}")
            output = completion.text

        return FlowResponse(output=output, completion=completion)

    def validate_output(self, output: Any) -> OutputT:
        """
        원시 출력 → 출력 스키마.

        Raises:
            FlowError: 문자열 출력(파싱 실패) 또는 스키마 불일치
        """
        if isinstance(output, str):
            raise FlowError(ErrorCodes.OUTPUT_PARSE_FAILED, flow=self.name)
        try:
            return self.output_model.model_validate(output)
        except ValidationError as e:
            raise FlowError(
                ErrorCodes.OUTPUT_SCHEMA_MISMATCH,
                flow=self.name,
                errors=e.error_count(),
            ) from e

    async def __call__(
        self,
        provider: LLMProvider,
        flow_input: InputT | dict[str, Any],
    ) -> OutputT:
        response = await self.generate(provider, flow_input)
        return self.validate_output(response.output)


# =============================================================================
# Flow Registry
# =============================================================================

_FLOWS: dict[str, Flow[Any, Any]] = {}


def define_flow(
    name: str,
    prompt_name: str,
    template: str,
    input_model: type[InputT],
    output_model: type[OutputT],
    output_format: OutputFormat = "json",
    safety_settings: list[dict[str, str]] | None = None,
    version: str = "1.0.0",
) -> Flow[InputT, OutputT]:
    """Flow 생성 + 레지스트리 등록 (같은 이름은 덮어씀)."""
    flow = Flow(
        name=name,
        prompt_name=prompt_name,
        template=template,
        input_model=input_model,
        output_model=output_model,
        output_format=output_format,
        safety_settings=safety_settings,
        version=version,
    )
    _FLOWS[name] = flow
    return flow


def get_flow(name: str) -> Flow[Any, Any]:
    """
    등록된 flow 조회.

    Raises:
        FlowError: 등록되지 않은 이름
    """
    try:
        return _FLOWS[name]
    except KeyError as e:
        raise FlowError(ErrorCodes.FLOW_NOT_FOUND, flow=name) from e


def list_flows() -> list[dict[str, Any]]:
    """등록된 flow 요약 목록 (이름순)."""
    return [
        {
            "name": flow.name,
            "prompt": flow.prompt_name,
            "version": flow.version,
            "output_format": flow.output_format,
            "input_schema": flow.input_model.__name__,
            "output_schema": flow.output_model.__name__,
        }
        for flow in sorted(_FLOWS.values(), key=lambda f: f.name)
    ]
