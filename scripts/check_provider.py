#!/usr/bin/env python
"""
LLM Provider 연결 점검 스크립트.

default.yaml의 provider 설정으로 간단한 요청을 보내고,
선택적으로 URL 분석 flow를 한 번 실행한다.

실행:
    python scripts/check_provider.py
    python scripts/check_provider.py --provider anthropic
    python scripts/check_provider.py --url https://example.com
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# 프로젝트 루트를 path에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv  # noqa: E402

from src.app.flows import analyze_url_for_phishing  # noqa: E402
from src.app.main import load_config  # noqa: E402
from src.app.providers import ProviderError, create_provider  # noqa: E402
from src.core.logging import configure_logging  # noqa: E402
from src.domain.schemas import UrlAnalysisRequest  # noqa: E402

logger = logging.getLogger("check_provider")

PING_PROMPT = 'Reply with the single word "pong".'


async def check_connection(config: dict, url: str | None) -> bool:
    """
    Provider 연결 점검.

    Returns:
        성공 여부
    """
    try:
        provider = create_provider(config)
    except ProviderError as e:
        logger.error(f"Provider 생성 실패: [{e.code}] {e.message}")
        return False

    logger.info(f"Provider: {provider.name}")

    try:
        result = await provider.generate(PING_PROMPT)
    except ProviderError as e:
        logger.error(f"연결 실패: [{e.code}] {e.message}")
        return False

    logger.info(f"응답 ({result.model_used}): {(result.text or '').strip()[:80]}")
    if result.fallback_triggered:
        logger.warning(f"fallback 모델 사용: {result.model_requested} → {result.model_used}")

    if url:
        analysis = await analyze_url_for_phishing(provider, UrlAnalysisRequest(url=url))
        logger.info(f"URL 분석 결과: {analysis.to_wire()}")
        if analysis.is_error:
            return False

    return True


def main() -> int:
    parser = argparse.ArgumentParser(
        description="LLM Provider 연결 점검",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        type=str,
        help="설정 파일 경로 (기본: default.yaml)",
    )
    parser.add_argument(
        "--provider",
        choices=["gemini", "anthropic"],
        help="설정의 ai.provider 대신 사용할 provider",
    )
    parser.add_argument(
        "--model",
        type=str,
        help="설정의 ai.llm.model 대신 사용할 모델",
    )
    parser.add_argument(
        "--url",
        type=str,
        help="연결 확인 후 URL 분석 flow 실행",
    )

    args = parser.parse_args()

    config_path = Path(args.config) if args.config else None
    if config_path is not None and not config_path.is_file():
        logging.basicConfig(level=logging.INFO)
        logger.error(f"설정 파일을 찾을 수 없습니다: {config_path}")
        return 1

    load_dotenv()
    config = load_config(config_path)
    configure_logging(config)

    ai_config = config.setdefault("ai", {})
    if args.provider:
        ai_config["provider"] = args.provider
        # 다른 provider의 모델 이름은 그대로 쓸 수 없음
        ai_config.setdefault("llm", {}).pop("model", None)
    if args.model:
        ai_config.setdefault("llm", {})["model"] = args.model

    ok = asyncio.run(check_connection(config, args.url))
    if ok:
        logger.info("연결 점검 통과")
        return 0

    logger.error("연결 점검 실패. .env의 API 키를 확인하세요.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
