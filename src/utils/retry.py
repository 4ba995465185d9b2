"""
재시도 유틸리티.

Provider 호출 실패 시 지수 백오프 재시도.
ai.llm.max_retries 기본값 0 → 재시도 없이 1회 호출.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """
    재시도 정책.

    Usage:
        policy = RetryPolicy.from_config(config["ai"]["llm"], retry_on=(ConnectionError,))
        result = await retry_with_exponential_backoff(call, policy)
    """
    max_retries: int = 0
    initial_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    retry_on: tuple[type[Exception], ...] = (Exception,)

    @classmethod
    def from_config(
        cls,
        llm_config: dict[str, Any] | None,
        retry_on: tuple[type[Exception], ...] = (Exception,),
    ) -> "RetryPolicy":
        """default.yaml의 ai.llm 섹션에서 생성 (max_retries, retry_initial_delay, retry_max_delay)."""
        llm_config = llm_config or {}
        return cls(
            max_retries=max(int(llm_config.get("max_retries", 0)), 0),
            initial_delay=float(llm_config.get("retry_initial_delay", 1.0)),
            max_delay=float(llm_config.get("retry_max_delay", 30.0)),
            retry_on=retry_on,
        )

    @property
    def enabled(self) -> bool:
        return self.max_retries > 0

    def delays(self) -> Iterator[float]:
        """재시도 전 대기 시간 (max_retries개, max_delay로 상한)."""
        delay = self.initial_delay
        for _ in range(self.max_retries):
            yield min(delay, self.max_delay)
            delay *= self.exponential_base


async def retry_with_exponential_backoff(
    func: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
) -> T:
    """
    정책에 따라 func 재시도.

    Args:
        func: 인자 없는 비동기 호출
        policy: 재시도 정책

    Returns:
        func의 반환값

    Raises:
        마지막 시도의 예외, 또는 retry_on에 없는 예외 (즉시)
    """
    attempts = policy.max_retries + 1

    for attempt, delay in enumerate([*policy.delays(), None], start=1):
        try:
            result = await func()
        except policy.retry_on as e:
            if delay is None:
                logger.error(f"All {attempts} attempts failed. Last error: {e}")
                raise
            logger.warning(
                f"Attempt {attempt}/{attempts} failed: {e}. Retrying in {delay:.1f}s..."
            )
            await asyncio.sleep(delay)
            continue

        if attempt > 1:
            logger.info(f"Retry succeeded on attempt {attempt}/{attempts}")
        return result

    # 마지막 항목(None)에서 반드시 return 또는 raise
    raise RuntimeError("Unexpected retry loop exit")
