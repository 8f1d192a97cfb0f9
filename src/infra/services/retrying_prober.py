import asyncio
from typing import Awaitable, Callable

import structlog

from core.domain.probe_result import ProbeResult
from core.port.prober import Prober

logger = structlog.stdlib.get_logger(__name__)


class RetryingProber(Prober):
    """Retries a prober while attempts fail at the transport level.

    Any HTTP answer, including 4xx/5xx, is returned straight away. The delay
    before retry ``n`` is ``retry_delay_ms * backoff_multiplier ** (n - 1)``;
    with the default multiplier of 1.0 the delay is flat.
    """

    def __init__(
        self,
        prober: Prober,
        max_attempts: int = 3,
        retry_delay_ms: int = 1_000,
        backoff_multiplier: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.prober = prober
        self.max_attempts = max(1, max_attempts)
        self.retry_delay_ms = retry_delay_ms
        self.backoff_multiplier = backoff_multiplier
        self._sleep = sleep

    def delay_before_retry_ms(self, attempt: int) -> float:
        return self.retry_delay_ms * self.backoff_multiplier ** (attempt - 1)

    async def probe(self, url: str, timeout_ms: int) -> ProbeResult:
        attempt = 1

        while True:
            result = await self.prober.probe(url, timeout_ms)

            if not result.transport_failed or attempt >= self.max_attempts:
                break

            delay_ms = self.delay_before_retry_ms(attempt)
            logger.info(f"Retrying probe for {url} in {delay_ms:.0f}ms (attempt {attempt}/{self.max_attempts} failed)")

            await self._sleep(delay_ms / 1_000)
            attempt += 1

        if result.transport_failed:
            logger.warning(f"Probe for {url} failed after {attempt} attempt(s): {result.error}")

        return result
