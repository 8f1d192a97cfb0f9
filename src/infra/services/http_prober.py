import asyncio
from time import perf_counter

import httpx
import structlog

from core.domain.probe_result import ProbeResult
from core.port.prober import Prober

logger = structlog.stdlib.get_logger(__name__)

DEFAULT_USER_AGENT = "StatusPage-HealthCheck/1.0"


class HttpProber(Prober):
    """Single GET probe classifying reachability by status code.

    Any status in [200, 400) is reachable. Redirects are not followed, so a
    3xx answer counts as up. The body is never read: the response is streamed
    and closed as soon as the status line and headers arrive.
    """

    def __init__(self, http_client: httpx.AsyncClient, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self.http_client = http_client
        self.user_agent = user_agent

    async def probe(self, url: str, timeout_ms: int) -> ProbeResult:
        timeout_seconds = timeout_ms / 1_000
        started_at = perf_counter()

        try:
            async with asyncio.timeout(timeout_seconds):
                async with self.http_client.stream(
                    "GET",
                    url,
                    headers={"User-Agent": self.user_agent},
                    timeout=timeout_seconds,
                    follow_redirects=False,
                ) as response:
                    latency_ms = round((perf_counter() - started_at) * 1_000)
                    status_code = response.status_code

        except (httpx.TimeoutException, TimeoutError):
            logger.warning(f"Probe timeout for {url} (timeout: {timeout_ms}ms)")
            return ProbeResult.unreachable("Request timeout")

        except httpx.RequestError as e:
            logger.warning(f"Probe failed for {url}: {e.__class__.__name__}: {e}")
            return ProbeResult.unreachable(str(e) or e.__class__.__name__)

        reachable = 200 <= status_code < 400

        logger.debug(f"Probe {url}: status_code={status_code}, response_time={latency_ms}ms, reachable={reachable}")

        return ProbeResult(reachable=reachable, latency_ms=latency_ms, status_code=status_code)
