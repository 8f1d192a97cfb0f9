from abc import ABC, abstractmethod

from core.domain.probe_result import ProbeResult


class Prober(ABC):
    @abstractmethod
    async def probe(self, url: str, timeout_ms: int) -> ProbeResult:
        raise NotImplementedError
