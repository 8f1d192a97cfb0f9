from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ProbeResult:
    reachable: bool
    latency_ms: Optional[int] = None
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def transport_failed(self) -> bool:
        """True when no HTTP response was received at all."""
        return self.status_code is None and not self.reachable

    @classmethod
    def unreachable(cls, error: str) -> "ProbeResult":
        return cls(reachable=False, latency_ms=None, status_code=None, error=error)
