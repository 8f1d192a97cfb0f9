from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from urllib.parse import urlparse

from core.domain.service_state import ServiceState


@dataclass
class Service:
    id: Optional[int]

    name: str
    url: str

    is_up: bool = False
    last_checked_at: Optional[datetime] = None
    status_changed_at: Optional[datetime] = None
    response_time_ms: Optional[int] = None

    created_at: Optional[datetime] = None
    state_version: int = 0

    def __post_init__(self):
        parsed = urlparse(self.url)
        if not all([parsed.scheme, parsed.netloc]):
            raise ValueError(f"Invalid URL: {self.url}")

        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"URL must use http or https scheme: {self.url}")

        try:
            parsed.port
        except ValueError:
            raise ValueError(f"Invalid URL port: {self.url}")

    @property
    def state(self) -> ServiceState:
        return ServiceState.of(self.is_up, self.status_changed_at)

    def is_first_check(self) -> bool:
        return self.status_changed_at is None
