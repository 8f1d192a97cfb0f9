from datetime import datetime
from typing import Optional
from urllib.parse import urlparse

from pydantic import Field, computed_field, field_validator

from core.domain.service_state import ServiceState
from infra.web.routers.schemas import CamelModel


class ServiceCreateDTO(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    url: str = Field(max_length=2048)

    @field_validator("name", mode="after")
    @classmethod
    def is_name_valid(cls, name: str):
        name = name.strip()
        if not name:
            raise ValueError("Service name cannot be blank")

        return name

    @field_validator("url", mode="after")
    @classmethod
    def is_url_valid(cls, url: str):
        parsed = urlparse(url)
        if not all([parsed.scheme, parsed.netloc]):
            raise ValueError(f"Invalid URL: {url}")

        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"URL must use http or https scheme: {url}")

        try:
            parsed.port
        except ValueError:
            raise ValueError(f"Invalid URL port: {url}")

        return url


class ServiceResponseDTO(CamelModel):
    id: int
    name: str
    url: str
    is_up: bool
    last_checked_at: Optional[datetime] = None
    status_changed_at: Optional[datetime] = None
    response_time_ms: Optional[int] = None
    created_at: Optional[datetime] = None

    @computed_field
    @property
    def state(self) -> ServiceState:
        return ServiceState.of(self.is_up, self.status_changed_at)
