from datetime import datetime

from pydantic import Field

from core.domain.dashboard_snapshot import DashboardSnapshot
from infra.web.routers.schemas import CamelModel
from infra.web.routers.schemas.service import ServiceResponseDTO


class ChangelogEntryResponseDTO(CamelModel):
    service_id: int
    previous_status: bool
    new_status: bool
    changed_at: datetime


class DashboardResponseDTO(CamelModel):
    services: list[ServiceResponseDTO] = Field(default_factory=list)
    last_updated: datetime
    recent_changelog: list[ChangelogEntryResponseDTO] = Field(default_factory=list)
    all_operational: bool

    @classmethod
    def from_snapshot(cls, snapshot: DashboardSnapshot) -> "DashboardResponseDTO":
        return cls(
            services=[ServiceResponseDTO.model_validate(service) for service in snapshot.services],
            last_updated=snapshot.last_updated,
            recent_changelog=[ChangelogEntryResponseDTO.model_validate(entry) for entry in snapshot.recent_changelog],
            all_operational=snapshot.all_operational,
        )
