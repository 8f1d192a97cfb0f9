from dataclasses import dataclass, field
from datetime import datetime

from core.domain.changelog_entry import ChangelogEntry
from core.domain.service import Service


@dataclass
class DashboardSnapshot:
    services: list[Service]
    last_updated: datetime
    recent_changelog: list[ChangelogEntry] = field(default_factory=list)

    @property
    def all_operational(self) -> bool:
        return all(service.is_up for service in self.services)
