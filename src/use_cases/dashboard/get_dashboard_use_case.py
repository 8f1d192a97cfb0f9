from datetime import datetime, timedelta, timezone

from core.domain.dashboard_snapshot import DashboardSnapshot
from core.domain.service import Service
from core.port.changelog_repository import ChangelogRepository
from core.port.service_repository import ServiceRepository


class GetDashboardUseCase:
    def __init__(
        self,
        service_repository: ServiceRepository,
        changelog_repository: ChangelogRepository,
        changelog_window_hours: int = 24,
    ) -> None:
        self.service_repository = service_repository
        self.changelog_repository = changelog_repository
        self.changelog_window_hours = changelog_window_hours

    async def execute(self) -> DashboardSnapshot:
        now = datetime.now(timezone.utc)

        services = await self.service_repository.find_all()
        services = sorted(services, key=lambda service: service.name.lower())

        since = now - timedelta(hours=self.changelog_window_hours)
        recent_changelog = await self.changelog_repository.find_since(since)

        return DashboardSnapshot(
            services=services,
            last_updated=self._last_updated(services) or now,
            recent_changelog=recent_changelog,
        )

    def _last_updated(self, services: list[Service]) -> datetime | None:
        checked = [service.last_checked_at for service in services if service.last_checked_at is not None]

        return max(checked) if checked else None
