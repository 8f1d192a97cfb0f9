from datetime import datetime, timedelta, timezone

import pytest

from core.domain.changelog_entry import ChangelogEntry
from core.domain.service import Service
from tests.support.fakes import FakeChangelogRepository, FakeServiceRepository
from use_cases.dashboard.get_dashboard_use_case import GetDashboardUseCase


@pytest.mark.asyncio
async def test_dashboard_sorts_services_and_uses_newest_check() -> None:
    now = datetime.now(timezone.utc)
    repository = FakeServiceRepository(
        [
            Service(id=1, name="website", url="https://example.com", is_up=True, last_checked_at=now - timedelta(minutes=2), status_changed_at=now),
            Service(id=2, name="API", url="https://api.example.com", is_up=False, last_checked_at=now - timedelta(minutes=1), status_changed_at=now),
            Service(id=3, name="docs", url="https://docs.example.com"),
        ]
    )

    snapshot = await GetDashboardUseCase(repository, FakeChangelogRepository()).execute()

    assert [service.name for service in snapshot.services] == ["API", "docs", "website"]
    assert snapshot.last_updated == now - timedelta(minutes=1)
    assert snapshot.all_operational is False


@pytest.mark.asyncio
async def test_dashboard_without_checks_uses_current_time() -> None:
    before = datetime.now(timezone.utc)

    snapshot = await GetDashboardUseCase(FakeServiceRepository(), FakeChangelogRepository()).execute()

    assert snapshot.services == []
    assert snapshot.last_updated >= before
    assert snapshot.all_operational is True


@pytest.mark.asyncio
async def test_dashboard_changelog_window() -> None:
    now = datetime.now(timezone.utc)
    recent = ChangelogEntry(service_id=1, previous_status=True, new_status=False, changed_at=now - timedelta(hours=1))
    stale = ChangelogEntry(service_id=1, previous_status=False, new_status=True, changed_at=now - timedelta(hours=30))
    changelog_repository = FakeChangelogRepository(entries=[stale, recent])

    snapshot = await GetDashboardUseCase(FakeServiceRepository(), changelog_repository, changelog_window_hours=24).execute()

    assert snapshot.recent_changelog == [recent]
    assert timedelta(hours=23, minutes=59) < now - changelog_repository.since_calls[0] <= timedelta(hours=24)
