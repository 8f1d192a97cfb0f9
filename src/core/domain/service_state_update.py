from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.changelog_entry import ChangelogEntry


@dataclass(frozen=True)
class ServiceStateUpdate:
    """Row values to persist for one check, applied only if the row is still at ``expected_version``."""

    service_id: int
    expected_version: int

    is_up: bool
    last_checked_at: datetime
    status_changed_at: Optional[datetime]
    response_time_ms: Optional[int]

    changelog_entry: Optional[ChangelogEntry] = None
