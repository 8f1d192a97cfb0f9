from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ChangelogEntry:
    service_id: int

    previous_status: bool
    new_status: bool

    changed_at: datetime

    id: Optional[int] = None
