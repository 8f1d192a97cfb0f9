from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class SweepReport:
    started_at: datetime
    finished_at: Optional[datetime] = None

    checked: list[int] = field(default_factory=list)
    transitioned: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)

    listing_failed: bool = False

    @property
    def is_partial_failure(self) -> bool:
        return self.listing_failed or bool(self.failed)
