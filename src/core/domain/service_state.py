from datetime import datetime
from enum import Enum
from typing import Optional


class ServiceState(str, Enum):
    UNKNOWN = "UNKNOWN"
    UP = "UP"
    DOWN = "DOWN"

    @classmethod
    def of(cls, is_up: bool, status_changed_at: Optional[datetime]) -> "ServiceState":
        if status_changed_at is None:
            return cls.UNKNOWN

        return cls.UP if is_up else cls.DOWN

    @classmethod
    def from_reachable(cls, reachable: bool) -> "ServiceState":
        return cls.UP if reachable else cls.DOWN
