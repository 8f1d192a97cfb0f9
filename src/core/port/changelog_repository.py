from abc import ABC, abstractmethod
from datetime import datetime

from core.domain.changelog_entry import ChangelogEntry


class ChangelogRepository(ABC):
    @abstractmethod
    async def find_since(self, since: datetime) -> list[ChangelogEntry]:
        raise NotImplementedError
