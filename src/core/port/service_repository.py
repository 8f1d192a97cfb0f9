from abc import ABC, abstractmethod
from typing import Optional

from core.domain.service import Service
from core.domain.service_state_update import ServiceStateUpdate


class ServiceRepository(ABC):
    @abstractmethod
    async def save(self, service: Service) -> Service:
        raise NotImplementedError

    @abstractmethod
    async def find_all(self) -> list[Service]:
        raise NotImplementedError

    @abstractmethod
    async def find_by_id(self, service_id: int) -> Optional[Service]:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, service_id: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def update_state(self, state_update: ServiceStateUpdate) -> bool:
        """Persist ``state_update`` and its changelog entry in one transaction.

        Returns ``False`` without writing anything when the row is no longer at
        ``state_update.expected_version``.
        """
        raise NotImplementedError
