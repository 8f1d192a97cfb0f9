from typing import Optional

from core.port.service_locks import ServiceLocks
from core.port.service_repository import ServiceRepository


class DeleteServiceUseCase:
    def __init__(self, service_repository: ServiceRepository, service_locks: Optional[ServiceLocks] = None) -> None:
        self.service_repository = service_repository
        self.service_locks = service_locks

    async def execute(self, service_id: int) -> bool:
        deleted = await self.service_repository.delete(service_id)

        if deleted and self.service_locks is not None:
            self.service_locks.discard(service_id)

        return deleted
