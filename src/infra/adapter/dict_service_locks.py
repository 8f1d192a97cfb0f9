import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from core.port.service_locks import ServiceLocks


class DictServiceLocks(ServiceLocks):
    def __init__(self) -> None:
        self._locks: dict[int, asyncio.Lock] = {}

    @asynccontextmanager
    async def lock(self, service_id: int) -> AsyncIterator[None]:
        service_lock = self._locks.setdefault(service_id, asyncio.Lock())

        async with service_lock:
            yield

    def discard(self, service_id: int) -> None:
        service_lock = self._locks.get(service_id)

        # a held lock stays until its holder finishes
        if service_lock is not None and not service_lock.locked():
            del self._locks[service_id]

    def is_locked(self, service_id: int) -> bool:
        service_lock = self._locks.get(service_id)

        return service_lock is not None and service_lock.locked()
