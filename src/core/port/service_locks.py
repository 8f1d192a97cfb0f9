from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class ServiceLocks(ABC):
    @abstractmethod
    def lock(self, service_id: int) -> AbstractAsyncContextManager[None]:
        raise NotImplementedError

    @abstractmethod
    def discard(self, service_id: int) -> None:
        raise NotImplementedError
