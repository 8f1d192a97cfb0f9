from core.domain.service import Service
from core.port.service_repository import ServiceRepository


class GetAllServicesUseCase:
    def __init__(self, service_repository: ServiceRepository):
        self.service_repository = service_repository

    async def execute(self) -> list[Service]:
        return await self.service_repository.find_all()
