from core.domain.service import Service
from core.port.service_repository import ServiceRepository
from infra.web.routers.schemas.service import ServiceCreateDTO


class CreateServiceUseCase:
    def __init__(self, service_repository: ServiceRepository) -> None:
        self.service_repository = service_repository

    async def execute(self, service: ServiceCreateDTO) -> Service:
        service_entity = Service(
            id=None,
            name=service.name,
            url=service.url,
        )

        return await self.service_repository.save(service_entity)
