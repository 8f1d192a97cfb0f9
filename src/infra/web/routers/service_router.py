from fastapi import APIRouter, Depends, HTTPException, status

from core.domain.service import Service
from core.exceptions.service_already_exists_error import ServiceAlreadyExistsError
from infra.web.deps import (
    get_all_services_use_case,
    get_create_service_use_case,
    get_delete_service_use_case,
)
from infra.web.routers.schemas.service import ServiceCreateDTO, ServiceResponseDTO
from use_cases.service.create_service_use_case import CreateServiceUseCase
from use_cases.service.delete_service_use_case import DeleteServiceUseCase
from use_cases.service.get_all_services_use_case import GetAllServicesUseCase

router = APIRouter(prefix="/service", tags=["Service"])


@router.post(
    "",
    response_model=ServiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_service(
    payload: ServiceCreateDTO,
    use_case: CreateServiceUseCase = Depends(get_create_service_use_case),
) -> ServiceResponseDTO:
    try:
        service = await use_case.execute(payload)
    except ServiceAlreadyExistsError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Service with {e.field}='{e.value}' already exists",
        )

    return ServiceResponseDTO.model_validate(service)


@router.get(
    "",
    response_model=list[ServiceResponseDTO],
    status_code=status.HTTP_200_OK,
)
async def get_all_services(
    use_case: GetAllServicesUseCase = Depends(get_all_services_use_case),
) -> list[ServiceResponseDTO]:
    services: list[Service] = await use_case.execute()

    return [ServiceResponseDTO.model_validate(service) for service in services]


@router.delete(
    "/{service_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_service(
    service_id: int,
    use_case: DeleteServiceUseCase = Depends(get_delete_service_use_case),
) -> None:
    deleted = await use_case.execute(service_id)

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
