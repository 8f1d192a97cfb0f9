from dataclasses import dataclass

from fastapi import Depends, Request

from core.port.changelog_repository import ChangelogRepository
from core.port.service_locks import ServiceLocks
from core.port.service_repository import ServiceRepository
from infra.config.config import Config
from infra.services.sweep_service import SweepService
from use_cases.dashboard.get_dashboard_use_case import GetDashboardUseCase
from use_cases.service.create_service_use_case import CreateServiceUseCase
from use_cases.service.delete_service_use_case import DeleteServiceUseCase
from use_cases.service.get_all_services_use_case import GetAllServicesUseCase


@dataclass
class AppContainer:
    config: Config
    service_repository: ServiceRepository
    changelog_repository: ChangelogRepository
    service_locks: ServiceLocks
    sweep_service: SweepService


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def get_sweep_service(container: AppContainer = Depends(get_container)) -> SweepService:
    return container.sweep_service


def get_dashboard_use_case(container: AppContainer = Depends(get_container)) -> GetDashboardUseCase:
    return GetDashboardUseCase(
        service_repository=container.service_repository,
        changelog_repository=container.changelog_repository,
        changelog_window_hours=container.config.CHANGELOG_WINDOW_HOURS,
    )


def get_create_service_use_case(container: AppContainer = Depends(get_container)) -> CreateServiceUseCase:
    return CreateServiceUseCase(container.service_repository)


def get_all_services_use_case(container: AppContainer = Depends(get_container)) -> GetAllServicesUseCase:
    return GetAllServicesUseCase(container.service_repository)


def get_delete_service_use_case(container: AppContainer = Depends(get_container)) -> DeleteServiceUseCase:
    return DeleteServiceUseCase(container.service_repository, container.service_locks)
