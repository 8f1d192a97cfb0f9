from use_cases.service.create_service_use_case import CreateServiceUseCase
from use_cases.service.delete_service_use_case import DeleteServiceUseCase
from use_cases.service.get_all_services_use_case import GetAllServicesUseCase
from use_cases.service.reconcile_service_state_use_case import ReconcileServiceStateUseCase

__all__ = [
    "CreateServiceUseCase",
    "DeleteServiceUseCase",
    "GetAllServicesUseCase",
    "ReconcileServiceStateUseCase",
]
