from use_cases.dashboard.get_dashboard_use_case import GetDashboardUseCase

__all__ = ["GetDashboardUseCase"]
