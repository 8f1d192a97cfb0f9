from pathlib import Path

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from infra.services.sweep_service import SweepService
from infra.utils.formatters import format_duration, format_response_time
from infra.utils.timestamps import format_utc_timestamp
from infra.web.deps import get_dashboard_use_case, get_sweep_service
from infra.web.routers.schemas.dashboard import DashboardResponseDTO
from use_cases.dashboard.get_dashboard_use_case import GetDashboardUseCase

router = APIRouter(tags=["Status"])

DASHBOARD_REFRESH_SECONDS = 60

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
templates.env.filters["format_duration"] = format_duration
templates.env.filters["format_response_time"] = format_response_time
templates.env.filters["format_utc_timestamp"] = format_utc_timestamp


@router.get(
    "/",
    response_class=HTMLResponse,
    status_code=status.HTTP_200_OK,
    summary="Render the status dashboard",
)
async def get_dashboard_page(
    request: Request,
    use_case: GetDashboardUseCase = Depends(get_dashboard_use_case),
):
    snapshot = await use_case.execute()

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "title": "Status Page",
            "snapshot": snapshot,
            "service_names": {service.id: service.name for service in snapshot.services},
            "refresh_seconds": DASHBOARD_REFRESH_SECONDS,
        },
    )


@router.get(
    "/status",
    response_model=DashboardResponseDTO,
    status_code=status.HTTP_200_OK,
    summary="Get the dashboard snapshot",
)
async def get_status(use_case: GetDashboardUseCase = Depends(get_dashboard_use_case)) -> DashboardResponseDTO:
    snapshot = await use_case.execute()

    return DashboardResponseDTO.from_snapshot(snapshot)


@router.post(
    "/check",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Trigger a sweep of every service",
)
async def trigger_check(sweep_service: SweepService = Depends(get_sweep_service)) -> dict[str, str]:
    sweep_service.trigger_sweep(reason="manual")

    return {"status": "accepted"}
