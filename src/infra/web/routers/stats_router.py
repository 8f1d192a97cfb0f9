import os
import time
from datetime import datetime, timezone
from typing import Any

import psutil
from fastapi import APIRouter, Depends, Response, status

from infra.utils.formatters import format_bytes, format_time
from infra.web.deps import AppContainer, get_container

router = APIRouter(prefix="/stats", tags=["Stats"])

_start_time: float = time.time()
_current_process: psutil.Process = psutil.Process(os.getpid())


@router.get(
    "/health",
    response_model=dict[str, Any],
    status_code=status.HTTP_200_OK,
    summary="Get application health status",
)
async def get_health(response: Response, container: AppContainer = Depends(get_container)):
    try:
        uptime = format_time(time.time() - _start_time)
        memory_info = _current_process.memory_full_info()

        ram = format_bytes(memory_info.rss)
        cpu_percent = _current_process.cpu_percent(interval=0.1)

        last_sweep = None
        report = container.sweep_service.last_report
        if report is not None:
            last_sweep = {
                "started_at": report.started_at,
                "finished_at": report.finished_at,
                "checked": len(report.checked),
                "transitioned": len(report.transitioned),
                "failed": len(report.failed),
                "listing_failed": report.listing_failed,
            }

        return {
            "status": "UP",
            "uptime": uptime,
            "app_name": container.config.APP_NAME,
            "version": container.config.VERSION,
            "ram": ram,
            "cpu_percent": cpu_percent,
            "last_sweep": last_sweep,
            "timestamp": datetime.now(timezone.utc),
        }

    except Exception as e:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

        return {
            "status": "DEGRADED",
            "error": str(e),
            "timestamp": time.time(),
        }
