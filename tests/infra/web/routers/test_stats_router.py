from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from fastapi import FastAPI

import infra.web.routers.stats_router as stats_router_module
from core.domain.sweep_report import SweepReport


class HealthyProcess:
    def memory_full_info(self) -> SimpleNamespace:
        return SimpleNamespace(rss=1024)

    def cpu_percent(self, interval: float = 0.1) -> float:
        return 12.5


class FailingProcess:
    def memory_full_info(self) -> SimpleNamespace:
        raise RuntimeError("process metrics unavailable")

    def cpu_percent(self, interval: float = 0.1) -> float:
        return 0.0


@pytest.fixture
def sweep_service() -> SimpleNamespace:
    return SimpleNamespace(last_report=None)


@pytest.fixture
def stats_app(sweep_service: SimpleNamespace) -> FastAPI:
    app = FastAPI()
    app.state.container = SimpleNamespace(
        config=SimpleNamespace(APP_NAME="uptime-status-page", VERSION="9.9.9"),
        sweep_service=sweep_service,
    )
    app.include_router(stats_router_module.router)
    return app


@pytest.mark.asyncio
async def test_stats_health_up_response(stats_app: FastAPI, async_client_factory, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(stats_router_module, "_current_process", HealthyProcess())

    client = await async_client_factory(stats_app)
    response = await client.get("/stats/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "UP"
    assert payload["app_name"] == "uptime-status-page"
    assert payload["version"] == "9.9.9"
    assert payload["ram"] == "1.00 KB"
    assert payload["cpu_percent"] == 12.5
    assert payload["last_sweep"] is None


@pytest.mark.asyncio
async def test_stats_health_includes_last_sweep_summary(
    stats_app: FastAPI,
    sweep_service: SimpleNamespace,
    async_client_factory,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(stats_router_module, "_current_process", HealthyProcess())
    now = datetime(2025, 12, 14, 13, 46, 14, tzinfo=timezone.utc)
    sweep_service.last_report = SweepReport(started_at=now, finished_at=now, checked=[1, 2], transitioned=[2], failed=[3])

    client = await async_client_factory(stats_app)
    response = await client.get("/stats/health")

    last_sweep = response.json()["last_sweep"]
    assert last_sweep["checked"] == 2
    assert last_sweep["transitioned"] == 1
    assert last_sweep["failed"] == 1
    assert last_sweep["listing_failed"] is False


@pytest.mark.asyncio
async def test_stats_health_degraded_response(
    stats_app: FastAPI,
    async_client_factory,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(stats_router_module, "_current_process", FailingProcess())

    client = await async_client_factory(stats_app)
    response = await client.get("/stats/health")

    assert response.status_code == 503
    payload = response.json()
    assert payload["status"] == "DEGRADED"
    assert "process metrics unavailable" in payload["error"]
