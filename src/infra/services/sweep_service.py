import asyncio
from datetime import datetime, timezone
from typing import Optional

import structlog

from core.domain.service import Service
from core.domain.sweep_report import SweepReport
from core.exceptions.concurrent_state_update_error import ConcurrentStateUpdateError
from core.exceptions.service_not_found_error import ServiceNotFoundError
from core.port.prober import Prober
from core.port.scheduler import Scheduler
from infra.adapter.asyncio_task_tracker import BackgroundTaskTracker
from use_cases.service.get_all_services_use_case import GetAllServicesUseCase
from use_cases.service.reconcile_service_state_use_case import ReconcileServiceStateUseCase

logger = structlog.stdlib.get_logger(__name__)


class SweepService:
    SWEEP_JOB_KEY = "sweep_services"

    def __init__(
        self,
        sweep_interval_seconds: int,
        scheduler: Scheduler,
        task_tracker: BackgroundTaskTracker,
        prober: Prober,
        probe_timeout_ms: int,
        get_services_use_case: GetAllServicesUseCase,
        reconcile_service_state_use_case: ReconcileServiceStateUseCase,
        concurrency: int = 1,
    ):
        self.SWEEP_INTERVAL_SECONDS = sweep_interval_seconds
        self.scheduler = scheduler
        self.task_tracker = task_tracker

        self.prober = prober
        self.probe_timeout_ms = probe_timeout_ms

        self.get_services_use_case = get_services_use_case
        self.reconcile_service_state_use_case = reconcile_service_state_use_case

        self.concurrency = max(1, concurrency)
        self.last_report: Optional[SweepReport] = None

    async def start(self):
        logger.info("Sweep service started")

        self.scheduler.add_job(
            job_key=self.SWEEP_JOB_KEY,
            func=self.run_sweep,
            interval_seconds=self.SWEEP_INTERVAL_SECONDS,
            job_name="Check all tracked services",
        )

        self.trigger_sweep(reason="startup")

    def trigger_sweep(self, reason: str = "manual") -> asyncio.Task:
        logger.info(f"Sweep requested ({reason})")

        return self.task_tracker.spawn(self.run_sweep(), name=f"sweep-{reason}")

    async def run_sweep(self) -> SweepReport:
        report = SweepReport(started_at=datetime.now(timezone.utc))

        try:
            services = await self.get_services_use_case.execute()
        except Exception as e:
            logger.exception(f"Error loading services for sweep: {e}")
            report.listing_failed = True
            return self._finish(report)

        semaphore = asyncio.Semaphore(self.concurrency)

        async def check_with_limit(service: Service) -> None:
            async with semaphore:
                await self._check_service(service, report)

        await asyncio.gather(*(check_with_limit(service) for service in services))

        return self._finish(report)

    async def _check_service(self, service: Service, report: SweepReport) -> None:
        if service.id is None:
            logger.warning(f"Skipping service without ID: {service.name}")
            return

        try:
            probe_result = await self.prober.probe(service.url, self.probe_timeout_ms)
            transition = await self.reconcile_service_state_use_case.execute(service.id, probe_result)

        except ServiceNotFoundError:
            logger.info(f"Service {service.id} was removed during the sweep, skipping")
            return

        except ConcurrentStateUpdateError as e:
            logger.warning(f"Skipping '{service.name}' for this sweep: {e}")
            report.failed.append(service.id)
            return

        except Exception as e:
            logger.exception(f"Unexpected error checking '{service.name}': {e}")
            report.failed.append(service.id)
            return

        report.checked.append(service.id)

        if transition.changed:
            report.transitioned.append(service.id)

        logger.debug(
            f"Checked '{service.name}': "
            f"status_code={probe_result.status_code}, "
            f"response_time={probe_result.latency_ms}ms, "
            f"state={transition.new_state.value}"
        )

    def _finish(self, report: SweepReport) -> SweepReport:
        report.finished_at = datetime.now(timezone.utc)
        self.last_report = report

        if report.is_partial_failure:
            logger.warning(
                f"Sweep finished with failures "
                f"(checked: {len(report.checked)}, failed: {report.failed}, "
                f"listing_failed: {report.listing_failed})"
            )
        else:
            logger.info(
                f"Sweep finished "
                f"(checked: {len(report.checked)}, transitioned: {len(report.transitioned)})"
            )

        return report
