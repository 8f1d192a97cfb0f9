from typing import Any, Callable, Optional

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.interval import IntervalTrigger

from core.port.scheduler import Scheduler

logger = structlog.stdlib.get_logger(__name__)


class LocalScheduler(Scheduler):
    def __init__(self, scheduler: BaseScheduler) -> None:
        self.scheduler = scheduler
        self._jobs: dict[str, str] = {}

    def start(self) -> None:
        self.scheduler.start()

    def stop(self) -> None:
        self.scheduler.shutdown(wait=True)

    def add_job(
        self,
        job_key: str,
        func: Callable[..., Any],
        interval_seconds: int,
        args: tuple = (),
        kwargs: Optional[dict] = None,
        job_name: Optional[str] = None,
    ) -> None:
        if job_key in self._jobs:
            self.remove_job(job_key)

        kwargs = kwargs or {}
        job_name = job_name or job_key

        # a tick that fires while the previous run is still going is skipped, not queued
        job = self.scheduler.add_job(
            func=func,
            trigger=IntervalTrigger(seconds=interval_seconds),
            args=args,
            kwargs=kwargs,
            id=job_key,
            name=job_name,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

        self._jobs[job_key] = job.id

        logger.info(f"Scheduled job '{job_name}' every {interval_seconds}s")

    def remove_job(self, job_key: str) -> bool:
        if job_key in self._jobs:
            job_id = self._jobs.pop(job_key)

            try:
                self.scheduler.remove_job(job_id)
                return True
            except Exception as e:
                logger.warning(f"Failed to remove job '{job_key}': {e}")
                return False

        return False

    def has_job(self, job_key: str) -> bool:
        return job_key in self._jobs


def create_local_scheduler() -> Scheduler:
    return LocalScheduler(AsyncIOScheduler(timezone="UTC"))
