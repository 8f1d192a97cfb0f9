from contextlib import asynccontextmanager
from typing import Optional

import httpx
import structlog
from fastapi import FastAPI

from infra.adapter.asyncio_task_tracker import BackgroundTaskTracker
from infra.adapter.dict_service_locks import DictServiceLocks
from infra.adapter.local_scheduler import create_local_scheduler
from infra.adapter.postgres_changelog_repository import PostgresChangelogRepository
from infra.adapter.postgres_service_repository import PostgresServiceRepository
from infra.adapter.telegram_notifier import TelegramNotifier
from infra.config.config import Config, get_config
from infra.db.session import build_engine, build_session_factory, create_database_schema
from infra.logging.config import configure_logging
from infra.services.http_prober import HttpProber
from infra.services.retrying_prober import RetryingProber
from infra.services.sweep_service import SweepService
from infra.web.deps import AppContainer
from infra.web.middleware.request_event_log_middleware import RequestEventLogMiddleware
from infra.web.routers.service_router import router as service_router
from infra.web.routers.stats_router import router as stats_router
from infra.web.routers.status_router import router as status_router
from use_cases.service.get_all_services_use_case import GetAllServicesUseCase
from use_cases.service.reconcile_service_state_use_case import ReconcileServiceStateUseCase

logger = structlog.stdlib.get_logger(__name__)

SCHEMA_BOOTSTRAP_ENVIRONMENTS = ("loc", "dev")


def create_app(config: Optional[Config] = None) -> FastAPI:
    config = config or get_config()

    configure_logging(
        log_level=config.LOGGING_CONFIG.LEVEL,
        json_logs=config.LOGGING_CONFIG.JSON_FORMAT,
        app_name=config.APP_NAME,
        environment=config.ENVIRONMENT,
        version=config.VERSION,
        library_log_levels=config.LOGGING_CONFIG.LIBRARY_LOG_LEVELS,
    )

    engine = build_engine(config.DATABASE_CONFIG)
    session_factory = build_session_factory(engine)

    service_repository = PostgresServiceRepository(session_factory)
    changelog_repository = PostgresChangelogRepository(session_factory)

    scheduler = create_local_scheduler()
    task_tracker = BackgroundTaskTracker()

    # redirects are not followed so a 3xx answer counts as reachable on its own
    probe_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.PROBE_CONFIG.TIMEOUT_MS / 1_000),
        limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
        follow_redirects=False,
    )
    notification_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.NOTIFICATION_CONFIG.TIMEOUT_MS / 1_000),
    )

    prober = RetryingProber(
        HttpProber(probe_client, user_agent=config.PROBE_CONFIG.USER_AGENT),
        max_attempts=config.PROBE_CONFIG.MAX_ATTEMPTS,
        retry_delay_ms=config.PROBE_CONFIG.RETRY_DELAY_MS,
        backoff_multiplier=config.PROBE_CONFIG.BACKOFF_MULTIPLIER,
    )

    telegram_token = config.NOTIFICATION_CONFIG.TELEGRAM_TOKEN
    notifier = TelegramNotifier(
        http_client=notification_client,
        bot_token=telegram_token.get_secret_value() if telegram_token else None,
        chat_id=config.NOTIFICATION_CONFIG.TELEGRAM_CHAT_ID,
        api_base_url=config.NOTIFICATION_CONFIG.API_BASE_URL,
        timeout_ms=config.NOTIFICATION_CONFIG.TIMEOUT_MS,
    )

    service_locks = DictServiceLocks()

    sweep_service = SweepService(
        sweep_interval_seconds=config.SWEEP_INTERVAL_SECONDS,
        scheduler=scheduler,
        task_tracker=task_tracker,
        prober=prober,
        probe_timeout_ms=config.PROBE_CONFIG.TIMEOUT_MS,
        get_services_use_case=GetAllServicesUseCase(service_repository),
        reconcile_service_state_use_case=ReconcileServiceStateUseCase(
            service_repository=service_repository,
            service_locks=service_locks,
            notifier=notifier,
            notify_on_first_check=config.NOTIFICATION_CONFIG.NOTIFY_ON_FIRST_CHECK,
        ),
        concurrency=config.SWEEP_CONCURRENCY,
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if config.ENVIRONMENT in SCHEMA_BOOTSTRAP_ENVIRONMENTS:
            await create_database_schema(engine)

        scheduler.start()
        await sweep_service.start()

        yield

        scheduler.stop()
        await task_tracker.shutdown(config.SHUTDOWN_GRACE_SECONDS)

        await probe_client.aclose()
        await notification_client.aclose()
        await engine.dispose()

        logger.info("Application shutdown complete")

    app = FastAPI(
        title=config.APP_NAME,
        version=config.VERSION,
        root_path=config.ROOT_PATH,
        docs_url="/apidocs",
        lifespan=lifespan,
    )

    app.state.host = config.HOST
    app.state.port = config.PORT
    app.state.container = AppContainer(
        config=config,
        service_repository=service_repository,
        changelog_repository=changelog_repository,
        service_locks=service_locks,
        sweep_service=sweep_service,
    )

    app.add_middleware(RequestEventLogMiddleware, excluded_path_suffixes={"/stats/health"})

    app.include_router(stats_router)
    app.include_router(status_router)
    app.include_router(service_router)

    return app
