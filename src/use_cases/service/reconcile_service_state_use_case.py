from datetime import datetime, timezone
from typing import Callable

import structlog

from core.domain.probe_result import ProbeResult
from core.domain.state_transition import StateTransition, decide_transition, format_transition_message
from core.exceptions.concurrent_state_update_error import ConcurrentStateUpdateError
from core.exceptions.service_not_found_error import ServiceNotFoundError
from core.port.notifier import Notifier
from core.port.service_locks import ServiceLocks
from core.port.service_repository import ServiceRepository

logger = structlog.stdlib.get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReconcileServiceStateUseCase:
    def __init__(
        self,
        service_repository: ServiceRepository,
        service_locks: ServiceLocks,
        notifier: Notifier,
        notify_on_first_check: bool = False,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.service_repository = service_repository
        self.service_locks = service_locks
        self.notifier = notifier
        self.notify_on_first_check = notify_on_first_check
        self.clock = clock

    async def execute(self, service_id: int, probe_result: ProbeResult) -> StateTransition:
        async with self.service_locks.lock(service_id):
            service = await self.service_repository.find_by_id(service_id)

            if service is None:
                raise ServiceNotFoundError(service_id)

            transition = decide_transition(
                service,
                probe_result,
                checked_at=self.clock(),
                notify_on_first_check=self.notify_on_first_check,
            )

            applied = await self.service_repository.update_state(transition.update)

            if not applied:
                raise ConcurrentStateUpdateError(service_id, transition.update.expected_version)

        if transition.changed:
            logger.info(
                f"Service '{service.name}' transitioned "
                f"{transition.previous_state.value} -> {transition.new_state.value} "
                f"({transition.kind.value})"
            )

        if transition.should_notify:
            await self.notifier.notify(format_transition_message(service, transition.new_state))

        return transition
