from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from core.domain.changelog_entry import ChangelogEntry
from core.domain.probe_result import ProbeResult
from core.domain.service import Service
from core.domain.service_state import ServiceState
from core.domain.service_state_update import ServiceStateUpdate


class TransitionKind(str, Enum):
    BASELINE = "BASELINE"
    UNCHANGED = "UNCHANGED"
    WENT_DOWN = "WENT_DOWN"
    WENT_UP = "WENT_UP"


@dataclass(frozen=True)
class StateTransition:
    kind: TransitionKind
    previous_state: ServiceState
    new_state: ServiceState
    update: ServiceStateUpdate
    should_notify: bool

    @property
    def changed(self) -> bool:
        return self.kind is not TransitionKind.UNCHANGED

    @property
    def is_flip(self) -> bool:
        return self.kind in (TransitionKind.WENT_DOWN, TransitionKind.WENT_UP)


def decide_transition(
    service: Service,
    probe_result: ProbeResult,
    checked_at: datetime,
    notify_on_first_check: bool = False,
) -> StateTransition:
    """Decide what one check of ``service`` writes back to the store.

    The first observation of a service (``status_changed_at`` never set) only
    establishes the baseline: it stamps ``status_changed_at`` but records no
    changelog entry, and notifies only when ``notify_on_first_check`` is set.
    After that, ``status_changed_at`` moves and a changelog entry is written
    exactly when ``is_up`` flips.
    """
    if service.id is None:
        raise ValueError("Cannot reconcile a service that has not been persisted")

    previous_state = service.state
    new_state = ServiceState.from_reachable(probe_result.reachable)

    if service.last_checked_at is not None and service.last_checked_at > checked_at:
        checked_at = service.last_checked_at

    if service.is_first_check():
        kind = TransitionKind.BASELINE
    elif service.is_up == probe_result.reachable:
        kind = TransitionKind.UNCHANGED
    elif probe_result.reachable:
        kind = TransitionKind.WENT_UP
    else:
        kind = TransitionKind.WENT_DOWN

    changelog_entry = None
    if kind in (TransitionKind.WENT_DOWN, TransitionKind.WENT_UP):
        changelog_entry = ChangelogEntry(
            service_id=service.id,
            previous_status=service.is_up,
            new_status=probe_result.reachable,
            changed_at=checked_at,
        )

    update = ServiceStateUpdate(
        service_id=service.id,
        expected_version=service.state_version,
        is_up=probe_result.reachable,
        last_checked_at=checked_at,
        status_changed_at=service.status_changed_at if kind is TransitionKind.UNCHANGED else checked_at,
        response_time_ms=probe_result.latency_ms,
        changelog_entry=changelog_entry,
    )

    should_notify = changelog_entry is not None or (kind is TransitionKind.BASELINE and notify_on_first_check)

    return StateTransition(
        kind=kind,
        previous_state=previous_state,
        new_state=new_state,
        update=update,
        should_notify=should_notify,
    )


def format_transition_message(service: Service, new_state: ServiceState) -> str:
    return f'Service "{service.name}" is now {new_state.value}.\nURL: {service.url}'
