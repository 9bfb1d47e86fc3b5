from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List

_logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    pattern = "pattern"
    override = "override"
    time_off = "time_off"


# read views that go stale when rows of a kind change
_AFFECTED_VIEWS: dict[ChangeKind, tuple[str, ...]] = {
    ChangeKind.pattern: ("worker-patterns", "team-availability"),
    ChangeKind.override: ("pending-overrides", "worker-overrides", "team-availability"),
    ChangeKind.time_off: ("pending-time-off", "worker-time-off", "team-availability"),
}


@dataclass(frozen=True)
class ChangeEvent:
    kind: ChangeKind
    worker_id: int

    @property
    def affected_views(self) -> tuple[str, ...]:
        return _AFFECTED_VIEWS[self.kind]


Listener = Callable[[ChangeEvent], None]


class ChangeFeed:
    """Fan-out of "rows of kind K for worker W changed" signals.

    Nothing is cached here; listeners decide what to recompute.
    """

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def publish(self, event: ChangeEvent) -> None:
        with self._lock:
            listeners = list(self._listeners)
        _logger.debug("change %s for worker %s -> %d listener(s)", event.kind.value, event.worker_id, len(listeners))
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                # write is already committed; listener failures are only logged
                _logger.exception("change listener failed for %s/%s", event.kind.value, event.worker_id)


change_feed = ChangeFeed()


def notify(kind: ChangeKind, worker_id: int) -> None:
    change_feed.publish(ChangeEvent(kind=kind, worker_id=worker_id))
