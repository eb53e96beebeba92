"""In-process change notification bus.

Writers publish the record type they touched after committing; subscribers
receive a no-argument callback. Delivery order across record types is not
guaranteed and a subscriber may be notified more than once for one write.
"""
from __future__ import annotations

import logging
import threading
from collections import defaultdict
from collections.abc import Callable

from app.dealerscope.core.logging import log_json

logger = logging.getLogger("dealerscope.realtime")

KPI_DEFINITIONS = "kpi_definitions"
SCORECARD_ENTRIES = "scorecard_entries"
ROCKS = "rocks"
TODOS = "todos"

RECORD_TYPES = (KPI_DEFINITIONS, SCORECARD_ENTRIES, ROCKS, TODOS)


class ChangeBus:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscribers: dict[str, list[Callable[[], None]]] = defaultdict(list)

    def subscribe(self, record_type: str, on_change: Callable[[], None]) -> Callable[[], None]:
        with self._lock:
            self._subscribers[record_type].append(on_change)

        def unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(record_type, [])
                if on_change in callbacks:
                    callbacks.remove(on_change)

        return unsubscribe

    def publish(self, record_type: str) -> int:
        with self._lock:
            callbacks = list(self._subscribers.get(record_type, []))
        delivered = 0
        for callback in callbacks:
            try:
                callback()
            except Exception as exc:
                log_json(
                    logger,
                    {
                        "event": "realtime_delivery_failed",
                        "record_type": record_type,
                        "error_class": exc.__class__.__name__,
                    },
                    level=logging.WARNING,
                )
                continue
            delivered += 1
        return delivered

    def subscriber_count(self, record_type: str) -> int:
        with self._lock:
            return len(self._subscribers.get(record_type, []))


change_bus = ChangeBus()
