from collections import defaultdict
import logging
from typing import Callable, DefaultDict, Iterable, List, NamedTuple, Type

from playguard.domain.events import DOMAIN_EVENT_TYPES, DomainEvent

EventHandler = Callable[[DomainEvent], None]


class _Subscription(NamedTuple):
    priority: int
    order: int
    handler: EventHandler


class EventBus:
    """Synchronous dispatcher for roll and protection events.

    Lower priority values run first; equal priorities keep registration order.
    A handler that raises is logged and skipped, and the rest still run.
    """

    def __init__(self) -> None:
        self._subscriptions: DefaultDict[Type[object], List[_Subscription]] = defaultdict(list)
        self._next_order = 0
        self._last_publish_errors: List[Exception] = []
        self._logger = logging.getLogger(__name__)

    def subscribe(self, event_type: Type[object], handler: EventHandler, *, priority: int = 100) -> None:
        rows = self._subscriptions[event_type]
        rows.append(_Subscription(int(priority), self._next_order, handler))
        rows.sort(key=lambda row: (row.priority, row.order))
        self._next_order += 1

    def subscribe_all(
        self,
        handler: EventHandler,
        *,
        event_types: Iterable[Type[object]] = DOMAIN_EVENT_TYPES,
        priority: int = 100,
    ) -> None:
        """Register ``handler`` for every domain event, e.g. for auditing or display."""
        for event_type in event_types:
            self.subscribe(event_type, handler, priority=priority)

    def unsubscribe(self, event_type: Type[object], handler: EventHandler) -> bool:
        rows = self._subscriptions.get(event_type, [])
        kept = [row for row in rows if row.handler is not handler]
        if len(kept) == len(rows):
            return False
        self._subscriptions[event_type] = kept
        return True

    def handler_count(self, event_type: Type[object]) -> int:
        return len(self._subscriptions.get(event_type, []))

    def _dispatch(self, row: _Subscription, event: DomainEvent) -> None:
        try:
            row.handler(event)
        except Exception as exc:
            self._last_publish_errors.append(exc)
            self._logger.exception(
                "Event handler failed and was isolated",
                extra={
                    "event_type": type(event).__name__,
                    "handler": getattr(row.handler, "__qualname__", repr(row.handler)),
                    "priority": row.priority,
                },
            )

    def publish(self, event: DomainEvent) -> None:
        self._last_publish_errors = []
        for row in list(self._subscriptions.get(type(event), [])):
            self._dispatch(row, event)

    def last_publish_errors(self) -> List[Exception]:
        return list(self._last_publish_errors)
