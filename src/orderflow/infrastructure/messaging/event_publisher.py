"""In-process implementation of EventPublisher.

Subscribers register per event class and are called in registration
order; sync and async callables are both accepted.  Publication is
awaited end to end, so when ``publish`` returns every subscriber has run.
"""

from __future__ import annotations

import inspect
from collections import defaultdict
from collections.abc import Awaitable, Callable, Sequence
from typing import Union

import structlog

from orderflow.application.ports import EventPublisher
from orderflow.domain.events import DomainEvent
from orderflow.domain.exceptions import EventPublishError

logger = structlog.get_logger(__name__)

Subscriber = Callable[[DomainEvent], Union[None, Awaitable[None]]]


class InProcessEventPublisher(EventPublisher):

    def __init__(self) -> None:
        self._subscribers: dict[type[DomainEvent], list[Subscriber]] = defaultdict(list)

    def subscribe(self, event_type: type[DomainEvent], subscriber: Subscriber) -> None:
        self._subscribers[event_type].append(subscriber)

    def subscribers_for(self, event: DomainEvent) -> list[Subscriber]:
        return list(self._subscribers.get(type(event), []))

    async def publish(self, event: DomainEvent) -> None:
        aggregate_id = getattr(event, "aggregate_id", None)
        logger.debug(
            "Publishing domain event",
            event_type=event.event_type,
            aggregate_id=aggregate_id,
        )
        for subscriber in self.subscribers_for(event):
            try:
                result = subscriber(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:
                logger.error(
                    "Failed to publish event",
                    event_type=event.event_type,
                    aggregate_id=aggregate_id,
                    subscriber=getattr(subscriber, "__name__", repr(subscriber)),
                )
                raise EventPublishError(
                    f"Failed to publish {event.event_type}: {exc}",
                    order_id=aggregate_id,
                ) from exc

    async def publish_many(self, events: Sequence[DomainEvent]) -> None:
        if not events:
            return
        for event in events:
            await self.publish(event)
        logger.debug("Published domain events", count=len(events))
