"""Ports for the side effects the use cases trigger after persistence.

Like the repositories, these are abstractions; the infrastructure layer
provides the concrete event publisher and notifier.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from orderflow.domain.events import DomainEvent


class EventPublisher(ABC):

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """Deliver one event to every local subscriber.

        Returns only after delivery completed; raises EventPublishError
        otherwise.
        """

    @abstractmethod
    async def publish_many(self, events: Sequence[DomainEvent]) -> None:
        """Deliver events in order; a no-op for an empty sequence."""


class Notifier(ABC):

    @abstractmethod
    async def send_order_confirmation(self, email: str, order_id: str) -> None:
        """Tell the customer their order was received."""

    @abstractmethod
    async def send_order_status_update(self, email: str, order_id: str, status: str) -> None:
        """Tell the customer their order moved to ``status``."""

    @abstractmethod
    async def send_order_cancellation(self, email: str, order_id: str) -> None:
        """Tell the customer their order was cancelled."""
