"""Notifier that simulates an e-mail channel by logging each message.

Delivery takes ``latency`` seconds.  Undeliverable messages raise
NotificationError; they are never dropped silently.
"""

from __future__ import annotations

import asyncio

import structlog

from orderflow.application.ports import Notifier
from orderflow.domain.exceptions import NotificationError

logger = structlog.get_logger(__name__)


class LoggingNotifier(Notifier):

    def __init__(self, latency: float = 0.1) -> None:
        self._latency = latency

    async def send_order_confirmation(self, email: str, order_id: str) -> None:
        await self._send("Order Confirmation", email, order_id)

    async def send_order_status_update(self, email: str, order_id: str, status: str) -> None:
        await self._send("Order Status Update", email, order_id, status=status)

    async def send_order_cancellation(self, email: str, order_id: str) -> None:
        await self._send("Order Cancellation", email, order_id)

    async def _send(
        self,
        subject: str,
        email: str,
        order_id: str,
        status: str | None = None,
    ) -> None:
        if not email or "@" not in email:
            logger.error("Failed to send email", subject=subject, to=email, order_id=order_id)
            raise NotificationError(
                f"Failed to send {subject.lower()} email: invalid recipient {email!r}",
                order_id=order_id,
            )

        if self._latency:
            await asyncio.sleep(self._latency)

        logger.info("Email sent", subject=subject, to=email, order_id=order_id, status=status)
