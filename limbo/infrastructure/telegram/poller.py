"""Long-poll worker feeding Telegram updates to the chat command handler."""

import asyncio
import logging
from typing import Any

from dishka import AsyncContainer

from limbo.domain.bot.model.message import InboundMessage
from limbo.domain.bot.service.commands import ChatCommandHandler
from limbo.domain.shared.error import TransportError
from limbo.infrastructure.telegram.client import TelegramTransport
from limbo.util.di.scope import Scope

logger = logging.getLogger(__name__)


def update_to_message(update: dict[str, Any]) -> InboundMessage | None:
    """Extract a text message from a raw Bot API update, or None to skip it."""
    message = update.get("message")
    if not isinstance(message, dict):
        return None

    text = message.get("text")
    chat = message.get("chat") or {}
    if not text or "id" not in chat:
        return None

    username = (message.get("from") or {}).get("username")
    return InboundMessage(
        sender_channel_id=str(chat["id"]),
        command_text=text,
        sender_identity=f"@{username}" if username else None,
    )


class UpdatePoller:
    """Pulls updates with getUpdates and handles each one in its own task.

    A slow reply to one artist never holds up the next update. Poll errors of any
    kind are logged and retried after ``retry_delay``; the loop only ends on
    ``stop()``.

    Usage:
        poller = UpdatePoller(transport, container)
        async with poller:
            ...  # updates are being processed
    """

    def __init__(
        self,
        transport: TelegramTransport,
        container: AsyncContainer,
        poll_timeout: int = 30,
        retry_delay: float = 5.0,
    ) -> None:
        self._transport = transport
        self._container = container
        self._poll_timeout = poll_timeout
        self._retry_delay = retry_delay
        self._offset: int | None = None
        self._shutdown = False
        self._task: asyncio.Task | None = None
        self._inflight: set[asyncio.Task] = set()

    @property
    def offset(self) -> int | None:
        """Next update id to request."""
        return self._offset

    def start(self) -> asyncio.Task:
        self._shutdown = False
        self._task = asyncio.create_task(self._run(), name="telegram-poller")
        logger.info("Telegram poller started")
        return self._task

    async def stop(self, timeout: float = 10.0) -> None:
        """Stop polling and wait for in-flight updates to be answered."""
        self._shutdown = True
        if self._task and not self._task.done():
            # getUpdates may be parked for poll_timeout seconds
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

        if self._inflight:
            done, pending = await asyncio.wait(self._inflight, timeout=timeout)
            for task in pending:
                task.cancel()

    async def __aenter__(self) -> "UpdatePoller":
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    async def _run(self) -> None:
        try:
            while not self._shutdown:
                try:
                    await self.poll_once()
                except TransportError as e:
                    logger.error("Telegram polling error: %s", e)
                    await asyncio.sleep(self._retry_delay)
                except Exception:
                    logger.exception("Unexpected error while polling Telegram")
                    await asyncio.sleep(self._retry_delay)
        except asyncio.CancelledError:
            logger.info("Telegram poller cancelled")
            raise
        finally:
            logger.info("Telegram poller stopped")

    async def poll_once(self) -> int:
        """Fetch one batch of updates and schedule their handling.

        Returns:
            Number of messages scheduled.
        """
        updates = await self._transport.get_updates(self._offset, self._poll_timeout)
        scheduled = 0
        for update in updates:
            update_id = update.get("update_id")
            if isinstance(update_id, int):
                self._offset = max(self._offset or 0, update_id + 1)

            message = update_to_message(update)
            if message is None:
                continue

            task = asyncio.create_task(self._handle(message))
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)
            scheduled += 1
        return scheduled

    async def _handle(self, message: InboundMessage) -> None:
        try:
            async with self._container(scope=Scope.UOW) as scope:
                handler = await scope.get(ChatCommandHandler)
                await handler.handle(message)
        except Exception:
            logger.exception(
                "Failed to handle message from channel %s", message.sender_channel_id
            )
