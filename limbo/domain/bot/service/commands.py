import asyncio
import logging
from dataclasses import field

from limbo.domain.artist.service.registry import ArtistRegistry
from limbo.domain.bot.model.message import BotCommand, InboundMessage
from limbo.domain.bot.util import messages
from limbo.domain.notification.port.transport import ChatTransport
from limbo.domain.shared.error import TransportError
from limbo.domain.shared.service import Service

logger = logging.getLogger(__name__)


class ChatCommandHandler(Service):
    """Reacts to bot commands sent by artists and the gallery admin.

    Holds no per-conversation state: every message is answered from the
    registry's current contents.
    """

    registry: ArtistRegistry
    transport: ChatTransport
    admin_identity: str | None = None
    probe_delay: float = 1.0
    _background: set[asyncio.Task] = field(default_factory=set, init=False, repr=False)

    async def handle(self, message: InboundMessage) -> None:
        command = message.command
        if command is None:
            return

        logger.info(
            "Command /%s from %s (channel %s)",
            command.value,
            message.sender_identity or "<no username>",
            message.sender_channel_id,
        )

        if command == BotCommand.START:
            await self._start(message)
        elif command == BotCommand.STATUS:
            await self._status(message)
        elif command == BotCommand.LIST:
            await self._list(message)

    async def drain(self) -> None:
        """Wait for detached probe messages to finish."""
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)

    async def _start(self, message: InboundMessage) -> None:
        channel_id = message.sender_channel_id
        if not message.sender_identity:
            await self._reply(channel_id, messages.NO_USERNAME)
            return

        artist = self.registry.find_by_username(message.sender_identity)
        if artist is None:
            await self._reply(channel_id, messages.not_enrolled(message.sender_identity))
            return

        registration = await self.registry.register(artist.username, channel_id)
        if not registration.persisted:
            logger.warning("Registration of %s is not yet saved to disk", artist.username)

        if await self._reply(channel_id, messages.welcome(registration.artist)):
            self._spawn(self._probe(channel_id))

    async def _status(self, message: InboundMessage) -> None:
        artist = self.registry.find_by_recipient_id(message.sender_channel_id)
        if artist is None:
            await self._reply(message.sender_channel_id, messages.NOT_REGISTERED)
            return
        await self._reply(message.sender_channel_id, messages.status(artist))

    async def _list(self, message: InboundMessage) -> None:
        if not self.admin_identity or message.sender_channel_id != self.admin_identity:
            logger.debug("Ignoring /list from non-admin channel %s", message.sender_channel_id)
            return
        await self._reply(message.sender_channel_id, messages.roster(self.registry.list()))

    async def _probe(self, channel_id: str) -> None:
        await asyncio.sleep(self.probe_delay)
        try:
            await self.transport.send(channel_id, messages.PROBE)
        except TransportError as e:
            logger.info("Confirmation message to %s failed: %s", channel_id, e)

    def _spawn(self, coro) -> None:
        task = asyncio.create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _reply(self, channel_id: str, text: str) -> bool:
        try:
            await self.transport.send(channel_id, text)
        except TransportError as e:
            logger.warning("Reply to %s failed: %s", channel_id, e)
            return False
        return True
