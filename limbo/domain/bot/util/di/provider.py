from typing import AsyncIterable

from dishka import provide

from limbo.config import Config
from limbo.domain.artist.service.registry import ArtistRegistry
from limbo.domain.bot.service.commands import ChatCommandHandler
from limbo.domain.notification.port.transport import ChatTransport
from limbo.util.di.base import Provider
from limbo.util.di.scope import Scope


class BotProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_command_handler(
        self, registry: ArtistRegistry, transport: ChatTransport, config: Config
    ) -> AsyncIterable[ChatCommandHandler]:
        handler = ChatCommandHandler(
            registry=registry,
            transport=transport,
            admin_identity=config.admin_identity,
            probe_delay=config.telegram.probe_delay,
        )
        yield handler
        await handler.drain()
