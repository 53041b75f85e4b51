from dishka import AsyncContainer, Provider, from_context, make_async_container
from starlette.requests import Request

from limbo.config import Config
from limbo.domain.artist.util.di.provider import ArtistProvider
from limbo.domain.bot.util.di.provider import BotProvider
from limbo.domain.notification.util.di.provider import NotificationProvider
from limbo.infrastructure.persistence.di import PersistenceProvider
from limbo.infrastructure.telegram.di import TelegramProvider
from limbo.util.di.scope import Scope


class ContextProvider(Provider):
    """Values handed to the container from outside."""

    config = from_context(provides=Config, scope=Scope.APP)
    request = from_context(provides=Request, scope=Scope.UOW)


def create_container(config: Config | None = None, *overrides: Provider) -> AsyncContainer:
    """Build the application container.

    Providers passed in ``overrides`` are registered last and replace any
    earlier factory for the same type (tests swap the chat transport this way).
    """
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ContextProvider(),
        PersistenceProvider(),
        TelegramProvider(),
        ArtistProvider(),
        NotificationProvider(),
        BotProvider(),
        *overrides,
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
