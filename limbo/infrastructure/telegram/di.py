"""DI provider for the Telegram transport."""

from typing import AsyncIterable, NewType

import httpx
from dishka import provide

from limbo.config import Config
from limbo.domain.notification.port.transport import ChatTransport
from limbo.infrastructure.telegram.client import TelegramTransport
from limbo.util.di.base import Provider
from limbo.util.di.scope import Scope

TelegramHttpClient = NewType("TelegramHttpClient", httpx.AsyncClient)

_TELEGRAM_TIMEOUT = httpx.Timeout(
    connect=5.0,
    read=15.0,
    write=5.0,
    pool=5.0,
)


class TelegramProvider(Provider):
    """DI provider for the Bot API client and transport."""

    @provide(scope=Scope.APP)
    async def get_telegram_http_client(self, config: Config) -> AsyncIterable[TelegramHttpClient]:
        base_url = f"{config.telegram.api_url.rstrip('/')}/bot{config.telegram.token}/"
        async with httpx.AsyncClient(base_url=base_url, timeout=_TELEGRAM_TIMEOUT) as client:
            yield TelegramHttpClient(client)

    @provide(scope=Scope.APP)
    def get_telegram_transport(self, client: TelegramHttpClient) -> TelegramTransport:
        return TelegramTransport(client=client)

    @provide(scope=Scope.APP)
    def get_chat_transport(self, transport: TelegramTransport) -> ChatTransport:
        return transport
