"""Global test fixtures."""

import json
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from dishka import Provider, provide

from limbo.application.api.rest.app import create_app
from limbo.config import Config, RegistryConfig, TelegramConfig
from limbo.domain.notification.port.transport import ChatTransport
from limbo.domain.shared.error import TransportError
from limbo.util.di.scope import Scope


class FakeChatTransport(ChatTransport):
    """Records sent messages; can be told to fail for specific channels."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []
        self.failures: dict[str, TransportError] = {}

    def fail_for(self, channel_id: str, error: TransportError) -> None:
        self.failures[channel_id] = error

    async def send(self, channel_id: str, text: str) -> None:
        error = self.failures.get(channel_id)
        if error is not None:
            raise error
        self.sent.append((channel_id, text))

    def texts_for(self, channel_id: str) -> list[str]:
        return [text for channel, text in self.sent if channel == channel_id]


class FakeTransportProvider(Provider):
    def __init__(self, transport: ChatTransport) -> None:
        super().__init__()
        self._transport = transport

    @provide(scope=Scope.APP)
    def get_chat_transport(self) -> ChatTransport:
        return self._transport


ROSTER = {
    "artists": [
        {"name": "Anna Petrova", "username": "@anna", "slug": "anna-petrova"},
        {"name": "Boris Ivanov", "username": "@boris", "slug": "boris-ivanov"},
        {
            "name": "Clara Smirnova",
            "username": "@clara",
            "slug": "clara-smirnova",
            "telegramId": "777",
            "registeredAt": "2024-03-01T12:00:00+00:00",
        },
    ]
}


@pytest.fixture
def roster_file(tmp_path: Path) -> Path:
    path = tmp_path / "artists.json"
    path.write_text(json.dumps(ROSTER), encoding="utf-8")
    return path


@pytest.fixture
def fake_transport() -> FakeChatTransport:
    return FakeChatTransport()


@pytest.fixture
def config(roster_file: Path) -> Config:
    return Config(
        telegram=TelegramConfig(polling=False, probe_delay=0.0),
        registry=RegistryConfig(file=roster_file),
        admin_identity="9000",
    )


@pytest.fixture
def make_app(fake_transport: FakeChatTransport):
    """Build an application wired to the fake chat transport."""

    def _make(config: Config, *providers: Provider):
        return create_app(config, FakeTransportProvider(fake_transport), *providers)

    return _make


@pytest_asyncio.fixture
async def app(config: Config, make_app):
    """Running application (lifespan entered) with the fake chat transport."""
    app = make_app(config)
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
