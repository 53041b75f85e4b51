"""End-to-end tests for the HTTP API with the chat transport faked out."""

import json
from pathlib import Path

import httpx
import pytest
from dishka import Provider, provide

from limbo.application.api.rest.app import create_app
from limbo.config import Config, RegistryConfig, TelegramConfig
from limbo.domain.artist.port.store import RegistryStore
from limbo.domain.artist.service.registry import ArtistRegistry
from limbo.domain.bot.model.message import InboundMessage
from limbo.domain.bot.service.commands import ChatCommandHandler
from limbo.domain.shared.error import (
    ConfigurationError,
    StoreCorruptError,
    StoreWriteError,
    TransportError,
    TransportErrorKind,
)
from limbo.infrastructure.persistence.json_store import JsonRegistryStore
from limbo.util.di.scope import Scope


class FlakyRegistryStore(JsonRegistryStore):
    """Snapshot store whose next save can be made to fail once."""

    def __init__(self, path: Path) -> None:
        super().__init__(path)
        self.fail_next_save = False

    async def save(self, artists) -> None:
        if self.fail_next_save:
            self.fail_next_save = False
            raise StoreWriteError("disk full")
        await super().save(artists)


class StoreProvider(Provider):
    def __init__(self, store: RegistryStore) -> None:
        super().__init__()
        self._store = store

    @provide(scope=Scope.APP)
    def get_registry_store(self) -> RegistryStore:
        return self._store


def _inquiry(username: str, **overrides) -> dict:
    body = {
        "artistUsername": username,
        "workTitle": "Quiet Harbour",
        "price": 150000,
        "customer": {"fullName": "Ivan Petrov", "phone": "+7 900 000-00-00"},
    }
    body.update(overrides)
    return body


async def _send_command(app, channel_id: str, text: str, identity: str | None = None) -> None:
    async with app.state.dishka_container(scope=Scope.UOW) as scope:
        handler = await scope.get(ChatCommandHandler)
        await handler.handle(
            InboundMessage(
                sender_channel_id=channel_id, command_text=text, sender_identity=identity
            )
        )
        await handler.drain()


class TestSubmitNotification:
    @pytest.mark.asyncio
    async def test_unregistered_artist(self, client: httpx.AsyncClient, fake_transport):
        response = await client.post("/api/notification", json=_inquiry("@anna"))

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["artistFound"] is True
        assert body["message"] == "Artist has not registered with the bot yet"
        assert "timestamp" in body
        assert fake_transport.sent == []

    @pytest.mark.asyncio
    async def test_unknown_artist(self, client: httpx.AsyncClient, fake_transport):
        response = await client.post("/api/notification", json=_inquiry("@nobody"))

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["artistFound"] is False
        assert body["message"] == "Artist not found"
        assert fake_transport.sent == []

    @pytest.mark.asyncio
    async def test_delivered(self, client: httpx.AsyncClient, fake_transport):
        response = await client.post("/api/notification", json=_inquiry("CLARA"))

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["artistFound"] is True
        (text,) = fake_transport.texts_for("777")
        assert "Artist: Clara Smirnova" in text
        assert "Price: 150 000 RUB" in text
        assert "👤 Name: Ivan Petrov" in text

    @pytest.mark.asyncio
    async def test_blocked_artist_is_unregistered(
        self, client: httpx.AsyncClient, fake_transport, roster_file: Path
    ):
        fake_transport.fail_for(
            "777", TransportError("bot was blocked by the user", TransportErrorKind.BLOCKED)
        )

        first = await client.post("/api/notification", json=_inquiry("@clara"))
        second = await client.post("/api/notification", json=_inquiry("@clara"))

        assert first.json()["success"] is False
        assert first.json()["message"] == "Notification delivery failed"
        assert second.json()["artistFound"] is True
        assert second.json()["message"] == "Artist has not registered with the bot yet"

        saved = json.loads(roster_file.read_text(encoding="utf-8"))
        clara = next(a for a in saved["artists"] if a["username"] == "@clara")
        assert "telegramId" not in clara
        assert "registeredAt" not in clara

    @pytest.mark.asyncio
    async def test_transient_failure_keeps_recipient(
        self, client: httpx.AsyncClient, fake_transport
    ):
        fake_transport.fail_for("777", TransportError("Too Many Requests"))

        response = await client.post("/api/notification", json=_inquiry("@clara"))
        status = await client.get("/api/artist/clara/status")

        assert response.json()["success"] is False
        assert status.json()["registered"] is True

    @pytest.mark.asyncio
    async def test_missing_fields(self, client: httpx.AsyncClient, fake_transport):
        response = await client.post(
            "/api/notification",
            json={"artistUsername": "@clara", "customer": {"fullName": "Ivan", "phone": " "}},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "VALIDATION_ERROR"
        assert [e["field"] for e in body["errors"]] == ["customer.phone"]
        assert fake_transport.sent == []

    @pytest.mark.asyncio
    async def test_storefront_loose_fields_accepted(
        self, client: httpx.AsyncClient, fake_transport
    ):
        response = await client.post(
            "/api/notification",
            json=_inquiry(
                "@clara", price="", customer={"fullName": "Ivan", "phone": 79000000000}
            ),
        )

        assert response.status_code == 200
        assert response.json()["success"] is True
        (text,) = fake_transport.texts_for("777")
        assert "Price: On request" in text
        assert "📞 Phone: 79000000000" in text

    @pytest.mark.asyncio
    async def test_missing_customer(self, client: httpx.AsyncClient):
        response = await client.post("/api/notification", json={"artistUsername": "@clara"})

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["errors"]] == ["customer"]

    @pytest.mark.asyncio
    async def test_malformed_json(self, client: httpx.AsyncClient, fake_transport):
        response = await client.post(
            "/api/notification",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Internal server error"}
        assert fake_transport.sent == []


class TestArtistStatus:
    @pytest.mark.asyncio
    async def test_registration_through_bot_is_visible(
        self, app, client: httpx.AsyncClient, fake_transport
    ):
        await _send_command(app, "555", "/start", "@anna")

        response = await client.get("/api/artist/anna/status")

        assert response.status_code == 200
        body = response.json()
        assert body["found"] is True
        assert body["name"] == "Anna Petrova"
        assert body["registered"] is True
        assert body["recipientId"] == "555"
        assert "registeredAt" in body
        assert len(fake_transport.texts_for("555")) == 2

    @pytest.mark.asyncio
    async def test_unregistered_artist(self, client: httpx.AsyncClient):
        response = await client.get("/api/artist/@boris/status")

        body = response.json()
        assert body["found"] is True
        assert body["registered"] is False
        assert "recipientId" not in body

    @pytest.mark.asyncio
    async def test_unknown_artist(self, client: httpx.AsyncClient):
        response = await client.get("/api/artist/nobody/status")

        assert response.status_code == 200
        assert response.json() == {"found": False, "message": "Artist not found"}


class TestHealth:
    @pytest.mark.asyncio
    async def test_counts(self, client: httpx.AsyncClient):
        response = await client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "artists": 3,
            "registered": 1,
            "snapshot_saved": True,
        }


class TestLifespan:
    @pytest.mark.asyncio
    async def test_missing_snapshot_is_created(self, tmp_path: Path, make_app):
        path = tmp_path / "artists.json"
        config = Config(
            telegram=TelegramConfig(polling=False),
            registry=RegistryConfig(file=path),
        )
        app = make_app(config)

        async with app.router.lifespan_context(app):
            assert path.exists()

        assert json.loads(path.read_text(encoding="utf-8")) == {"artists": []}

    @pytest.mark.asyncio
    async def test_corrupt_snapshot_aborts_startup(self, tmp_path: Path):
        path = tmp_path / "artists.json"
        path.write_text("{broken", encoding="utf-8")
        config = Config(
            telegram=TelegramConfig(polling=False),
            registry=RegistryConfig(file=path),
        )
        app = create_app(config)

        with pytest.raises(StoreCorruptError):
            async with app.router.lifespan_context(app):
                pass

    @pytest.mark.asyncio
    async def test_polling_without_token_aborts_startup(self, roster_file: Path):
        config = Config(
            telegram=TelegramConfig(polling=True, token=""),
            registry=RegistryConfig(file=roster_file),
        )
        app = create_app(config)

        with pytest.raises(ConfigurationError):
            async with app.router.lifespan_context(app):
                pass

    @pytest.mark.asyncio
    async def test_shutdown_writes_unsaved_state(
        self, config: Config, roster_file: Path, make_app
    ):
        store = FlakyRegistryStore(roster_file)
        app = make_app(config, StoreProvider(store))

        async with app.router.lifespan_context(app):
            store.fail_next_save = True
            await _send_command(app, "555", "/start", "@anna")

            registry = await app.state.dishka_container.get(ArtistRegistry)
            assert registry.dirty
            on_disk = json.loads(roster_file.read_text(encoding="utf-8"))
            anna = next(a for a in on_disk["artists"] if a["username"] == "@anna")
            assert "telegramId" not in anna

        on_disk = json.loads(roster_file.read_text(encoding="utf-8"))
        anna = next(a for a in on_disk["artists"] if a["username"] == "@anna")
        assert anna["telegramId"] == "555"
        assert "registeredAt" in anna
