from typing import AsyncIterable

from dishka import provide

from limbo.domain.artist.port.store import RegistryStore
from limbo.domain.artist.service.registry import ArtistRegistry
from limbo.util.di.base import Provider
from limbo.util.di.scope import Scope


class ArtistProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_registry(self, store: RegistryStore) -> AsyncIterable[ArtistRegistry]:
        """Load the registry once per process and flush it when the container closes."""
        registry = ArtistRegistry(store=store)
        await registry.load()
        yield registry
        await registry.flush()
