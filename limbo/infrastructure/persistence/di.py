from dishka import provide

from limbo.config import Config
from limbo.domain.artist.port.store import RegistryStore
from limbo.infrastructure.persistence.json_store import JsonRegistryStore
from limbo.util.di.base import Provider
from limbo.util.di.scope import Scope


class PersistenceProvider(Provider):
    @provide(scope=Scope.APP)
    def get_registry_store(self, config: Config) -> RegistryStore:
        return JsonRegistryStore(path=config.registry.file)
