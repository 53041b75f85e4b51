from dishka import Provider as DishkaProvider

from limbo.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base for all LIMBO DI providers. Unscoped factories live for the whole app."""

    scope = Scope.APP
