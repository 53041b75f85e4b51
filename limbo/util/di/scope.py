"""Custom Dishka scopes for LIMBO."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """LIMBO dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (registry, transport, HTTP clients)
    - UOW: Unit of Work (one HTTP request or one inbound chat update)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
