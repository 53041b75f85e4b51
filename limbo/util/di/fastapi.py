"""Per-request dishka scope for the HTTP API."""

from dishka import AsyncContainer
from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from limbo.util.di.scope import Scope as LimboScope


class UnitOfWorkMiddleware:
    """Open a ``Scope.UOW`` child container around every HTTP request.

    The Telegram poller opens the same scope for each chat update, so route
    handlers and chat command handlers resolve dependencies the same way.
    Lifespan and websocket traffic pass through untouched.
    """

    def __init__(self, app: ASGIApp, container: AsyncContainer) -> None:
        self.app = app
        self.container = container

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive=receive, send=send)
        async with self.container({Request: request}, scope=LimboScope.UOW) as uow:
            request.state.dishka_container = uow
            await self.app(scope, receive, send)


def setup_dishka(container: AsyncContainer, app) -> None:
    """Attach ``container`` to ``app`` and scope each request to a unit of work."""
    app.add_middleware(UnitOfWorkMiddleware, container=container)
    app.state.dishka_container = container
