import logging
from contextlib import AsyncExitStack, asynccontextmanager

import logfire
from dishka import Provider
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from limbo.application.api.errors import (
    INTERNAL_ERROR_BODY,
    map_limbo_error,
    map_request_validation_error,
)
from limbo.application.api.routes import artists, health, notifications
from limbo.application.di import create_container
from limbo.config import Config, configure_logging
from limbo.domain.artist.service.registry import ArtistRegistry
from limbo.domain.shared.error import ConfigurationError, LimboError
from limbo.infrastructure.telegram.client import TelegramTransport
from limbo.infrastructure.telegram.poller import UpdatePoller
from limbo.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container
    config = await container.get(Config)

    try:
        # Load the roster before accepting traffic; a corrupt snapshot aborts startup
        registry = await container.get(ArtistRegistry)
        logger.info(
            "Registry ready: %d/%d artists registered",
            registry.registered_count(),
            len(registry.list()),
        )

        async with AsyncExitStack() as stack:
            if config.telegram.polling:
                if not config.telegram.token:
                    raise ConfigurationError(
                        "Telegram polling is enabled but no bot token is configured"
                    )
                transport = await container.get(TelegramTransport)
                poller = UpdatePoller(
                    transport,
                    container,
                    poll_timeout=config.telegram.poll_timeout,
                    retry_delay=config.telegram.retry_delay,
                )
                await stack.enter_async_context(poller)
            else:
                logger.info("Telegram polling disabled")

            yield

        logger.info("Shutting down, saving artist registry")
    finally:
        # Closing the container flushes the registry to disk
        await container.close()


def create_app(config: Config | None = None, *overrides: Provider) -> FastAPI:
    """Create FastAPI application."""
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    # Configure logging early
    configure_logging(config.logging)
    logger.info("Starting LIMBO notifier on port %d", config.http.port)

    app_instance = FastAPI(
        title="LIMBO Artist Notifier",
        description="Routes purchase inquiries to artists over Telegram",
        lifespan=lifespan,
    )

    if config.logfire.enabled:
        # Trace HTTP ingress and outbound Bot API calls
        logfire.configure(service_name=config.logfire.service_name, send_to_logfire="if-token-present")
        logfire.instrument_httpx()
        logfire.instrument_fastapi(app_instance)

    # Setup dependency injection
    container = create_container(config, *overrides)
    setup_dishka(container, app_instance)

    app_instance.include_router(notifications.router, prefix="/api")
    app_instance.include_router(artists.router, prefix="/api")
    app_instance.include_router(health.router, prefix="/api")

    @app_instance.exception_handler(LimboError)
    async def limbo_error_handler(request: Request, exc: LimboError):
        http_exc = map_limbo_error(exc)
        return JSONResponse(status_code=http_exc.status_code, content=http_exc.detail)

    @app_instance.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        http_exc = map_request_validation_error(exc)
        return JSONResponse(status_code=http_exc.status_code, content=http_exc.detail)

    # Global exception handler - logs all unhandled exceptions
    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)

    return app_instance
