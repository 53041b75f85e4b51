"""Serve command - run the HTTP API and Telegram poller in the foreground."""

import cyclopts
import uvicorn

from limbo.config import Config

app = cyclopts.App(name="serve", help="Run the notifier server")


@app.default
def serve(host: str | None = None, port: int | None = None) -> None:
    """Start the HTTP API and the Telegram bot.

    SIGINT/SIGTERM shut down gracefully and save the artist registry.

    Args:
        host: Host to bind to. Defaults to LIMBO_HTTP__HOST.
        port: Port to listen on. Defaults to LIMBO_HTTP__PORT (or PORT).
    """
    config = Config()  # type: ignore[call-arg]
    uvicorn.run(
        "limbo.application.api.rest.app:create_app",
        factory=True,
        host=host or config.http.host,
        port=port or config.http.port,
        log_config=None,  # configure_logging owns the handlers
    )
