"""Status command - ask a running server about one artist."""

import sys

import cyclopts
import httpx

from limbo.cli.console import get_console
from limbo.config import Config

app = cyclopts.App(name="status", help="Show an artist's registration status")


def get_server_url() -> str:
    config = Config()  # type: ignore[call-arg]
    host = "localhost" if config.http.host in ("0.0.0.0", "::") else config.http.host
    return f"http://{host}:{config.http.port}"


@app.default
def status(username: str, *, server: str | None = None) -> None:
    """Show whether an artist has registered with the bot.

    Args:
        username: Artist username, with or without the leading @.
        server: Server base URL. Defaults to the configured host and port.
    """
    console = get_console()
    server_url = server or get_server_url()
    url = f"{server_url}/api/artist/{username}/status"

    try:
        response = httpx.get(url)
        response.raise_for_status()
        data = response.json()
    except httpx.ConnectError:
        console.error(
            f"Could not connect to server at {server_url}",
            hint="Is the server running? Start it with: limbo serve",
        )
        sys.exit(1)
    except httpx.HTTPStatusError as e:
        console.error(f"Server error: {e.response.status_code} - {e.response.text}")
        sys.exit(1)

    if not data.get("found"):
        console.warning(f"Artist {username} is not on the roster")
        sys.exit(1)

    registered = data.get("registered", False)
    console.fields(
        [
            ("Name", data.get("name", "")),
            ("Status", "[green]registered[/green]" if registered else "[red]not registered[/red]"),
            ("Chat ID", data.get("recipientId") or "-"),
            ("Registered at", data.get("registeredAt") or "-"),
        ],
        title=username,
    )
