"""Main CLI application using Cyclopts."""

import cyclopts

from limbo.cli.commands import serve, status

app = cyclopts.App(
    name="limbo",
    help="LIMBO gallery artist notifier",
)

app.command(serve.app, name="serve")
app.command(status.app, name="status")
