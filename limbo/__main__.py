from limbo.cli.main import app

app()
