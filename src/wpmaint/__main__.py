from wpmaint.cli.main import app

app()
