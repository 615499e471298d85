from cqbot.cli.commands import app

app()
