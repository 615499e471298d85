"""
cqbot CLI
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Final, Optional

import typer
from rich.console import Console
from rich.table import Table

from cqbot import __logo__, __version__


# ============================================================================
# CLI App
# ============================================================================

APP_NAME: Final[str] = "cqbot"

app = typer.Typer(
    name=APP_NAME,
    help=f"{__logo__} cqbot - CQHTTP chat bot runtime",
    no_args_is_help=True,
)

console = Console()


# ============================================================================
# Version
# ============================================================================

def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} cqbot v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True
    ),
):
    """cqbot - CQHTTP chat bot runtime."""
    pass


# ============================================================================
# Onboard
# ============================================================================


@app.command()
def onboard(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c"),
):
    """Write a default configuration file."""
    from cqbot.config.loader import get_config_path, save_config
    from cqbot.config.schema import Config

    path = config_path or get_config_path()

    if path.exists():
        console.print(f"[yellow]Config already exists at {path}[/yellow]")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit()

    save_config(Config(), path)

    console.print(f"[green]✓[/green] Created config at {path}")
    console.print("\nNext steps:")
    console.print(f"  1. Set [cyan]gateway.websocket[/cyan] and [cyan]gateway.botId[/cyan] in {path}")
    console.print("  2. Run: [cyan]cqbot run[/cyan]")


# ============================================================================
# Run
# ============================================================================


@app.command()
def run(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Connect to the gateway and serve messages."""
    from loguru import logger

    from cqbot.bot import Bot
    from cqbot.channels.cqhttp import TransportError
    from cqbot.config.loader import load_config
    from cqbot.utils.helpers import setup_logging

    setup_logging(verbose)

    config = load_config(config_path)
    bot = Bot.from_config(config)

    console.print(f"{__logo__} Starting cqbot | gateway={config.gateway.websocket}")

    try:
        asyncio.run(bot.start())
    except TransportError as e:
        logger.error("Gateway connection lost | {}", e)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\nShutting down...")


# ============================================================================
# Parse
# ============================================================================


@app.command()
def parse(
    line: str = typer.Argument(..., help="Command line, e.g. '#ping'"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c"),
):
    """Dry-run a command line through the configured handler's parser."""
    from cqbot.agent.commands import CommandParseError
    from cqbot.agent.router import tokenize
    from cqbot.bot import load_handler
    from cqbot.config.loader import load_config

    config = load_config(config_path)
    handler = load_handler(config)

    tokens = tokenize(line, config.commands.prefix)
    if tokens is None:
        console.print(f"[yellow]Not a command (no '{config.commands.prefix}' prefix): free-form message[/yellow]")
        return

    try:
        command = handler.parser.parse(tokens)
    except CommandParseError as e:
        console.print(e.usage, markup=False)
        raise typer.Exit(2)

    console.print(f"[green]✓[/green] {command!r}")


# ============================================================================
# Status
# ============================================================================


@app.command()
def status(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c"),
):
    """Show cqbot configuration."""
    from cqbot.config.loader import get_config_path, load_config

    path = config_path or get_config_path()
    config = load_config(path)

    table = Table(title=f"{__logo__} cqbot status", show_header=False)
    table.add_column("key", style="cyan")
    table.add_column("value")

    table.add_row("Config", f"{path} {'[green]✓[/green]' if path.exists() else '[red]✗[/red]'}")
    table.add_row("Gateway", config.gateway.websocket)
    table.add_row("Bot QQ", str(config.gateway.bot_id or "[dim]not set[/dim]"))
    table.add_row("Admin QQ", str(config.gateway.admin_id or "[dim]not set[/dim]"))
    table.add_row("Handler", config.handler)
    table.add_row("Command prefix", config.commands.prefix)
    table.add_row("Queue size", str(config.bus.queue_size))

    console.print(table)


if __name__ == "__main__":
    app()
