"""
Example handler: echoes free-form messages and serves a few commands.

    #ping               -> pong
    #echo some text     -> some text
    #ban <user_id>      -> admin only
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import click

from cqbot.agent.commands import ClickCommandParser
from cqbot.agent.handler import Handler
from cqbot.bus.events import InboundMessage, OutboundMessage
from cqbot.config.schema import Config


# =============================
# Commands
# =============================

@dataclass(frozen=True, slots=True)
class Ping:
    pass


@dataclass(frozen=True, slots=True)
class Echo:
    text: str


@dataclass(frozen=True, slots=True)
class Ban:
    user_id: int


ADMIN_COMMANDS = (Ban,)


@click.group()
def commands() -> None:
    """Bot commands."""


@commands.command()
def ping() -> Ping:
    """Check that the bot is alive."""
    return Ping()


@commands.command()
@click.argument("text", nargs=-1, required=True)
def echo(text: tuple[str, ...]) -> Echo:
    """Repeat TEXT."""
    return Echo(" ".join(text))


@commands.command()
@click.argument("user_id", type=int)
def ban(user_id: int) -> Ban:
    """Ban USER_ID (admin only)."""
    return Ban(user_id)


# =============================
# Handler
# =============================

class EchoHandler(Handler):

    def __init__(self, config: Config):
        self.admin_id = config.gateway.admin_id
        self.parser = ClickCommandParser(commands, prog_name=config.commands.prefix)

    async def handle_message(self, msg: InboundMessage) -> Optional[OutboundMessage]:
        if not msg.content:
            return None
        return OutboundMessage.reply(msg, msg.content)

    async def handle_command(
        self,
        command: Any,
        msg: InboundMessage,
    ) -> Optional[OutboundMessage]:
        if isinstance(command, Ping):
            return OutboundMessage.reply(msg, "pong")
        if isinstance(command, Echo):
            return OutboundMessage.reply(msg, command.text)
        if isinstance(command, Ban):
            return OutboundMessage.reply(msg, f"User {command.user_id} banned")
        return None

    def check_command_auth(self, command: Any, msg: InboundMessage) -> bool:
        if isinstance(command, ADMIN_COMMANDS):
            return msg.sender_id == self.admin_id
        return True
