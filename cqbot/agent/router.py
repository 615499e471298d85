"""
Command router: decides how one inbound message is handled.

Outcomes:
    command handled        prefix, parsed, authorized   -> handle_command
    command unauthorized   prefix, parsed, rejected     -> nothing
    command unparsable     prefix, parse error          -> usage reply / handle_message
    free-form              no prefix                    -> handle_message
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from cqbot.agent.commands import CommandParseError, CommandParser
from cqbot.agent.handler import Handler
from cqbot.bus.events import InboundMessage, OutboundMessage


DEFAULT_PREFIX = "#"


def tokenize(content: str, prefix: str = DEFAULT_PREFIX) -> Optional[list[str]]:
    """
    Split a command line into parser tokens.

    Returns None when ``content`` is not a command. The first token is an
    empty program name.
    """
    if not content.startswith(prefix):
        return None
    return ["", *content[len(prefix):].split()]


async def route(
    msg: InboundMessage,
    handler: Handler,
    parser: CommandParser,
    prefix: str = DEFAULT_PREFIX,
) -> Optional[OutboundMessage]:
    tokens = tokenize(msg.content, prefix)
    if tokens is None:
        return await handler.handle_message(msg)

    try:
        command = parser.parse(tokens)
    except CommandParseError as e:
        if handler.delegate_unparsable_commands():
            return await handler.handle_message(msg)
        logger.debug("Command rejected by parser | sender={} line={!r}", msg.sender_id, msg.content)
        return OutboundMessage.reply(msg, e.usage)

    if not handler.check_command_auth(command, msg):
        logger.debug("Command not authorized | sender={} command={!r}", msg.sender_id, command)
        return None

    return await handler.handle_command(command, msg)
