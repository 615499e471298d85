"""Classification, command routing and the dispatch loop."""

from cqbot.agent.classifier import classify
from cqbot.agent.commands import ClickCommandParser, CommandParseError, CommandParser
from cqbot.agent.handler import Handler
from cqbot.agent.loop import DispatchLoop
from cqbot.agent.router import route

__all__ = [
    "classify",
    "ClickCommandParser",
    "CommandParseError",
    "CommandParser",
    "Handler",
    "DispatchLoop",
    "route",
]
