"""
Command line parsing boundary.

The router hands the parser a token list whose first element is a
(possibly empty) program name, the way ``sys.argv`` looks. The parser
either returns a command value or raises ``CommandParseError`` carrying
text fit to send back to the user.
"""

from __future__ import annotations

import contextlib
import io
from abc import ABC, abstractmethod
from typing import Any, Sequence

import click


class CommandParseError(Exception):
    """A command line was rejected; ``usage`` is the rendered explanation."""

    def __init__(self, usage: str):
        super().__init__(usage)
        self.usage = usage


class CommandParser(ABC):
    """Turns a tokenized command line into a command value."""

    @abstractmethod
    def parse(self, tokens: Sequence[str]) -> Any:
        """
        Parse ``tokens`` (``tokens[0]`` is the program name).

        Raises:
            CommandParseError: the tokens do not form a valid command.
        """
        raise NotImplementedError


class ClickCommandParser(CommandParser):
    """
    Parser backed by a click ``Command`` or ``Group``.

    The command value is whatever the invoked callback returns, so
    callbacks should only build a value, never act:

        @click.group()
        def cli(): ...

        @cli.command()
        @click.argument("user_id", type=int)
        def ban(user_id):
            return Ban(user_id)
    """

    def __init__(self, command: click.Command, prog_name: str = "#"):
        self.command = command
        self.prog_name = prog_name

    def parse(self, tokens: Sequence[str]) -> Any:
        if not tokens:
            raise CommandParseError("Error: empty command line")

        info_name = tokens[0] or self.prog_name
        args = list(tokens[1:])

        # --help echoes to stdout and exits; parsing never awaits, so the
        # redirect cannot leak into other tasks.
        captured = io.StringIO()
        try:
            with contextlib.redirect_stdout(captured):
                with self.command.make_context(info_name, args) as ctx:
                    return self.command.invoke(ctx)
        except click.exceptions.Exit:
            raise CommandParseError(captured.getvalue().strip()) from None
        except click.ClickException as e:
            rendered = io.StringIO()
            e.show(file=rendered)
            raise CommandParseError(rendered.getvalue().strip()) from None
