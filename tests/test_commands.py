"""Tests for the click-backed command parser."""

import pytest

from cqbot.agent.commands import ClickCommandParser, CommandParseError
from cqbot.agent.router import tokenize


def test_tokenize_prepends_program_name():
    assert tokenize("#ban  9   now") == ["", "ban", "9", "now"]


def test_tokenize_plain_text_is_not_a_command():
    assert tokenize("hello #ban 9") is None


def test_tokenize_custom_prefix():
    assert tokenize("!ban 9", prefix="!") == ["", "ban", "9"]
    assert tokenize("#ban 9", prefix="!") is None


def test_parse_returns_callback_value(parser):
    command = parser.parse(["", "ban", "9"])

    assert command.user_id == 9


def test_parse_options(parser):
    assert parser.parse(["", "status", "--verbose"]).verbose is True
    assert parser.parse(["", "status"]).verbose is False


def test_unknown_command(parser):
    with pytest.raises(CommandParseError) as exc:
        parser.parse(["", "bogus"])

    assert "No such command" in exc.value.usage
    assert "bogus" in exc.value.usage


def test_bad_argument_type_renders_usage(parser):
    with pytest.raises(CommandParseError) as exc:
        parser.parse(["", "ban", "abc"])

    usage = exc.value.usage
    assert usage.startswith("Usage: # ban")
    assert "not a valid integer" in usage


def test_missing_argument(parser):
    with pytest.raises(CommandParseError) as exc:
        parser.parse(["", "ban"])

    assert "USER_ID" in exc.value.usage


def test_help_is_rendered_as_usage(parser, capsys):
    with pytest.raises(CommandParseError) as exc:
        parser.parse(["", "ban", "--help"])

    assert "Ban USER_ID." in exc.value.usage
    assert capsys.readouterr().out == ""


def test_empty_command_line_lists_commands(parser):
    with pytest.raises(CommandParseError) as exc:
        parser.parse([""])

    assert "ban" in exc.value.usage
    assert "status" in exc.value.usage


def test_program_name_is_kept_when_given():
    import click

    @click.command()
    @click.argument("n", type=int)
    def count(n):
        return n

    parser = ClickCommandParser(count)

    assert parser.parse(["count", "3"]) == 3
    with pytest.raises(CommandParseError) as exc:
        parser.parse(["count", "x"])
    assert exc.value.usage.startswith("Usage: count")
