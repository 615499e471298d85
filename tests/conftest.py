"""Shared fixtures: gateway frames, a fake websocket and a test command set."""

import asyncio
import json
from dataclasses import dataclass

import click
import pytest

from cqbot.agent.commands import ClickCommandParser
from cqbot.config.schema import Config, GatewayConfig

BOT_ID = 10001
ADMIN_ID = 20002


# ---------------------------------------------------------------------------
# Frames
# ---------------------------------------------------------------------------

def _make_frame(
    message: str = "hello",
    *,
    message_type: str = "private",
    user_id: int = 42,
    group_id: int | None = None,
    raw_message: str | None = None,
    post_type: str = "message",
) -> str:
    payload = {
        "post_type": post_type,
        "message_type": message_type,
        "time": 1700000000,
        "self_id": BOT_ID,
        "user_id": user_id,
        "message": message,
        "raw_message": message if raw_message is None else raw_message,
        "message_id": 7,
        "font": 0,
        "sender": {"user_id": user_id, "nickname": "tester", "sex": "unknown", "age": 0},
    }
    if group_id is not None:
        payload["group_id"] = group_id
    return json.dumps(payload)


@pytest.fixture
def make_frame():
    return _make_frame


# ---------------------------------------------------------------------------
# Websocket
# ---------------------------------------------------------------------------

class FakeWebSocket:
    """Feeds queued frames to the reader; ``None`` ends the connection."""

    def __init__(self):
        self.incoming: asyncio.Queue = asyncio.Queue()
        self.sent: asyncio.Queue = asyncio.Queue()
        self.closed = False
        self.fail_on_send: Exception | None = None

    def feed(self, frame) -> None:
        self.incoming.put_nowait(frame)

    def __aiter__(self):
        return self

    async def __anext__(self):
        frame = await self.incoming.get()
        if frame is None:
            raise StopAsyncIteration
        return frame

    async def send(self, frame: str) -> None:
        if self.fail_on_send is not None:
            raise self.fail_on_send
        self.sent.put_nowait(frame)

    async def close(self) -> None:
        self.closed = True
        self.incoming.put_nowait(None)

    async def next_sent(self, timeout: float = 1.0) -> dict:
        return json.loads(await asyncio.wait_for(self.sent.get(), timeout))


@pytest.fixture
def fake_ws():
    return FakeWebSocket()


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@pytest.fixture
def bot_id():
    return BOT_ID


@pytest.fixture
def admin_id():
    return ADMIN_ID


@pytest.fixture
def config():
    return Config(gateway=GatewayConfig(bot_id=BOT_ID, admin_id=ADMIN_ID))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BanCommand:
    user_id: int


@dataclass(frozen=True)
class StatusCommand:
    verbose: bool


@click.group()
def bot_commands():
    """Test commands."""


@bot_commands.command()
@click.argument("user_id", type=int)
def ban(user_id):
    """Ban USER_ID."""
    return BanCommand(user_id)


@bot_commands.command()
@click.option("--verbose", is_flag=True)
def status(verbose):
    """Show status."""
    return StatusCommand(verbose)


@pytest.fixture
def parser():
    return ClickCommandParser(bot_commands)
