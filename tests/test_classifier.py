"""Tests for frame classification (which messages the bot handles)."""

import json

import pytest

from cqbot.agent.classifier import classify
from cqbot.bus.events import InboundMessage


# ---------------------------------------------------------------------------
# Non-message posts and bad frames
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("post_type", ["meta_event", "request", "notice"])
def test_non_message_posts_are_dropped(make_frame, bot_id, post_type):
    assert classify(make_frame(post_type=post_type), bot_id) is None


def test_heartbeat_is_dropped(bot_id):
    frame = json.dumps({
        "post_type": "meta_event",
        "meta_event_type": "heartbeat",
        "time": 1700000000,
        "self_id": bot_id,
        "interval": 5000,
    })
    assert classify(frame, bot_id) is None


@pytest.mark.parametrize(
    "frame",
    [
        "not json",
        "[1, 2, 3]",
        '{"no_post_type": true}',
        '{"post_type": "message_sent"}',
        '{"post_type": "message", "message_type": "private"}',
        '{"post_type": "message", "message_type": "channel", "time": 1, "self_id": 1,'
        ' "user_id": 2, "message": "x", "raw_message": "x", "message_id": 3}',
    ],
)
def test_malformed_frames_are_dropped(frame, bot_id):
    assert classify(frame, bot_id) is None


# ---------------------------------------------------------------------------
# Private messages
# ---------------------------------------------------------------------------

def test_private_message_is_accepted(make_frame, bot_id):
    msg = classify(make_frame("hello", user_id=42), bot_id)

    assert msg == InboundMessage(sender_id=42, content="hello", group_id=None)


def test_private_message_ignores_mentions(make_frame, bot_id):
    frame = make_frame("[CQ:at,qq=555] hi", raw_message="[CQ:at,qq=555] hi")

    msg = classify(frame, bot_id)

    assert msg is not None
    assert msg.content == "hi"


# ---------------------------------------------------------------------------
# Group messages
# ---------------------------------------------------------------------------

def test_unaddressed_group_message_is_dropped(make_frame, bot_id):
    frame = make_frame("just chatting", message_type="group", group_id=5)

    assert classify(frame, bot_id) is None


def test_group_message_mentioning_someone_else_is_dropped(make_frame, bot_id):
    text = "[CQ:at,qq=30003] hey"
    frame = make_frame(text, message_type="group", group_id=5)

    assert classify(frame, bot_id) is None


def test_addressed_group_message_is_accepted(make_frame, bot_id):
    text = f"[CQ:at,qq={bot_id}] #ban 9"
    frame = make_frame(text, message_type="group", group_id=5, user_id=42)

    msg = classify(frame, bot_id)

    assert msg == InboundMessage(sender_id=42, content="#ban 9", group_id=5)


def test_mention_is_read_from_raw_message(make_frame, bot_id):
    frame = make_frame(
        "hello",
        message_type="group",
        group_id=5,
        raw_message=f"[CQ:at,qq={bot_id}] hello",
    )

    msg = classify(frame, bot_id)

    assert msg is not None
    assert msg.content == "hello"


def test_all_markup_is_stripped(make_frame, bot_id):
    text = f"[CQ:reply,id=1][CQ:at,qq={bot_id}] look [CQ:image,file=x.png] here "
    frame = make_frame(text, message_type="group", group_id=5)

    msg = classify(frame, bot_id)

    assert msg.content == "look  here"
