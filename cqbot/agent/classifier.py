"""
Message classifier: raw gateway frame -> InboundMessage worth handling.

Private messages are always handled. Group messages are handled only when
they @-mention the bot, so ambient group chatter is ignored.
"""

from __future__ import annotations

from typing import Optional

from loguru import logger
from pydantic import ValidationError

from cqbot.bus.events import InboundMessage
from cqbot.protocol.events import MessageEnvelope, MessageType, PostEnvelope, PostType
from cqbot.utils.helpers import truncate


def classify(frame: str, bot_id: int) -> Optional[InboundMessage]:
    """Decode ``frame`` and return the message to handle, if any."""
    try:
        post = PostEnvelope.model_validate_json(frame)
    except ValidationError:
        logger.warning("Undecodable gateway frame | {}", truncate(frame, 200))
        return None

    if post.post_type is not PostType.MESSAGE:
        logger.debug("Ignoring post | type={}", post.post_type.value)
        return None

    try:
        envelope = MessageEnvelope.model_validate_json(frame)
    except ValidationError as e:
        logger.warning(
            "Malformed message post | errors={} frame={}",
            e.error_count(),
            truncate(frame, 200),
        )
        return None

    addressed = envelope.mentions(bot_id)

    if envelope.message_type is MessageType.GROUP and not addressed:
        logger.debug("Ignoring unaddressed group message | group={}", envelope.group_id)
        return None

    msg = InboundMessage(
        sender_id=envelope.user_id,
        content=envelope.content,
        group_id=envelope.group_id,
    )

    logger.info(
        "Accepted {} message | sender={} group={} content={}",
        envelope.message_type.value,
        msg.sender_id,
        msg.group_id,
        truncate(msg.content),
    )
    return msg
