"""
Event types for the cqbot message bus.

These are the canonical shapes used inside the bot, independent of the
CQHTTP wire format (see ``cqbot.protocol``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# ---------------------------------------------------------------------
# Inbound
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InboundMessage:
    """
    Message accepted for handling.

    ``content`` has all CQ markup already stripped.
    """

    sender_id: int                  # QQ number of the sender
    content: str
    group_id: Optional[int] = None  # None for private messages


# ---------------------------------------------------------------------
# Outbound
# ---------------------------------------------------------------------

@dataclass(slots=True)
class OutboundMessage:
    """
    Message to be delivered through the gateway.

    Routing:
        group_id set            -> group message, mentioning reply_to if set
        only reply_to set       -> private message to reply_to
        neither                 -> undeliverable
    """

    content: str
    reply_to: Optional[int] = None
    group_id: Optional[int] = None

    # -----------------------------------------------------------------

    @classmethod
    def reply(cls, msg: InboundMessage, content: str) -> "OutboundMessage":
        """Reply to the sender of ``msg`` where it was said."""
        return cls(content=content, reply_to=msg.sender_id, group_id=msg.group_id)

    @classmethod
    def private(cls, user_id: int, content: str) -> "OutboundMessage":
        return cls(content=content, reply_to=user_id)

    @classmethod
    def group(
        cls,
        group_id: int,
        content: str,
        mention: Optional[int] = None,
    ) -> "OutboundMessage":
        return cls(content=content, reply_to=mention, group_id=group_id)
