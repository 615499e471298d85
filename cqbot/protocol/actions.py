"""
Outbound CQHTTP actions.

    {"action": "send_group_msg",   "params": {"group_id": G, "message": "..."}}
    {"action": "send_private_msg", "params": {"user_id": U, "message": "..."}}
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel

from cqbot.bus.events import OutboundMessage


class ConversionError(ValueError):
    """An outbound message has no derivable delivery target."""


class SendParams(BaseModel):
    user_id: Optional[int] = None
    group_id: Optional[int] = None
    message: str


class SendAction(BaseModel):
    action: Literal["send_private_msg", "send_group_msg"]
    params: SendParams

    # -------------------------
    # Constructors
    # -------------------------

    @classmethod
    def private_msg(cls, user_id: int, message: str) -> "SendAction":
        return cls(
            action="send_private_msg",
            params=SendParams(user_id=user_id, message=message),
        )

    @classmethod
    def group_msg(
        cls,
        group_id: int,
        message: str,
        mention: Optional[int] = None,
    ) -> "SendAction":
        if mention is not None:
            message = f"[CQ:at,qq={mention}] {message}"
        return cls(
            action="send_group_msg",
            params=SendParams(group_id=group_id, message=message),
        )

    @classmethod
    def from_outbound(cls, msg: OutboundMessage) -> "SendAction":
        """
        Resolve which action applies to ``msg``.

        Raises:
            ConversionError: neither group_id nor reply_to is set.
        """
        if msg.group_id is not None:
            return cls.group_msg(msg.group_id, msg.content, mention=msg.reply_to)
        if msg.reply_to is not None:
            return cls.private_msg(msg.reply_to, msg.content)
        raise ConversionError("missing group id and user id")

    # -------------------------
    # Encoding
    # -------------------------

    def to_frame(self) -> str:
        """Serialize to one websocket text frame."""
        return self.model_dump_json(exclude_none=True)
