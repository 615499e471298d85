"""
Inbound CQHTTP event envelopes.

The gateway pushes one JSON object per websocket frame. Every frame carries
a ``post_type`` discriminator; only ``message`` posts are decoded further.
"""

from __future__ import annotations

import re
from enum import Enum
from functools import lru_cache
from typing import Final, Optional

from pydantic import BaseModel, ConfigDict


# =============================
# Markup
# =============================

# [CQ:face,id=1], [CQ:at,qq=123], [CQ:image,file=...] ...
CQ_CODE_RE: Final = re.compile(r"\[CQ:.*?\]")


def strip_cq_codes(text: str) -> str:
    """Remove every CQ code from ``text`` and trim the result."""
    # Removing one code can join its neighbours into a new one: "[[CQ:x]CQ:y]".
    while True:
        stripped = CQ_CODE_RE.sub("", text)
        if stripped == text:
            return stripped.strip()
        text = stripped


def is_mentioned(raw_message: str, qq: int) -> bool:
    """Whether ``raw_message`` carries an @-mention of ``qq``."""
    return _mention_re(qq).search(raw_message) is not None


@lru_cache(maxsize=32)
def _mention_re(qq: int) -> re.Pattern:
    # A trailing digit would mean a different, longer QQ number.
    return re.compile(rf"CQ:at,qq={qq}(?!\d)")


# =============================
# Envelopes
# =============================

class PostType(str, Enum):
    MESSAGE = "message"
    META_EVENT = "meta_event"
    REQUEST = "request"
    NOTICE = "notice"


class MessageType(str, Enum):
    GROUP = "group"
    PRIVATE = "private"


class PostEnvelope(BaseModel):
    """Only used to read the ``post_type`` discriminator."""

    model_config = ConfigDict(extra="ignore")

    post_type: PostType


class Sender(BaseModel):
    model_config = ConfigDict(extra="ignore")

    user_id: Optional[int] = None
    nickname: str = ""
    sex: str = ""
    age: int = 0


class MessageEnvelope(BaseModel):
    """A ``message`` post, private or group."""

    model_config = ConfigDict(extra="ignore")

    post_type: PostType
    message_type: MessageType

    time: int           # unix timestamp
    self_id: int        # bot QQ number
    user_id: int        # sender QQ number

    message: str
    raw_message: str
    message_id: int

    group_id: Optional[int] = None
    sub_type: Optional[str] = None
    sender: Optional[Sender] = None
    font: int = 0

    @property
    def content(self) -> str:
        return strip_cq_codes(self.message)

    def mentions(self, qq: int) -> bool:
        return is_mentioned(self.raw_message, qq)
