"""CQHTTP / OneBot v11 wire format."""

from cqbot.protocol.actions import ConversionError, SendAction, SendParams
from cqbot.protocol.events import (
    MessageEnvelope,
    MessageType,
    PostEnvelope,
    PostType,
    is_mentioned,
    strip_cq_codes,
)

__all__ = [
    "ConversionError",
    "SendAction",
    "SendParams",
    "MessageEnvelope",
    "MessageType",
    "PostEnvelope",
    "PostType",
    "is_mentioned",
    "strip_cq_codes",
]
