from cqbot.channels.base import BaseChannel
from cqbot.channels.cqhttp import CQHttpChannel, TransportError

__all__ = ["BaseChannel", "CQHttpChannel", "TransportError"]
