"""Message bus: canonical message types and the bounded queues between loops."""

from cqbot.bus.events import InboundMessage, OutboundMessage
from cqbot.bus.queue import MessageBus

__all__ = ["InboundMessage", "OutboundMessage", "MessageBus"]
