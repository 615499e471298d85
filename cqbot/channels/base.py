"""Base channel abstraction for gateway transports."""

from __future__ import annotations

from abc import ABC, abstractmethod

from cqbot.agent.classifier import classify
from cqbot.bus.events import OutboundMessage
from cqbot.bus.queue import MessageBus
from cqbot.config.schema import Config


class BaseChannel(ABC):
    """
    Owns one gateway connection.

    Inbound frames are classified and published to ``bus.inbound``;
    messages from ``bus.outbound`` are written back by a single writer.
    """

    #: Channel unique identifier
    name: str = "base"

    def __init__(self, config: Config, bus: MessageBus):
        self.config = config
        self.bus = bus
        self._running: bool = False

    # =============================
    # Lifecycle
    # =============================

    @abstractmethod
    async def start(self) -> None:
        """
        Connect and serve the connection until it fails.

        Never returns normally; a lost connection is raised.
        """
        ...

    @abstractmethod
    async def stop(self) -> None:
        """Close the connection."""
        ...

    # =============================
    # Outbound
    # =============================

    @abstractmethod
    async def send(self, msg: OutboundMessage) -> None:
        """Convert and write one outbound message."""
        ...

    # =============================
    # Inbound handling
    # =============================

    async def handle_frame(self, frame: str) -> None:
        """
        Unified ingress pipeline.

        Flow:
            frame -> classify -> MessageBus.inbound
        """
        msg = classify(frame, self.config.gateway.bot_id)
        if msg is not None:
            await self.bus.publish_inbound(msg)

    # =============================
    # Runtime state
    # =============================

    @property
    def is_running(self) -> bool:
        return self._running
