"""
Async message bus decoupling the transport from the dispatch loop.
"""

from __future__ import annotations

import asyncio

from cqbot.bus.events import InboundMessage, OutboundMessage


DEFAULT_QUEUE_SIZE = 10


class MessageBus:
    """
    Three bounded queues shared by the bot's loops.

    Architecture:
        transport -> inbound queue -> dispatch loop -> outbound queue -> transport
        producers -> instant queue -> dispatch loop -^

    All queues are bounded, so a full queue stalls its producer instead of
    dropping messages.
    """

    def __init__(self, queue_size: int = DEFAULT_QUEUE_SIZE):
        if queue_size <= 0:
            raise ValueError(f"queue_size must be positive, got {queue_size}")

        self.inbound: asyncio.Queue[InboundMessage] = asyncio.Queue(maxsize=queue_size)
        self.instant: asyncio.Queue[OutboundMessage] = asyncio.Queue(maxsize=queue_size)
        self.outbound: asyncio.Queue[OutboundMessage] = asyncio.Queue(maxsize=queue_size)

    # ---------------------------------------------------------------------
    # Inbound
    # ---------------------------------------------------------------------

    async def publish_inbound(self, msg: InboundMessage) -> None:
        """Publish a classified message from the transport."""
        await self.inbound.put(msg)

    async def consume_inbound(self) -> InboundMessage:
        """Consume next inbound message (blocking)."""
        return await self.inbound.get()

    # ---------------------------------------------------------------------
    # Instant
    # ---------------------------------------------------------------------

    async def publish_instant(self, msg: OutboundMessage) -> None:
        """Inject a message that skips classification and routing."""
        await self.instant.put(msg)

    async def consume_instant(self) -> OutboundMessage:
        return await self.instant.get()

    # ---------------------------------------------------------------------
    # Outbound
    # ---------------------------------------------------------------------

    async def publish_outbound(self, msg: OutboundMessage) -> None:
        """Publish a message for the outbound sender."""
        await self.outbound.put(msg)

    async def consume_outbound(self) -> OutboundMessage:
        return await self.outbound.get()

    # ---------------------------------------------------------------------
    # Metrics
    # ---------------------------------------------------------------------

    @property
    def inbound_size(self) -> int:
        return self.inbound.qsize()

    @property
    def instant_size(self) -> int:
        return self.instant.qsize()

    @property
    def outbound_size(self) -> int:
        return self.outbound.qsize()
