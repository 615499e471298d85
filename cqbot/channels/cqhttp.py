"""
CQHTTP channel: websocket connection to a go-cqhttp / OneBot gateway.

Architecture:
    QQ
     ↓
    CQHTTP gateway (forward WebSocket)
     ↓
    CQHttpChannel  ── reader → classify → MessageBus.inbound
                   └─ writer ← MessageBus.outbound
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import websockets
from loguru import logger
from websockets.exceptions import WebSocketException

from cqbot.bus.events import OutboundMessage
from cqbot.bus.queue import MessageBus
from cqbot.channels.base import BaseChannel
from cqbot.config.schema import Config
from cqbot.protocol.actions import ConversionError, SendAction
from cqbot.utils.helpers import truncate


class TransportError(RuntimeError):
    """The gateway connection failed or was closed."""


class CQHttpChannel(BaseChannel):
    """
    One gateway connection, read by one task and written by another.

    The connection is not re-established: any read or write failure ends
    the channel with ``TransportError`` and recovery is left to whoever
    runs the process. A close requested through ``stop`` returns normally.
    """

    name = "cqhttp"

    def __init__(self, config: Config, bus: MessageBus):
        super().__init__(config, bus)
        self._ws: Optional[Any] = None
        self._stop_requested = False

    # =============================
    # Lifecycle
    # =============================

    async def start(self) -> None:
        url = self.config.gateway.websocket
        logger.info("CQHTTP channel connecting | gateway={}", url)

        try:
            async with websockets.connect(url) as ws:
                logger.info("CQHTTP gateway connected | bot={}", self.config.gateway.bot_id)
                await self.run(ws)
        except (OSError, WebSocketException) as e:
            raise TransportError(f"gateway connection failed: {e}") from e

    async def run(self, ws: Any) -> None:
        """
        Serve an open connection.

        ``ws`` must be async-iterable over incoming frames and expose an
        awaitable ``send(str)``.
        """
        self._ws = ws
        self._running = True
        self._stop_requested = False

        reader = asyncio.create_task(self._read_loop(ws), name="cqhttp-reader")
        writer = asyncio.create_task(self._write_loop(), name="cqhttp-writer")

        try:
            done, _ = await asyncio.wait(
                {reader, writer},
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            for task in (reader, writer):
                task.cancel()
            await asyncio.gather(reader, writer, return_exceptions=True)
            self._running = False
            self._ws = None

        if self._stop_requested:
            logger.info("CQHTTP connection closed on request")
            return

        for task in done:
            exc = task.exception()
            if exc is not None:
                raise TransportError(f"{task.get_name()} failed: {exc}") from exc

        raise TransportError("gateway closed the connection")

    async def stop(self) -> None:
        self._running = False
        self._stop_requested = True

        if self._ws is not None:
            await self._ws.close()

        logger.info("CQHTTP channel shutdown complete")

    # =============================
    # Outbound
    # =============================

    async def send(self, msg: OutboundMessage) -> None:
        try:
            action = SendAction.from_outbound(msg)
        except ConversionError as e:
            logger.error("Dropping undeliverable message | reason={} msg={}", e, msg)
            return

        if self._ws is None:
            raise TransportError("gateway not connected")

        frame = action.to_frame()
        logger.debug("Frame sent | {}", truncate(frame, 200))
        await self._ws.send(frame)

    async def _write_loop(self) -> None:
        """Single writer: frames go out in dequeue order."""
        while True:
            msg = await self.bus.consume_outbound()
            await self.send(msg)

    # =============================
    # Inbound
    # =============================

    async def _read_loop(self, ws: Any) -> None:
        async for frame in ws:
            if isinstance(frame, bytes):
                logger.debug("Ignoring binary frame | size={}", len(frame))
                continue

            logger.debug("Frame received | {}", truncate(frame, 200))
            await self.handle_frame(frame)
