"""
Bot runtime: wires the message bus, the gateway channel and the dispatch
loop together.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from loguru import logger

from cqbot.agent.commands import CommandParser
from cqbot.agent.handler import Handler
from cqbot.agent.loop import DispatchLoop
from cqbot.bus.events import OutboundMessage
from cqbot.bus.queue import MessageBus
from cqbot.channels.base import BaseChannel
from cqbot.channels.cqhttp import CQHttpChannel
from cqbot.config.schema import Config
from cqbot.utils.helpers import import_object


class Bot:
    """
    One gateway connection serving one handler.

    External producers push messages with ``send_instant`` at any time,
    including before ``start``; they are delivered once connected.
    """

    def __init__(
        self,
        config: Config,
        handler: Handler,
        parser: CommandParser,
        channel: Optional[BaseChannel] = None,
    ):
        self.config = config
        self.handler = handler

        self.bus = MessageBus(queue_size=config.bus.queue_size)
        self.channel = channel or CQHttpChannel(config, self.bus)
        self.dispatcher = DispatchLoop(
            self.bus,
            handler,
            parser,
            prefix=config.commands.prefix,
        )

        self._dispatcher_task: Optional[asyncio.Task] = None

    @classmethod
    def from_config(cls, config: Config) -> "Bot":
        """Build the bot for the handler named by ``config.handler``."""
        handler = load_handler(config)
        return cls(config, handler, handler.parser)

    async def send_instant(self, msg: OutboundMessage) -> None:
        """Queue ``msg`` for delivery, bypassing classification and routing."""
        await self.bus.publish_instant(msg)

    async def start(self) -> None:
        """
        Run until the channel fails or stop() is called.

        Raises:
            TransportError: the gateway connection failed or was closed.
        """
        self._dispatcher_task = asyncio.create_task(
            self.dispatcher.run(), name="dispatch-loop"
        )
        try:
            await self.channel.start()
        finally:
            await self._stop_dispatcher()

    async def stop(self) -> None:
        logger.info("Stopping bot ...")
        await self.channel.stop()
        await self._stop_dispatcher()

    async def _stop_dispatcher(self) -> None:
        if self._dispatcher_task is None:
            return

        # May be blocked on a full outbound queue, so cancel rather than stop().
        self._dispatcher_task.cancel()
        try:
            await self._dispatcher_task
        except asyncio.CancelledError:
            pass
        self._dispatcher_task = None


def load_handler(config: Config) -> Handler:
    """
    Import and build ``config.handler``.

    The handler is called with the config and must expose its command
    parser as ``handler.parser``.
    """
    factory = import_object(config.handler)
    handler = factory(config)

    if not isinstance(handler, Handler):
        raise TypeError(f"{config.handler} did not produce a Handler: {handler!r}")
    if not isinstance(getattr(handler, "parser", None), CommandParser):
        raise TypeError(f"{config.handler} has no CommandParser in .parser")

    logger.info("Handler loaded | {}", config.handler)
    return handler
