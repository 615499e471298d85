"""
cqbot dispatch loop
-------------------
Binds the inbound and instant queues into the single outbound queue.

Responsibilities:
1. Spawn one task per inbound message running the command router
2. Forward instant messages straight to the outbound queue
3. Keep failures inside the task that raised them
"""

from __future__ import annotations

import asyncio

from loguru import logger

from cqbot.agent.commands import CommandParser
from cqbot.agent.handler import Handler
from cqbot.agent.router import DEFAULT_PREFIX, route
from cqbot.bus.events import InboundMessage
from cqbot.bus.queue import MessageBus


class DispatchLoop:
    """
    Event loop with two wait sources: inbound and instant messages.

    Replies may reach the outbound queue out of arrival order; instant
    messages and replies interleave with no priority between them.
    """

    def __init__(
        self,
        bus: MessageBus,
        handler: Handler,
        parser: CommandParser,
        prefix: str = DEFAULT_PREFIX,
    ):
        self.bus = bus
        self.handler = handler
        self.parser = parser
        self.prefix = prefix

        self._tasks: set[asyncio.Task] = set()
        self._stop = asyncio.Event()
        self._spawned = 0

    # --------------------------------------------------------------------- #
    # Runtime
    # --------------------------------------------------------------------- #

    async def run(self) -> None:
        """Run until stop() is called or the task is cancelled."""
        self._stop.clear()
        logger.info("Dispatch loop started")

        inbound = asyncio.ensure_future(self.bus.consume_inbound())
        instant = asyncio.ensure_future(self.bus.consume_instant())
        stopped = asyncio.ensure_future(self._stop.wait())

        try:
            while True:
                done, _ = await asyncio.wait(
                    {inbound, instant, stopped},
                    return_when=asyncio.FIRST_COMPLETED,
                )

                if inbound in done:
                    self._spawn(inbound.result())
                    inbound = asyncio.ensure_future(self.bus.consume_inbound())

                if instant in done:
                    await self.bus.publish_outbound(instant.result())
                    instant = asyncio.ensure_future(self.bus.consume_instant())

                if stopped in done:
                    break
        finally:
            # Taken off the queue while blocked on a full outbound queue.
            if inbound.done() and not inbound.cancelled() and inbound.exception() is None:
                self._spawn(inbound.result())
            for fut in (inbound, instant, stopped):
                fut.cancel()
            logger.info("Dispatch loop stopped")

    def stop(self) -> None:
        self._stop.set()

    async def drain(self) -> None:
        """Wait until every spawned execution has finished."""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    # --------------------------------------------------------------------- #
    # Executions
    # --------------------------------------------------------------------- #

    def _spawn(self, msg: InboundMessage) -> asyncio.Task:
        self._spawned += 1
        task = asyncio.create_task(self._execute(msg), name=f"dispatch-{self._spawned}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _execute(self, msg: InboundMessage) -> None:
        try:
            reply = await route(msg, self.handler, self.parser, self.prefix)
        except Exception:
            logger.exception(
                "Handler failed | sender={} group={} content={!r}",
                msg.sender_id,
                msg.group_id,
                msg.content,
            )
            return

        if reply is not None:
            await self.bus.publish_outbound(reply)
