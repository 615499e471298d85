"""
Handler capability implemented by the integrator.

One instance is shared by reference across every concurrently running
execution, so implementations must be safe to call concurrently.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from cqbot.bus.events import InboundMessage, OutboundMessage


class Handler(ABC):
    """
    Application logic reacting to chat messages.

    Commands are opaque here: they are whatever the configured
    ``CommandParser`` produces.
    """

    @abstractmethod
    async def handle_message(self, msg: InboundMessage) -> Optional[OutboundMessage]:
        """Handle a free-form (non-command) message."""
        ...

    @abstractmethod
    async def handle_command(
        self,
        command: Any,
        msg: InboundMessage,
    ) -> Optional[OutboundMessage]:
        """Handle a parsed and authorized command."""
        ...

    @abstractmethod
    def check_command_auth(self, command: Any, msg: InboundMessage) -> bool:
        """Whether the sender of ``msg`` may run ``command``."""
        ...

    def delegate_unparsable_commands(self) -> bool:
        """
        Send unparsable command lines to ``handle_message`` instead of
        replying with the parser's usage text.
        """
        return False
