"""
Configuration schema definitions.

Priority:
    env (CQBOT_*) > config.json > defaults
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================
# Gateway
# =============================

class GatewayConfig(BaseModel):
    """CQHTTP websocket gateway and the bot's identity."""
    websocket: str = "ws://127.0.0.1:8080"
    bot_id: int = 0      # QQ number the gateway is logged in as
    admin_id: int = 0    # QQ number allowed to run admin commands


# =============================
# Runtime
# =============================

class BusConfig(BaseModel):
    """Bounded queue sizing."""
    queue_size: int = Field(default=10, gt=0)


class CommandsConfig(BaseModel):
    """Command line detection."""
    prefix: str = Field(default="#", min_length=1)


# =============================
# Root Config
# =============================

class Config(BaseSettings):
    """Root configuration schema."""

    model_config = SettingsConfigDict(
        env_prefix="CQBOT_",
        env_nested_delimiter="__",
    )

    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    bus: BusConfig = Field(default_factory=BusConfig)
    commands: CommandsConfig = Field(default_factory=CommandsConfig)

    # module:attr of the Handler class, called with this Config
    handler: str = "cqbot.handlers.echo:EchoHandler"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Values read from config.json arrive as init kwargs; env wins over them.
        return env_settings, init_settings, dotenv_settings, file_secret_settings
