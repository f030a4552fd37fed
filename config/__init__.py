"""
Configuration package for VXT Triage Bot.

Modules:
    settings: Environment settings (Pydantic Settings) and settings.json loader
"""

from config.settings import (
    BotConfig,
    ChannelConfig,
    ConfigError,
    Settings,
    load_bot_config,
    settings,
)

__all__ = [
    "BotConfig",
    "ChannelConfig",
    "ConfigError",
    "Settings",
    "load_bot_config",
    "settings",
]
