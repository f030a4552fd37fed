"""
Centralized configuration for VXT Triage Bot.

Two sources feed the bot:

    1. Environment variables (Pydantic Settings, optionally from .env):
       DISCORD_TOKEN, SETTINGS_FILE, LOG_LEVEL
    2. settings.json (validated with Pydantic): the VXT bot id, the guild,
       the error channel, the retweet reaction and the monitored channels

Usage:
    from config import settings, load_bot_config
    bot_config = load_bot_config(settings.settings_file)

settings.json example:
    {
        "vxtBot": "1015497909925580830",
        "guild": "123456789012345678",
        "errorChannel": null,
        "retweetReaction": "🔁",
        "channels": {
            "234567890123456789": {"sender": null}
        }
    }
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when startup configuration is missing or invalid."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # =========================================================================
    # Discord
    # =========================================================================
    # Checked at startup by src.bot.validate_settings
    discord_token: str = ""

    # =========================================================================
    # Runtime
    # =========================================================================
    settings_file: str = "settings.json"
    log_level: str = "INFO"


class ChannelConfig(BaseModel):
    """A monitored channel. sender=None accepts tweets posted by anyone."""

    model_config = ConfigDict(frozen=True)

    sender: Optional[str] = None


class BotConfig(BaseModel):
    """Contents of settings.json."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    vxt_bot: str = Field(alias="vxtBot")
    guild: str
    error_channel: Optional[str] = Field(alias="errorChannel")
    retweet_reaction: str = Field(alias="retweetReaction")
    channels: Dict[str, ChannelConfig]

    def get_channel(self, channel_id) -> Optional[ChannelConfig]:
        """Return the config for a monitored channel, or None."""
        return self.channels.get(str(channel_id))


def load_bot_config(path: str | Path = "settings.json") -> BotConfig:
    """
    Load and validate settings.json.

    Args:
        path: Location of the settings file.

    Returns:
        Validated BotConfig.

    Raises:
        ConfigError: If the file is missing, is not JSON or fails validation.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    try:
        bot_config = BotConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info(
        f"Loaded {path}: {len(bot_config.channels)} monitored channel(s), "
        f"error channel {'set' if bot_config.error_channel else 'not set'}"
    )
    return bot_config


# Singleton instance for global settings
settings = Settings()
