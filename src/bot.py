"""
Main entry point for VXT Triage Bot.

Responsibilities:
    1. Configure logging
    2. Validate environment settings and settings.json (fail fast)
    3. Build the Discord client and run it until shutdown

Startup:
    ┌─────────────────────────────────────────────────────────────┐
    │  1. Load .env / environment (DISCORD_TOKEN, SETTINGS_FILE)  │
    │  2. Load and validate settings.json                         │
    │     → any problem: log and exit(1) before connecting        │
    │  3. Create TriageClient (status store, alerts, commands)    │
    │  4. Connect; slash commands synced in setup_hook            │
    └─────────────────────────────────────────────────────────────┘

Entry Point:
    python -m src.bot
"""

import asyncio
import logging
import sys

from config import settings
from config.settings import BotConfig, ConfigError, Settings, load_bot_config
from src import __version__
from src.discord_client import TriageClient

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging the same way for the bot and scripts."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Suppress noisy gateway/HTTP logs
    logging.getLogger("discord.http").setLevel(logging.WARNING)
    logging.getLogger("discord.gateway").setLevel(logging.WARNING)


def validate_settings(env: Settings) -> BotConfig:
    """
    Validate required configuration at startup.

    Args:
        env: Environment settings.

    Returns:
        The validated settings.json contents.

    Raises:
        ConfigError: If the token is missing or settings.json is invalid.
    """
    if not env.discord_token:
        raise ConfigError("Missing required configuration: DISCORD_TOKEN")

    bot_config = load_bot_config(env.settings_file)

    try:
        int(bot_config.guild)
    except ValueError:
        raise ConfigError(f"Invalid guild id: {bot_config.guild!r}")

    logger.info("Configuration validation passed")
    return bot_config


async def run(env: Settings, bot_config: BotConfig) -> None:
    """Run the client until it disconnects or is cancelled."""
    client = TriageClient(bot_config)
    async with client:
        await client.start(env.discord_token)


def main() -> None:
    """
    Main entry point for the bot.

    Exits with status 1 if configuration is invalid.
    """
    configure_logging(settings.log_level)

    logger.info("=" * 60)
    logger.info(f"Starting VXT Triage Bot v{__version__}")
    logger.info("=" * 60)

    try:
        bot_config = validate_settings(settings)
    except ConfigError as e:
        logger.error(f"Invalid configuration - exiting: {e}")
        sys.exit(1)

    try:
        asyncio.run(run(settings, bot_config))
    except KeyboardInterrupt:
        logger.info("Shutdown signal received")

    logger.info("Bot shutdown complete")


if __name__ == "__main__":
    main()
