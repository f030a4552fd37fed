#!/usr/bin/env python3
"""
Run retweet detection over existing messages of a monitored channel.

Useful after downtime: VXT replies posted while the bot was offline are
fetched and processed one by one, oldest first. Reports are only logged,
nothing is posted to the error channel.

Exit codes:
    0 - Done
    1 - Invalid arguments, configuration or channel

Usage:
    python scripts/process_rt.py --channel 234567890123456789 --count 100
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import discord

# Add project root
sys.path.append(str(Path(__file__).parent.parent))

from config import settings  # noqa: E402
from config.settings import BotConfig, ConfigError  # noqa: E402
from src.alerts import AlertManager  # noqa: E402
from src.bot import configure_logging, validate_settings  # noqa: E402
from src.discord_client import build_intents  # noqa: E402
from src.handlers import process_vxt_message  # noqa: E402

logger = logging.getLogger("process_rt")


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"count must be a positive integer, got {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"count must be a positive integer, got {value!r}")
    return number


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="process-rt",
        description="Process RT detection for existing messages on a channel",
    )
    parser.add_argument("-c", "--channel", required=True, help="Channel ID to process")
    parser.add_argument("-n", "--count", required=True, type=positive_int, help="Number of messages to process")
    return parser.parse_args(argv)


def select_vxt_replies(messages, vxt_bot: str) -> list:
    """VXT bot replies among `messages`, oldest first."""
    replies = [
        message for message in messages
        if str(message.author.id) == vxt_bot and message.reference is not None
    ]
    return sorted(replies, key=lambda message: message.id)


async def process_channel(client: discord.Client, bot_config: BotConfig, channel_id: str, count: int) -> int:
    """
    Fetch the last `count` messages of a channel and process VXT replies.

    Returns:
        Number of VXT replies processed.
    """
    channel = await client.fetch_channel(int(channel_id))
    if not isinstance(channel, discord.abc.Messageable) or isinstance(channel, discord.abc.PrivateChannel):
        raise ValueError(f"Channel {channel_id} is not a guild text channel")

    logger.info(f"Fetching {count} messages...")
    messages = [message async for message in channel.history(limit=count)]
    logger.info(f"Fetched {len(messages)} messages")

    vxt_messages = select_vxt_replies(messages, bot_config.vxt_bot)
    logger.info(f"Found {len(vxt_messages)} VXT reply messages to process")

    # Log-only reporter: the CLI never posts to the error channel
    alerts = AlertManager()

    # Sequential on purpose, to stay within Discord rate limits
    for index, message in enumerate(vxt_messages, start=1):
        logger.info(f"Processing message {index}/{len(vxt_messages)}...")
        await process_vxt_message(bot_config, message, channel_id, alerts)

    return len(vxt_messages)


async def run(channel_id: str, count: int, bot_config: BotConfig) -> None:
    intents = build_intents()
    client = discord.Client(intents=intents)

    async with client:
        logger.info("Connecting to Discord...")
        await client.login(settings.discord_token)
        logger.info(f"Processing last {count} messages in channel {channel_id}...")
        await process_channel(client, bot_config, channel_id, count)
        logger.info("Processing complete!")


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(settings.log_level)

    try:
        bot_config = validate_settings(settings)
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if bot_config.get_channel(args.channel) is None:
        logger.error(f"Channel {args.channel} is not in the configuration")
        return 1

    try:
        asyncio.run(run(args.channel, args.count, bot_config))
    except Exception as e:
        logger.error(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
