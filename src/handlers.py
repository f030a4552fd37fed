"""
Retweet processing for VXT replies.

Flow:
    ┌─────────────────────────────────────────────────────────────┐
    │  VXT bot replies to a message in a monitored channel        │
    │  ↓                                                          │
    │  Fetch the parent message, check its sender                 │
    │  ↓                                                          │
    │  Extract <tweet url> from the parent                        │
    │  ↓                                                          │
    │  Wait for the VXT embed (1s / 5s / 10s)                     │
    │  ↓                                                          │
    │  RETWEET  → retweet reaction on parent, ❌ on the reply      │
    │  UNKNOWN  → manual check report                             │
    │  ORIGINAL → nothing                                         │
    └─────────────────────────────────────────────────────────────┘

Used by the live client (on_message) and by scripts/process_rt.py.
"""

import logging

from config.settings import BotConfig
from src.alerts import AlertManager
from src.embed_waiter import wait_for_embed
from src.retweet_detector import RetweetStatus, detect_retweet
from src.tweet_links import extract_tweet_url

logger = logging.getLogger(__name__)

REJECT_REACTION = "❌"


async def process_vxt_message(
    config: BotConfig,
    message,
    channel_id,
    alerts: AlertManager,
    **wait_kwargs,
) -> RetweetStatus | None:
    """
    Classify the tweet a VXT reply refers to and act on the result.

    Args:
        config: Bot configuration.
        message: The VXT bot's reply (discord.Message).
        channel_id: Channel the reply was posted in.
        alerts: Where unknown results and errors are reported.
        **wait_kwargs: Passed to wait_for_embed (policy, sleep, fetch).

    Returns:
        The classification, or None if the message was skipped or failed.
    """
    channel_config = config.get_channel(channel_id)
    if channel_config is None:
        return None

    reference = message.reference
    if reference is None or not reference.message_id:
        return None

    try:
        original_message = await message.channel.fetch_message(reference.message_id)

        if channel_config.sender is not None and str(original_message.author.id) != channel_config.sender:
            return None

        tweet_url = extract_tweet_url(original_message.content)
        if not tweet_url:
            logger.info(f"No tweet URL found in original message: {original_message.jump_url}")
            return None

        message_with_embed = await wait_for_embed(message, **wait_kwargs)
        if message_with_embed is None or not message_with_embed.embeds:
            logger.info(f"No embed found after waiting: {message.jump_url}")
            return None

        status = detect_retweet(tweet_url, message_with_embed.embeds[0])

        if status is RetweetStatus.RETWEET:
            logger.info(f"Retweet detected: {message.jump_url}")
            await original_message.add_reaction(config.retweet_reaction)
            await message_with_embed.add_reaction(REJECT_REACTION)
        elif status is RetweetStatus.UNKNOWN:
            logger.info(f"Unknown tweet type, reporting for manual check: {message.jump_url}")
            await alerts.manual_check(message.jump_url)
        else:
            logger.info(f"Original tweet detected, no action taken: {message.jump_url}")

        return status

    except Exception as e:
        logger.error(f"Error processing message {message.id}: {e}")
        await alerts.report(f"Error processing message: {e}", message.jump_url)
        return None
