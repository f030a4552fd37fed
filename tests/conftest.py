"""
Pytest fixtures and configuration.

This module provides shared fixtures for all tests:
- A BotConfig matching a typical settings.json
- Factories for mocked discord.py messages, threads and interactions
- A no-op sleep so embed waits run instantly

Usage:
    async def test_something(bot_config, make_message):
        message = make_message(content="<https://x.com/a/status/1>")
"""

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from config.settings import BotConfig


MONITORED_CHANNEL_ID = 111
OPEN_CHANNEL_ID = 112
ERROR_CHANNEL_ID = 999
VXT_BOT_ID = 500
SENDER_ID = 42
BOT_USER_ID = 777
RETWEET_REACTION = "🔁"


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test requiring multiple components"
    )


# =============================================================================
# Helpers
# =============================================================================

def async_iter(items):
    """Async iterator over `items`, shaped like discord.py's history()."""
    async def _gen():
        for item in items:
            yield item
    return _gen()


def make_embed(url=None, author_name=None) -> discord.Embed:
    embed = discord.Embed(url=url)
    if author_name:
        embed.set_author(name=author_name)
    return embed


# =============================================================================
# Config Fixtures
# =============================================================================

@pytest.fixture
def bot_config() -> BotConfig:
    """settings.json with one sender-restricted and one open channel."""
    return BotConfig.model_validate({
        "vxtBot": str(VXT_BOT_ID),
        "guild": "1",
        "errorChannel": str(ERROR_CHANNEL_ID),
        "retweetReaction": RETWEET_REACTION,
        "channels": {
            str(MONITORED_CHANNEL_ID): {"sender": str(SENDER_ID)},
            str(OPEN_CHANNEL_ID): {"sender": None},
        },
    })


@pytest.fixture
def mock_alerts():
    """AlertManager stand-in recording reports."""
    alerts = AsyncMock()
    alerts.report = AsyncMock()
    alerts.manual_check = AsyncMock()
    return alerts


@pytest.fixture
def no_sleep():
    """Sleep replacement recording requested delays."""
    return AsyncMock()


# =============================================================================
# Discord Object Factories
# =============================================================================

@pytest.fixture
def make_message():
    """
    Factory for mocked discord.Message objects.

    The returned message has AsyncMock add_reaction/delete/create_thread,
    and its channel has an AsyncMock fetch_message.
    """
    def _make(
        message_id=1,
        content="",
        author_id=SENDER_ID,
        embeds=None,
        reference_id=None,
        channel=None,
        channel_id=MONITORED_CHANNEL_ID,
    ):
        message = MagicMock()
        message.id = message_id
        message.content = content
        message.author.id = author_id
        message.embeds = embeds or []
        message.jump_url = f"https://discord.com/channels/1/{channel_id}/{message_id}"
        message.add_reaction = AsyncMock()
        message.delete = AsyncMock()
        message.create_thread = AsyncMock()

        if reference_id is None:
            message.reference = None
        else:
            message.reference.message_id = reference_id

        if channel is None:
            channel = MagicMock(spec=discord.TextChannel)
            channel.id = channel_id
            channel.fetch_message = AsyncMock()
        message.channel = channel
        return message

    return _make


@pytest.fixture
def make_thread():
    """
    Factory for mocked discord.Thread objects.

    `history` yields the given messages (most recent first) on every call.
    `send` returns a new message with an increasing id.
    """
    def _make(thread_id=300, name="🔍 someuser", history=None):
        thread = MagicMock(spec=discord.Thread)
        thread.id = thread_id
        thread.name = name
        thread.edit = AsyncMock()
        thread.fetch_message = AsyncMock()

        history_items = list(history or [])
        thread.history = MagicMock(side_effect=lambda limit=None: async_iter(history_items[:limit]))

        sent_ids = iter(range(1000, 2000))

        async def _send(*args, **kwargs):
            sent = MagicMock()
            sent.id = next(sent_ids)
            sent.content = kwargs.get("content", args[0] if args else None)
            sent.view = kwargs.get("view")
            return sent

        thread.send = AsyncMock(side_effect=_send)
        return thread

    return _make


@pytest.fixture
def make_interaction():
    """Factory for mocked component/command interactions."""
    def _make(channel=None, custom_id=None, channel_id=None, user_id=SENDER_ID):
        interaction = MagicMock()
        interaction.type = discord.InteractionType.component
        interaction.data = {"custom_id": custom_id} if custom_id is not None else {}
        interaction.channel = channel
        interaction.channel_id = channel_id if channel_id is not None else getattr(channel, "id", None)
        interaction.user.id = user_id

        state = {"done": False}

        async def _respond(*args, **kwargs):
            state["done"] = True

        interaction.response.is_done = MagicMock(side_effect=lambda: state["done"])
        interaction.response.send_message = AsyncMock(side_effect=_respond)
        interaction.response.defer = AsyncMock(side_effect=_respond)
        interaction.followup.send = AsyncMock()
        return interaction

    return _make
