"""
Discord Client - Event wiring and slash commands.

This module connects the Discord gateway to the bot features:
- VXT replies in monitored channels → retweet detection
- 👀 reaction on a VXT reply → bug report thread named after the tweet author
- Status buttons in threads → status transition + fresh buttons
- Any new message in a status thread → buttons moved back to the bottom

Slash Commands (registered on the configured guild):
    /create-thread name:<text> - Create a bug report thread in a monitored channel
    /add-status-buttons        - Attach status buttons to the current thread

Thread Flow:
    ┌─────────────────────────────────────────────────────────────┐
    │  👀 on a VXT reply  /  /create-thread                        │
    │  ↓                                                          │
    │  Thread "🔍 <author>" created, user mentioned               │
    │  ↓                                                          │
    │  "Thread status controls:" [Asked] [Investigating]          │
    │  ↓                                                          │
    │  Button press → validate → rename thread → new buttons      │
    └─────────────────────────────────────────────────────────────┘

Configuration:
    DISCORD_TOKEN: Bot token (environment)
    settings.json: guild, vxtBot, channels, errorChannel, retweetReaction
"""

import logging
from typing import Optional

import discord
from discord import app_commands

from config.settings import BotConfig
from src.alerts import AlertManager
from src.embed_waiter import wait_for_embed
from src.handlers import process_vxt_message
from src.status_controls import StatusControls, StatusMessageStore
from src.thread_status import (
    INITIAL_STATUS,
    STATUS_BUTTON_PREFIX,
    extract_status_from_name,
    format_thread_name,
    is_valid_transition,
    parse_status_button_id,
    update_thread_name_status,
)
from src.tweet_links import build_fx_status_url, extract_tweet_id, get_embed_author_name

logger = logging.getLogger(__name__)

THREAD_TRIGGER_EMOJI = "👀"


def build_intents() -> discord.Intents:
    """Gateway intents needed by the bot."""
    intents = discord.Intents.default()
    intents.guilds = True
    intents.guild_messages = True
    intents.guild_reactions = True
    intents.message_content = True
    return intents


class TriageClient(discord.Client):
    """
    Discord client for retweet detection and bug report threads.

    The status message store is created here (or injected) and lives as
    long as the client: it is empty after every restart.
    """

    def __init__(
        self,
        config: BotConfig,
        *,
        alerts: Optional[AlertManager] = None,
        store: Optional[StatusMessageStore] = None,
        **options,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Validated settings.json contents.
            alerts: Error reporter. Defaults to one bound to this client.
            store: Status message tracking map. Defaults to a new empty one.
        """
        options.setdefault("intents", build_intents())
        super().__init__(**options)

        self.config = config
        self.alerts = alerts or AlertManager(client=self, error_channel_id=config.error_channel)
        self.status_store = store or StatusMessageStore()
        self.status_controls = StatusControls(self.status_store, self._bot_user_id)

        self.tree = app_commands.CommandTree(self)
        self._guild = discord.Object(id=int(config.guild))
        self._register_commands()

    def _bot_user_id(self) -> Optional[int]:
        return self.user.id if self.user else None

    # =========================================================================
    # Setup
    # =========================================================================

    def _register_commands(self) -> None:
        """Add the slash commands to the tree, scoped to the configured guild."""

        @self.tree.command(
            name="create-thread",
            description="Create a new bug report thread",
            guild=self._guild,
        )
        @app_commands.describe(name="The name for the thread (without emoji)")
        async def create_thread(interaction: discord.Interaction, name: str):
            await self.handle_create_thread_command(interaction, name)

        @self.tree.command(
            name="add-status-buttons",
            description="Add status control buttons to an existing thread",
            guild=self._guild,
        )
        async def add_status_buttons(interaction: discord.Interaction):
            await self.handle_add_status_buttons_command(interaction)

    async def setup_hook(self) -> None:
        """Register slash commands before connecting to the gateway."""
        try:
            logger.info("Registering slash commands...")
            await self.tree.sync(guild=self._guild)
            logger.info("Slash commands registered successfully")
        except Exception as e:
            logger.error(f"Error registering slash commands: {e}")

    async def on_ready(self) -> None:
        logger.info(f"Logged in as {self.user} (id={self._bot_user_id()})")

    # =========================================================================
    # Messages
    # =========================================================================

    async def on_message(self, message: discord.Message) -> None:
        """Handle VXT replies and keep thread buttons at the bottom."""
        if message.author.id == self._bot_user_id():
            return

        if isinstance(message.channel, discord.Thread):
            current_status = extract_status_from_name(message.channel.name)
            if current_status is None:
                return
            try:
                await self.status_controls.ensure_at_bottom(message.channel, current_status)
            except Exception as e:
                logger.error(f"Error moving status buttons in thread {message.channel.id}: {e}")
                await self.alerts.report(f"Error moving status buttons: {e}", message.jump_url)
            return

        if self.config.get_channel(message.channel.id) is None:
            return

        if str(message.author.id) != self.config.vxt_bot:
            return

        await process_vxt_message(self.config, message, message.channel.id, self.alerts)

    # =========================================================================
    # Reactions
    # =========================================================================

    async def on_raw_reaction_add(self, payload: discord.RawReactionActionEvent) -> None:
        """Create a bug report thread when someone reacts 👀 to a VXT reply."""
        if payload.emoji.name != THREAD_TRIGGER_EMOJI:
            return

        if payload.member is None or payload.member.bot:
            return

        if self.config.get_channel(payload.channel_id) is None:
            return

        try:
            channel = self.get_channel(payload.channel_id)
            if channel is None:
                channel = await self.fetch_channel(payload.channel_id)
            message = await channel.fetch_message(payload.message_id)
        except Exception as e:
            logger.error(f"Error fetching reacted message {payload.message_id}: {e}")
            return

        if str(message.author.id) != self.config.vxt_bot:
            return

        await self.create_thread_from_message(message, payload.user_id)

    async def create_thread_from_message(self, message: discord.Message, user_id: int, **wait_kwargs):
        """
        Start a status thread on a VXT reply, named after the tweet author.

        Args:
            message: VXT reply to start the thread from.
            user_id: User who asked for the thread; mentioned inside it.
            **wait_kwargs: Passed to wait_for_embed.

        Returns:
            The created thread, or None if it could not be created.
        """
        try:
            message_with_embed = await wait_for_embed(message, **wait_kwargs)
            if message_with_embed is None or not message_with_embed.embeds:
                logger.info(f"No embed found for thread creation: {message.jump_url}")
                return None

            author_name = get_embed_author_name(message_with_embed.embeds[0])
            if not author_name:
                logger.info(f"No author name found in embed: {message.jump_url}")
                return None

            if not isinstance(message.channel, discord.TextChannel):
                logger.info(f"Cannot create thread in non-text channel {message.channel.id}")
                return None

            thread = await message.create_thread(
                name=format_thread_name(author_name, INITIAL_STATUS),
            )

            tweet_id = extract_tweet_id(message.content)
            if tweet_id:
                await thread.send(build_fx_status_url(tweet_id))

            await thread.send(f"<@{user_id}>")

            await self.status_controls.ensure_at_bottom(thread, INITIAL_STATUS)
            logger.info(f"Created thread {thread.id} for {author_name}")
            return thread

        except Exception as e:
            logger.error(f"Error creating thread: {e}")
            await self.alerts.report(f"Error creating thread: {e}", message.jump_url)
            return None

    # =========================================================================
    # Interactions
    # =========================================================================

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        """Route status button presses. Slash commands go through the tree."""
        if interaction.type != discord.InteractionType.component:
            return

        custom_id = (interaction.data or {}).get("custom_id", "")
        if custom_id.startswith(STATUS_BUTTON_PREFIX):
            await self.handle_status_button(interaction, custom_id)

    async def handle_status_button(self, interaction: discord.Interaction, custom_id: str) -> None:
        """Validate and apply a status transition from a button press."""
        try:
            channel = interaction.channel
            if not isinstance(channel, discord.Thread):
                await _reply_ephemeral(interaction, "This command can only be used in threads.")
                return

            current_status = extract_status_from_name(channel.name)
            if current_status is None:
                await _reply_ephemeral(interaction, "Could not determine current thread status.")
                return

            new_status = parse_status_button_id(custom_id)
            if new_status is None or not is_valid_transition(current_status, new_status):
                requested = new_status.value if new_status else custom_id[len(STATUS_BUTTON_PREFIX):]
                await _reply_ephemeral(
                    interaction,
                    f"Invalid status transition from {current_status.value} to {requested}.",
                )
                return

            await channel.edit(name=update_thread_name_status(channel.name, new_status))
            await interaction.response.defer()

            logger.info(f"Thread {channel.id} status updated to {new_status.label}")

            await self.status_controls.ensure_at_bottom(channel, new_status)

        except Exception as e:
            logger.error(f"Error handling button interaction: {e}")
            if not interaction.response.is_done():
                await interaction.response.send_message(
                    "An error occurred while updating the status.",
                    ephemeral=True,
                )
            await self.alerts.report(f"Error updating thread status: {e}", _interaction_link(interaction))

    async def handle_create_thread_command(self, interaction: discord.Interaction, name: str) -> None:
        """/create-thread: new status thread in a monitored text channel."""
        try:
            if self.config.get_channel(interaction.channel_id) is None:
                await _reply_ephemeral(interaction, "This command can only be used in monitored channels.")
                return

            channel = interaction.channel
            if not isinstance(channel, discord.TextChannel):
                await _reply_ephemeral(interaction, "This command can only be used in text channels.")
                return

            await interaction.response.defer(ephemeral=True, thinking=True)

            thread = await channel.create_thread(
                name=format_thread_name(name, INITIAL_STATUS),
                type=discord.ChannelType.public_thread,
                reason=f"Created by {interaction.user} via command",
            )

            await thread.send(f"<@{interaction.user.id}>")
            await self.status_controls.ensure_at_bottom(thread, INITIAL_STATUS)

            await _reply_ephemeral(interaction, f"Thread created: <#{thread.id}>")

        except Exception as e:
            logger.error(f"Error creating thread via command: {e}")
            await self.alerts.report(f"Error creating thread via command: {e}", _interaction_link(interaction))
            await _reply_ephemeral(interaction, "An error occurred while creating the thread.")

    async def handle_add_status_buttons_command(self, interaction: discord.Interaction) -> None:
        """/add-status-buttons: (re)attach buttons to a thread that has a status."""
        try:
            channel = interaction.channel
            if not isinstance(channel, discord.Thread):
                await _reply_ephemeral(interaction, "This command can only be used in threads.")
                return

            current_status = extract_status_from_name(channel.name)
            if current_status is None:
                await _reply_ephemeral(
                    interaction,
                    "Could not determine thread status. "
                    "Please ensure the thread name has a status emoji prefix.",
                )
                return

            await interaction.response.defer(ephemeral=True, thinking=True)
            await self.status_controls.ensure_at_bottom(channel, current_status)
            await _reply_ephemeral(interaction, "Status buttons added successfully!")

        except Exception as e:
            logger.error(f"Error adding status buttons: {e}")
            await self.alerts.report(f"Error adding status buttons: {e}", _interaction_link(interaction))
            await _reply_ephemeral(interaction, "An error occurred while adding status buttons.")


def _interaction_link(interaction: discord.Interaction) -> Optional[str]:
    """Permalink of the pressed message, else of the channel it happened in."""
    if interaction.message is not None:
        return interaction.message.jump_url
    channel = interaction.channel
    return getattr(channel, "jump_url", None)


async def _reply_ephemeral(interaction: discord.Interaction, content: str) -> None:
    """Reply to an interaction, using the followup webhook once it has been answered."""
    if interaction.response.is_done():
        await interaction.followup.send(content, ephemeral=True)
    else:
        await interaction.response.send_message(content, ephemeral=True)
