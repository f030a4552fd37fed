"""
Centralized Alert Management

Every problem the bot cannot resolve on its own goes through the
AlertManager: it is always logged, and relayed to the Discord error
channel when one is configured (settings.json "errorChannel").

Without an error channel (or without a client, as in the backlog CLI)
alerts are only logged.

Usage:
    from src.alerts import AlertManager

    alerts = AlertManager(client=client, error_channel_id=config.error_channel)

    await alerts.manual_check(message.jump_url)
    await alerts.report("Error processing message: timeout")
"""

import logging
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

MANUAL_CHECK_MESSAGE = "Cannot determine if tweet is retweet or not. Manual check required."


class AlertLevel(Enum):
    """Alert severity levels."""
    INFO = 1
    WARNING = 2
    ERROR = 3


class AlertManager:
    """
    Logs alerts and relays them to the Discord error channel.

    Relaying never raises: a failure to reach the error channel is logged
    and dropped so handlers can report from their own except blocks.
    """

    def __init__(
        self,
        client=None,
        error_channel_id: Optional[str] = None,
        min_channel_level: AlertLevel = AlertLevel.WARNING,
    ):
        """
        Initialize the AlertManager.

        Args:
            client: discord.Client used to reach the error channel
            error_channel_id: Channel id for reports, None to only log
            min_channel_level: Lowest level relayed to the channel
        """
        self.client = client
        self.error_channel_id = error_channel_id
        self._min_channel_level = min_channel_level

    @property
    def channel_enabled(self) -> bool:
        return self.client is not None and bool(self.error_channel_id)

    async def notify(
        self,
        level: AlertLevel,
        message: str,
        link: Optional[str] = None,
    ) -> None:
        """
        Log an alert and relay it to the error channel if its level is high enough.

        Args:
            level: Alert severity level
            message: Human-readable alert message
            link: Optional message link for follow-up
        """
        self._log_alert(level, message, link)

        if self.channel_enabled and level.value >= self._min_channel_level.value:
            await self._send_channel_alert(message, link)

    def _log_alert(self, level: AlertLevel, message: str, link: Optional[str]) -> None:
        log_msg = f"{message} - {link}" if link else message

        if level == AlertLevel.INFO:
            logger.info(log_msg)
        elif level == AlertLevel.WARNING:
            logger.warning(log_msg)
        else:
            logger.error(log_msg)

    async def _send_channel_alert(self, message: str, link: Optional[str]) -> None:
        """Send alert text to the error channel."""
        try:
            channel_id = int(self.error_channel_id)
            channel = self.client.get_channel(channel_id)
            if channel is None:
                channel = await self.client.fetch_channel(channel_id)

            if not hasattr(channel, "send"):
                logger.warning(f"Error channel {channel_id} is not a text channel")
                return

            await channel.send(f"{message}\n{link}" if link else message)
        except Exception as e:
            # Don't let error channel failures cascade
            logger.error(f"Failed to send error report: {e}")

    # Convenience methods

    async def report(self, message: str, link: Optional[str] = None) -> None:
        """Report an error for human follow-up."""
        await self.notify(AlertLevel.ERROR, message, link)

    async def manual_check(self, link: Optional[str] = None) -> None:
        """Report a tweet whose retweet status could not be determined."""
        await self.notify(AlertLevel.WARNING, MANUAL_CHECK_MESSAGE, link)
