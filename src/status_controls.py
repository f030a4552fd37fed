"""
Status Controls - Keep one status button message at the bottom of a thread.

Every thread with a status gets a single message:

    Thread status controls:
    [Asked] [Investigating]

with one button per legal next status. Whenever the thread moves (new
message, status change, /add-status-buttons) the old message is deleted
and a fresh one is sent, so the buttons stay at the bottom.

Tracking:
    StatusMessageStore maps thread id -> control message id in memory.
    After a restart the map is empty, so when no message is tracked or
    the tracked one cannot be deleted, the last messages of the thread
    are scanned for a bot message with the banner text.
"""

import asyncio
import logging
import weakref
from typing import Callable, Optional

import discord

from src.thread_status import ThreadStatus, next_statuses, status_button_id

logger = logging.getLogger(__name__)

STATUS_BUTTON_CONTENT = "Thread status controls:"
RECENT_MESSAGES_LIMIT = 20


class StatusMessageStore:
    """Thread id -> status control message id, for the process lifetime."""

    def __init__(self) -> None:
        self._messages: dict[int, int] = {}

    def get(self, thread_id: int) -> Optional[int]:
        return self._messages.get(thread_id)

    def set(self, thread_id: int, message_id: int) -> None:
        self._messages[thread_id] = message_id

    def pop(self, thread_id: int) -> Optional[int]:
        return self._messages.pop(thread_id, None)

    def clear(self) -> None:
        self._messages.clear()

    def __contains__(self, thread_id: int) -> bool:
        return thread_id in self._messages

    def __len__(self) -> int:
        return len(self._messages)


def build_status_view(current_status: ThreadStatus) -> discord.ui.View:
    """
    Build the button row for the statuses reachable from `current_status`.

    Button presses are routed by custom id in the client's on_interaction,
    so the view itself has no callbacks.
    """
    view = discord.ui.View(timeout=None)
    for next_status in next_statuses(current_status):
        view.add_item(
            discord.ui.Button(
                label=next_status.label,
                style=discord.ButtonStyle.primary,
                custom_id=status_button_id(next_status),
            )
        )
    return view


class StatusControls:
    """
    Creates and replaces the status control message of threads.

    One asyncio.Lock per thread keeps the delete-then-send sequence of
    concurrent calls for the same thread from interleaving.
    """

    def __init__(
        self,
        store: StatusMessageStore,
        get_bot_user_id: Callable[[], Optional[int]],
        history_limit: int = RECENT_MESSAGES_LIMIT,
    ) -> None:
        """
        Args:
            store: Tracking map, owned by the client.
            get_bot_user_id: Returns the bot's user id (None before login).
            history_limit: How many recent messages to scan on recovery.
        """
        self.store = store
        self._get_bot_user_id = get_bot_user_id
        self._history_limit = history_limit
        # Entries disappear once no call holds or waits on the lock
        self._locks: "weakref.WeakValueDictionary[int, asyncio.Lock]" = weakref.WeakValueDictionary()

    def _lock_for(self, thread_id: int) -> asyncio.Lock:
        lock = self._locks.get(thread_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[thread_id] = lock
        return lock

    async def ensure_at_bottom(self, thread, current_status: ThreadStatus):
        """
        Replace the thread's status controls with a fresh message.

        Args:
            thread: discord.Thread to update.
            current_status: Status the buttons are computed from.

        Returns:
            The new control message.
        """
        async with self._lock_for(thread.id):
            await self._delete_previous(thread)

            view = build_status_view(current_status)
            if view.children:
                message = await thread.send(content=STATUS_BUTTON_CONTENT, view=view)
                # Presses are handled in on_interaction; don't keep the view in the store
                view.stop()
            else:
                message = await thread.send(content=STATUS_BUTTON_CONTENT)

            self.store.set(thread.id, message.id)
            logger.debug(
                f"Status controls for thread {thread.id} ({current_status.value}) -> message {message.id}"
            )
            return message

    async def _delete_previous(self, thread) -> None:
        """Delete the tracked control message, falling back to a history scan."""
        old_message_id = self.store.pop(thread.id)
        if old_message_id:
            try:
                old_message = await thread.fetch_message(old_message_id)
                await old_message.delete()
                return
            except Exception as e:
                logger.warning(f"Could not delete status message {old_message_id} in thread {thread.id}: {e}")

        # Untracked (e.g. after a restart) or already gone: look for it
        try:
            button_message = await self._find_control_message(thread)
            if button_message is not None:
                await button_message.delete()
                logger.info(f"Deleted status message {button_message.id} found in thread {thread.id} history")
        except Exception as e:
            logger.error(f"Error scanning thread {thread.id} for status message: {e}")

    async def _find_control_message(self, thread):
        bot_user_id = self._get_bot_user_id()
        async for message in thread.history(limit=self._history_limit):
            if message.author.id == bot_user_id and message.content == STATUS_BUTTON_CONTENT:
                return message
        return None
