"""
Embed Waiter - Bounded polling for embeds that appear after a message.

Discord unfurls links asynchronously, so a VXT reply often arrives
without its embed. The waiter re-fetches the message on a fixed delay
schedule until an embed shows up:

    check now -> sleep 1s -> fetch -> sleep 5s -> fetch -> sleep 10s -> fetch

Worst case is 16 seconds and 3 fetches. Fetch errors are not retried.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_result,
    stop_after_attempt,
    wait_chain,
    wait_fixed,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmbedRetryPolicy:
    """Delays (in seconds) to wait before each re-fetch."""
    delays: tuple[float, ...] = (1.0, 5.0, 10.0)

    @property
    def max_attempts(self) -> int:
        return len(self.delays)

    @property
    def total_delay(self) -> float:
        return sum(self.delays)


DEFAULT_EMBED_POLICY = EmbedRetryPolicy()


def _has_embed(message: Any) -> bool:
    return bool(getattr(message, "embeds", None))


async def wait_for_embed(
    message: Any,
    *,
    policy: EmbedRetryPolicy = DEFAULT_EMBED_POLICY,
    fetch: Optional[Callable[[int], Awaitable[Any]]] = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> Optional[Any]:
    """
    Wait until a message carries at least one embed.

    Args:
        message: Message to check (discord.Message).
        policy: Delay schedule between re-fetches.
        fetch: Coroutine fetching a message by id.
            Defaults to message.channel.fetch_message.
        sleep: Coroutine used for delays. Injectable for tests.

    Returns:
        The message (original or re-fetched) with an embed, or None if
        no embed appeared within the policy.
    """
    if _has_embed(message):
        return message

    if fetch is None:
        fetch = message.channel.fetch_message

    # First attempt is the message as received, every later one a re-fetch
    checked = 0

    async def _check() -> Any:
        nonlocal checked
        checked += 1
        if checked == 1:
            return message
        return await fetch(message.id)

    def _give_up(retry_state) -> None:
        logger.info(
            f"No embed on message {message.id} after {policy.max_attempts} attempts "
            f"({policy.total_delay:g}s)"
        )
        return None

    retrying = AsyncRetrying(
        stop=stop_after_attempt(policy.max_attempts + 1),
        wait=wait_chain(*(wait_fixed(delay) for delay in policy.delays)),
        retry=retry_if_result(lambda result: not _has_embed(result)),
        before_sleep=before_sleep_log(logger, logging.DEBUG),
        retry_error_callback=_give_up,
        sleep=sleep,
    )
    return await retrying(_check)
