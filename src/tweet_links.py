"""
Tweet link helpers.

Pure string parsing used by retweet detection and thread creation:
    - Tweet id from any status permalink (twitter.com, x.com, fxtwitter.com...)
    - Tweet URL from message content, where links are wrapped in <...>
      to suppress Discord's own preview
    - Author name from a VXT embed
"""

import re
from typing import Optional

# https://x.com/user/status/123, https://fxtwitter.com/i/status/123/ ...
_STATUS_ID_RE = re.compile(r"/status/(\d+)")

# <https://twitter.com/...> or <https://x.com/...>
_WRAPPED_TWEET_URL_RE = re.compile(r"<(https?://(?:twitter|x)\.com/\S+)>")

FX_STATUS_URL = "https://fxtwitter.com/i/status/{tweet_id}"


def extract_tweet_id(url: str) -> Optional[str]:
    """
    Extract the numeric tweet id from a status URL.

    Args:
        url: Twitter/X (or mirror) URL.

    Returns:
        Tweet id as a string, or None if the URL has no /status/<digits>.

    Example:
        >>> extract_tweet_id("https://x.com/user/status/123456789?s=20")
        '123456789'
    """
    if not url:
        return None
    match = _STATUS_ID_RE.search(url)
    return match.group(1) if match else None


def extract_tweet_url(content: str) -> Optional[str]:
    """
    Extract a tweet URL wrapped in angle brackets from message content.

    Args:
        content: Message text.

    Returns:
        The URL without the brackets, or None if not found.
    """
    if not content:
        return None
    match = _WRAPPED_TWEET_URL_RE.search(content)
    return match.group(1) if match else None


def get_embed_author_name(embed) -> Optional[str]:
    """Return the embed author's name, or None if it has none."""
    author = getattr(embed, "author", None)
    name = getattr(author, "name", None) if author is not None else None
    return name or None


def build_fx_status_url(tweet_id: str) -> str:
    """Build the fxtwitter link posted at the top of a new thread."""
    return FX_STATUS_URL.format(tweet_id=tweet_id)
