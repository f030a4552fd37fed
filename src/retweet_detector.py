"""
Retweet Detector - Original vs retweet classification.

The VXT bot replies to a shared tweet link with an embed. For a retweet,
the embed's URL points at the retweeted (original author's) tweet, while
for an original tweet it points back at the shared tweet itself:

    shared link  <https://x.com/a/status/100>
    embed.url     https://x.com/a/status/100   -> ORIGINAL
    embed.url     https://x.com/b/status/777   -> RETWEET

The id mismatch is the only signal used. Retweet/quote flags in the
embed are not reliable for this host and are ignored.
"""

import logging
from enum import Enum

from src.tweet_links import extract_tweet_id

logger = logging.getLogger(__name__)


class RetweetStatus(Enum):
    """Classification result for a shared tweet."""
    ORIGINAL = "original"
    RETWEET = "retweet"
    UNKNOWN = "unknown"


def detect_retweet(tweet_url: str, embed) -> RetweetStatus:
    """
    Classify a shared tweet by comparing it against the VXT embed.

    Args:
        tweet_url: Tweet URL found in the parent message.
        embed: First embed of the VXT reply (discord.Embed or similar).

    Returns:
        RetweetStatus.UNKNOWN when either id cannot be determined,
        otherwise ORIGINAL or RETWEET.
    """
    root_url = getattr(embed, "url", None)
    if not root_url:
        return RetweetStatus.UNKNOWN

    root_tweet_id = extract_tweet_id(root_url)
    if not root_tweet_id:
        return RetweetStatus.UNKNOWN

    content_tweet_id = extract_tweet_id(tweet_url)
    if not content_tweet_id:
        return RetweetStatus.UNKNOWN

    if root_tweet_id == content_tweet_id:
        return RetweetStatus.ORIGINAL
    return RetweetStatus.RETWEET
