"""
VXT Triage Bot - Discord helper for tweet-sharing channels and bug triage.

The bot watches channels where tweets are shared and an embed-fixing bot
(VXT) replies with a rich embed. It flags retweets and lets the team track
bug reports in threads whose names carry a status emoji.

Architecture:
    Two independent features sharing one Discord client:
    1. Retweet detection: compare the tweet id in the shared link with
       the tweet id the VXT embed resolves to
    2. Thread status: a small state machine stored in the thread name,
       driven by buttons kept at the bottom of the thread

Modules:
    tweet_links: Tweet id / URL extraction helpers
    retweet_detector: Original vs retweet classification
    embed_waiter: Bounded polling for late embeds
    thread_status: Status enum, transitions and thread-name codec
    status_controls: Status button message management
    handlers: Retweet processing for a single VXT reply
    alerts: Error channel reporting
    discord_client: Event and slash-command wiring
    bot: Startup, validation and entry point

Entry Point:
    python -m src.bot
"""

__version__ = "0.1.0"
