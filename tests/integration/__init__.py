"""
Integration Tests Package.

Full retweet and thread-status flows through the handlers and
TriageClient, with discord.py objects mocked.
"""
