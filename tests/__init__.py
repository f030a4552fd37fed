"""
Test Suite for VXT Triage Bot.

Structure:
    tests/
    ├── conftest.py          # Shared fixtures (config, discord.py mocks)
    ├── unit/                # Single-module tests
    │   ├── test_tweet_links.py
    │   ├── test_retweet_detector.py
    │   ├── test_embed_waiter.py
    │   ├── test_thread_status.py
    │   ├── test_status_controls.py
    │   ├── test_alerts.py
    │   ├── test_settings.py
    │   └── test_process_rt.py
    └── integration/         # Handlers and client wiring, mocked Discord
        ├── test_retweet_flow.py
        └── test_discord_client.py

Run tests:
    pytest tests/                    # All tests
    pytest tests/unit/               # Unit tests only
    pytest tests/ -m integration     # Tests marked @pytest.mark.integration
    pytest tests/ --cov=src          # With coverage
"""
