"""
Tests for configuration loading.

These tests verify that:
- settings.json is parsed with its camelCase keys
- Missing files, bad JSON and schema errors raise ConfigError
- Startup validation requires a Discord token
"""

import json
from unittest.mock import patch

import pytest

from config.settings import BotConfig, ConfigError, Settings, load_bot_config
from src.bot import main, validate_settings

VALID_SETTINGS = {
    "vxtBot": "500",
    "guild": "1",
    "errorChannel": None,
    "retweetReaction": "🔁",
    "channels": {
        "111": {"sender": "42"},
        "112": {"sender": None},
    },
}


@pytest.fixture
def settings_file(tmp_path):
    def _write(data):
        path = tmp_path / "settings.json"
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


class TestLoadBotConfig:
    """Tests for load_bot_config."""

    def test_valid_file(self, settings_file):
        config = load_bot_config(settings_file(VALID_SETTINGS))

        assert isinstance(config, BotConfig)
        assert config.vxt_bot == "500"
        assert config.error_channel is None
        assert config.retweet_reaction == "🔁"
        assert config.get_channel(111).sender == "42"
        assert config.get_channel("112").sender is None
        assert config.get_channel(113) is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_bot_config(tmp_path / "nope.json")

    def test_invalid_json(self, settings_file):
        with pytest.raises(ConfigError):
            load_bot_config(settings_file("{not json"))

    def test_missing_field(self, settings_file):
        data = dict(VALID_SETTINGS)
        del data["vxtBot"]
        with pytest.raises(ConfigError):
            load_bot_config(settings_file(data))

    def test_error_channel_must_be_present(self, settings_file):
        data = dict(VALID_SETTINGS)
        del data["errorChannel"]
        with pytest.raises(ConfigError):
            load_bot_config(settings_file(data))

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)


class TestValidateSettings:
    """Tests for startup validation."""

    def test_missing_token(self, settings_file):
        env = Settings(discord_token="", settings_file=str(settings_file(VALID_SETTINGS)))
        with pytest.raises(ConfigError, match="DISCORD_TOKEN"):
            validate_settings(env)

    def test_valid(self, settings_file):
        env = Settings(discord_token="token", settings_file=str(settings_file(VALID_SETTINGS)))
        assert validate_settings(env).guild == "1"

    def test_non_numeric_guild(self, settings_file):
        data = dict(VALID_SETTINGS, guild="main")
        env = Settings(discord_token="token", settings_file=str(settings_file(data)))
        with pytest.raises(ConfigError):
            validate_settings(env)


class TestMain:
    """Tests for the entry point."""

    def test_exits_before_connecting_on_bad_config(self, tmp_path):
        env = Settings(discord_token="", settings_file=str(tmp_path / "missing.json"))

        with patch("src.bot.settings", env), patch("src.bot.run") as run:
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 1
        run.assert_not_called()
