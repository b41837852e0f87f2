"""Tests for typespeed.config – defaults and merging persisted settings."""

from __future__ import annotations

from typespeed.config import DEFAULT_CONFIG, TIME_MODE_WORDS, merge_config
from typespeed.config import TestConfig as Config


class TestConfigProperties:
    def test_defaults(self):
        c = Config()
        assert c.mode == "time"
        assert c.time_limit == 30
        assert c.word_count == 25
        assert c.language == "english"
        assert c.backspace is True
        assert not c.one_line

    def test_time_mode_helpers(self):
        c = Config(mode="time", time_limit=60)
        assert c.limit_seconds == 60
        assert c.target_words == TIME_MODE_WORDS
        assert c.duration == 60

    def test_words_mode_helpers(self):
        c = Config(mode="words", word_count=50)
        assert c.limit_seconds is None
        assert c.target_words == 50
        assert c.duration == 50

    def test_to_dict(self):
        assert Config().to_dict()["language"] == "english"

    def test_is_a_plain_dataclass(self):
        assert "__test__" not in vars(Config)


class TestMergeConfig:
    def test_empty_returns_base(self):
        assert merge_config({}) is DEFAULT_CONFIG
        assert merge_config(None) is DEFAULT_CONFIG

    def test_overrides_known_keys(self):
        c = merge_config({"mode": "words", "word_count": 50, "punctuation": True})
        assert c.mode == "words"
        assert c.word_count == 50
        assert c.punctuation is True

    def test_ignores_unknown_keys(self):
        assert merge_config({"colour": "red"}) == DEFAULT_CONFIG

    def test_invalid_values_keep_defaults(self, caplog):
        c = merge_config({"time_limit": "soon", "word_count": -3, "numbers": "yes", "theme": 5})
        assert c == DEFAULT_CONFIG
        assert "Ignoring invalid setting" in caplog.text

    def test_numeric_strings_accepted(self):
        assert merge_config({"time_limit": "60"}).time_limit == 60

    def test_bool_not_taken_as_number(self):
        assert merge_config({"time_limit": True}).time_limit == DEFAULT_CONFIG.time_limit

    def test_unknown_mode(self):
        assert merge_config({"mode": "zen"}).mode == "time"

    def test_unknown_language(self):
        c = merge_config({"language": "klingon"}, languages=["english"])
        assert c.language == "english"

    def test_custom_base(self):
        base = Config(mode="words")
        assert merge_config({"word_count": 10}, base=base).mode == "words"
