"""Tests for the typed AppConfig dataclass."""

from autothreads.config import (
    CONFIG,
    MODEL_ALIASES_BY_PROVIDER,
    AppConfig,
    ClassifierConfig,
    UsageLimitsConfig,
)


class TestUsageLimitsConfig:
    def test_defaults(self):
        c = UsageLimitsConfig()
        assert c.max_calls_per_minute == 30
        assert c.max_calls_per_hour == 500
        assert c.max_calls_per_day == 5000
        assert c.paused is False

    def test_custom(self):
        c = UsageLimitsConfig(max_calls_per_day=100, paused=True)
        assert c.max_calls_per_day == 100
        assert c.paused is True


class TestClassifierConfig:
    def test_defaults(self):
        c = ClassifierConfig()
        assert c.provider == "claude"
        assert c.model == "haiku"
        assert c.timeout == 10.0


class TestAppConfig:
    def test_defaults(self):
        c = AppConfig()
        assert c.discord_token == ""
        assert c.topic_keyword == "[threads]"
        assert c.enabled is True
        assert isinstance(c.classifier, ClassifierConfig)
        assert isinstance(c.usage_limits, UsageLimitsConfig)

    def test_from_env_mirrors_config(self):
        c = AppConfig.from_env()
        assert c.topic_keyword == CONFIG["topic_keyword"]
        assert c.enabled == CONFIG["enabled"]
        assert c.classifier.provider in ("claude", "codex")
        assert c.classifier.model in MODEL_ALIASES_BY_PROVIDER[c.classifier.provider]
        assert c.usage_limits.max_calls_per_day == CONFIG["usage_limits"]["max_calls_per_day"]

    def test_from_env_picks_up_runtime_overrides(self, monkeypatch):
        monkeypatch.setitem(CONFIG, "topic_keyword", "[help]")
        monkeypatch.setitem(CONFIG, "enabled", False)
        c = AppConfig.from_env()
        assert c.topic_keyword == "[help]"
        assert c.enabled is False

    def test_custom(self):
        c = AppConfig(
            topic_keyword="[auto]",
            classifier=ClassifierConfig(provider="codex", timeout=5.0),
        )
        assert c.topic_keyword == "[auto]"
        assert c.classifier.provider == "codex"
        assert c.classifier.timeout == 5.0
