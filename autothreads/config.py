"""Configuration and shared state."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


SUPPORTED_AI_PROVIDERS = ("claude", "codex")
AI_PROVIDER = os.getenv("AI_PROVIDER", "claude").strip().lower()
if AI_PROVIDER not in SUPPORTED_AI_PROVIDERS:
    _stderr_print(f"Unsupported AI_PROVIDER={AI_PROVIDER!r}, falling back to 'claude'")
    AI_PROVIDER = "claude"

MODEL_ALIASES_BY_PROVIDER = {
    "claude": {
        "sonnet": os.getenv("CLAUDE_MODEL_SONNET", "claude-sonnet-4-5-20250929"),
        "haiku": os.getenv("CLAUDE_MODEL_HAIKU", "claude-haiku-4-5-20251001"),
    },
    "codex": {
        "sonnet": os.getenv("CODEX_MODEL_SONNET", "gpt-5.3-codex"),
        "haiku": os.getenv("CODEX_MODEL_HAIKU", "gpt-5.3-codex-mini"),
    },
}

MODEL_ALIASES = MODEL_ALIASES_BY_PROVIDER[AI_PROVIDER]

CLASSIFIER_MODEL = os.getenv("CLASSIFIER_MODEL", "haiku").strip().lower()
if CLASSIFIER_MODEL not in MODEL_ALIASES:
    _stderr_print(
        f"Unsupported CLASSIFIER_MODEL={CLASSIFIER_MODEL!r} for provider={AI_PROVIDER!r}, "
        f"falling back to 'haiku'"
    )
    CLASSIFIER_MODEL = "haiku"

CONFIG = {
    "ai_provider": AI_PROVIDER,
    "discord_token": os.getenv("DISCORD_BOT_TOKEN", ""),
    # Channels whose topic contains this substring get auto threads
    "topic_keyword": os.getenv("AUTOTHREADS_KEYWORD", "[threads]"),
    "enabled": _env_flag("AUTOTHREADS_ENABLED", "true"),
    "classifier_model": CLASSIFIER_MODEL,
    "classifier_timeout": float(os.getenv("CLASSIFIER_TIMEOUT", "10")),
    "debug": _env_flag("DEBUG", "false"),
    # Usage limits for classifier calls
    "usage_limits": {
        "max_calls_per_minute": 30,
        "max_calls_per_hour": 500,
        "max_calls_per_day": 5000,
        "paused": False,
    },
}


# ── Typed config ─────────────────────────────────────────────


@dataclass
class UsageLimitsConfig:
    max_calls_per_minute: int = 30
    max_calls_per_hour: int = 500
    max_calls_per_day: int = 5000
    paused: bool = False


@dataclass
class ClassifierConfig:
    provider: str = "claude"
    model: str = "haiku"
    timeout: float = 10.0


@dataclass
class AppConfig:
    """Typed view over CONFIG, handed to the launcher."""

    discord_token: str = ""
    topic_keyword: str = "[threads]"
    enabled: bool = True
    debug: bool = False
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    usage_limits: UsageLimitsConfig = field(default_factory=UsageLimitsConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            discord_token=CONFIG["discord_token"],
            topic_keyword=CONFIG["topic_keyword"],
            enabled=CONFIG["enabled"],
            debug=CONFIG["debug"],
            classifier=ClassifierConfig(
                provider=AI_PROVIDER,
                model=CONFIG["classifier_model"],
                timeout=CONFIG["classifier_timeout"],
            ),
            usage_limits=UsageLimitsConfig(**CONFIG["usage_limits"]),
        )
