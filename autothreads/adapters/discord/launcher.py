"""Launcher for the AutoThreads Discord bot."""

import asyncio
import sys
from dataclasses import asdict
from typing import Optional

from autothreads.adapters.discord.bot import AutoThreadsBot
from autothreads.adapters.llm.classifier import LLMClassifier
from autothreads.adapters.llm.executor import create_executor
from autothreads.config import MODEL_ALIASES_BY_PROVIDER, AppConfig
from autothreads.infrastructure.usage import UsageTracker


def _log(msg: str):
    print(msg, file=sys.stderr)


def _create_classifier(config: AppConfig) -> LLMClassifier:
    """Classifier backed by the configured CLI executor and its usage limits."""
    tracker = UsageTracker(limits=asdict(config.usage_limits))
    executor = create_executor(
        config.classifier.provider,
        timeout=config.classifier.timeout,
        usage_tracker=tracker,
    )
    model = MODEL_ALIASES_BY_PROVIDER[config.classifier.provider][config.classifier.model]
    _log(f"Classifier: {config.classifier.provider} ({model})")
    return LLMClassifier(executor, model=model)


def build_bot(config: AppConfig) -> AutoThreadsBot:
    return AutoThreadsBot(
        classifier=_create_classifier(config),
        topic_keyword=config.topic_keyword,
        enabled=config.enabled,
    )


async def launch(config: Optional[AppConfig] = None):
    config = config or AppConfig.from_env()
    if not config.discord_token:
        _log("No bot configured. Set DISCORD_BOT_TOKEN.")
        return

    bot = build_bot(config)
    try:
        async with bot:
            await bot.start(config.discord_token)
    except Exception as e:
        _log(f"[AutoThreads] crashed: {e}")
        raise


def main():
    asyncio.run(launch())


if __name__ == "__main__":
    main()
