"""LLM adapters — Claude and Codex CLI executors and the message classifier."""

from autothreads.adapters.llm.classifier import LLMClassifier, MessageInfo
from autothreads.adapters.llm.executor import (
    AIExecutor,
    ClaudeExecutor,
    CodexExecutor,
    ExecutorError,
    create_executor,
)

__all__ = [
    "AIExecutor",
    "ClaudeExecutor",
    "CodexExecutor",
    "ExecutorError",
    "LLMClassifier",
    "MessageInfo",
    "create_executor",
]
