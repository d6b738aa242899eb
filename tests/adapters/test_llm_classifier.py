"""Tests for adapters/llm/classifier.py — reply parsing and error mapping."""

import json

import pytest

from autothreads.adapters.llm.classifier import SYSTEM_PROMPT, LLMClassifier, parse_reply
from autothreads.adapters.llm.executor import ExecutorError
from autothreads.domain.errors import ClassifierResponseError, ClassifierServiceError
from autothreads.domain.models import Classification
from autothreads.infrastructure.usage import UsageLimitExceeded


class MockExecutor:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.usage_tracker = None

    async def execute(self, message, system_prompt=None, model=None):
        self.calls.append({"message": message, "system_prompt": system_prompt, "model": model})
        if self.error:
            raise self.error
        return self.response


def _reply(**overrides):
    data = {"short_title": "Loop never ends", "has_code_examples": True, "has_code_fences": False}
    data.update(overrides)
    return json.dumps(data)


@pytest.mark.asyncio
async def test_classify_returns_classification():
    executor = MockExecutor(response=_reply())
    classifier = LLMClassifier(executor, model="claude-haiku")

    info = await classifier.classify("while True: pass  # why?")

    assert info == Classification("Loop never ends", True, False)
    assert executor.calls[0]["message"] == "while True: pass  # why?"
    assert executor.calls[0]["system_prompt"] == SYSTEM_PROMPT
    assert executor.calls[0]["model"] == "claude-haiku"


@pytest.mark.asyncio
async def test_executor_failure_is_transient():
    classifier = LLMClassifier(MockExecutor(error=ExecutorError("Exit code 1: overloaded")))
    with pytest.raises(ClassifierServiceError, match="overloaded"):
        await classifier.classify("hi")


@pytest.mark.asyncio
async def test_malformed_reply_is_permanent():
    classifier = LLMClassifier(MockExecutor(response="Sure! Here is a title: Loops"))
    with pytest.raises(ClassifierResponseError):
        await classifier.classify("hi")


@pytest.mark.asyncio
async def test_usage_limit_propagates():
    classifier = LLMClassifier(MockExecutor(error=UsageLimitExceeded("Daily limit reached: 5/5")))
    with pytest.raises(UsageLimitExceeded):
        await classifier.classify("hi")


class TestParseReply:
    def test_plain_json(self):
        info = parse_reply(_reply(has_code_examples=False))
        assert info.short_title == "Loop never ends"
        assert info.has_code_examples is False

    def test_fenced_json(self):
        info = parse_reply(f"```json\n{_reply()}\n```")
        assert info.has_code_fences is False

    def test_missing_field(self):
        with pytest.raises(ClassifierResponseError):
            parse_reply(json.dumps({"short_title": "x"}))

    def test_wrong_type(self):
        with pytest.raises(ClassifierResponseError):
            parse_reply(_reply(has_code_fences=["yes"]))


def test_system_prompt_embeds_schema():
    assert "short_title" in SYSTEM_PROMPT
    assert "has_code_examples" in SYSTEM_PROMPT
    assert "has_code_fences" in SYSTEM_PROMPT
