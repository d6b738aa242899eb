"""Tests for multi-provider executor behavior."""

import asyncio
from pathlib import Path

import pytest

from autothreads.adapters.llm.executor import (
    ClaudeExecutor,
    CodexExecutor,
    ExecutorError,
    create_executor,
)
from autothreads.infrastructure.usage import UsageLimitExceeded, UsageTracker


def run(coro):
    """Helper to run async functions in sync tests."""
    return asyncio.run(coro)


class _FakeProc:
    def __init__(self, returncode=0, stdout=b"", stderr=b"", delay=0.0):
        self.returncode = returncode
        self._stdout = stdout
        self._stderr = stderr
        self._delay = delay
        self.killed = False

    async def communicate(self):
        if self._delay:
            await asyncio.sleep(self._delay)
        return self._stdout, self._stderr

    def kill(self):
        self.killed = True


def _tracker():
    return UsageTracker(limits={
        "max_calls_per_minute": 100,
        "max_calls_per_hour": 100,
        "max_calls_per_day": 100,
        "paused": False,
    })


def test_create_executor_rejects_unknown_provider():
    with pytest.raises(ValueError):
        create_executor("unknown-provider")


def test_default_timeout_keeps_retries_short():
    # Three timed-out attempts plus two retry delays stay well under a minute.
    assert ClaudeExecutor().timeout == 10.0
    assert CodexExecutor().timeout == 10.0
    assert create_executor("claude").timeout == 10.0


def test_create_executor_passes_timeout_and_tracker():
    tracker = _tracker()
    executor = create_executor("codex", timeout=5.0, usage_tracker=tracker)
    assert isinstance(executor, CodexExecutor)
    assert executor.timeout == 5.0
    assert executor.usage_tracker is tracker


def test_claude_executor_builds_args_and_records_call(monkeypatch):
    captured = {}

    async def fake_create_subprocess_exec(*args, **kwargs):
        captured["args"] = args
        return _FakeProc(returncode=0, stdout=b'  {"short_title": "x"}\n')

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_create_subprocess_exec)

    executor = ClaudeExecutor(usage_tracker=_tracker())
    response = run(executor.execute("hello", system_prompt="classify", model="claude-haiku"))

    args = captured["args"]
    assert args[0:2] == ("claude", "--print")
    assert args[args.index("--model") + 1] == "claude-haiku"
    assert args[args.index("--system-prompt") + 1] == "classify"
    assert args[-2:] == ("--", "hello")
    assert response == '{"short_title": "x"}'
    assert executor.usage_tracker.total_calls == 1


@pytest.mark.parametrize("message", ["--continue", "-c", "--help"])
def test_claude_executor_passes_dash_message_as_prompt(monkeypatch, message):
    captured = {}

    async def fake_create_subprocess_exec(*args, **kwargs):
        captured["args"] = args
        return _FakeProc(returncode=0, stdout=b"{}")

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_create_subprocess_exec)

    run(ClaudeExecutor(usage_tracker=_tracker()).execute(message, system_prompt="sys"))

    args = captured["args"]
    assert args.count(message) == 1
    assert args.index("--") == args.index(message) - 1
    assert args[-1] == message


def test_claude_executor_nonzero_exit(monkeypatch):
    async def fake_create_subprocess_exec(*args, **kwargs):
        return _FakeProc(returncode=1, stderr=b"overloaded")

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_create_subprocess_exec)

    executor = ClaudeExecutor(usage_tracker=_tracker())
    with pytest.raises(ExecutorError, match="overloaded"):
        run(executor.execute("hello"))
    assert executor.usage_tracker.total_calls == 0


def test_claude_executor_timeout(monkeypatch):
    proc = _FakeProc(returncode=None, delay=5.0)

    async def fake_create_subprocess_exec(*args, **kwargs):
        return proc

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_create_subprocess_exec)

    executor = ClaudeExecutor(timeout=0.05, usage_tracker=_tracker())
    with pytest.raises(ExecutorError, match="Timeout"):
        run(executor.execute("hello"))
    assert proc.killed is True


def test_executor_respects_usage_limits(monkeypatch):
    async def fake_create_subprocess_exec(*args, **kwargs):
        raise AssertionError("must not spawn when paused")

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_create_subprocess_exec)

    tracker = _tracker()
    tracker.limits["paused"] = True
    with pytest.raises(UsageLimitExceeded):
        run(ClaudeExecutor(usage_tracker=tracker).execute("hello"))


def test_codex_executor_uses_codex_exec_and_reads_output(monkeypatch):
    captured = {}

    async def fake_create_subprocess_exec(*args, **kwargs):
        captured["args"] = args
        output_path = args[args.index("--output-last-message") + 1]
        Path(output_path).write_text("codex-result", encoding="utf-8")
        captured["output_path"] = output_path
        return _FakeProc(returncode=0, stdout=b"", stderr=b"")

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_create_subprocess_exec)

    executor = CodexExecutor(usage_tracker=_tracker())
    response = run(executor.execute("hello", system_prompt="system-guidance", model="gpt-5"))

    args = captured["args"]
    assert args[0:2] == ("codex", "exec")
    assert "--model" in args
    assert "gpt-5" in args
    assert "System instructions:" in args[-1]
    assert "User message:" in args[-1]
    assert response == "codex-result"
    assert not Path(captured["output_path"]).exists()


def test_codex_executor_empty_response(monkeypatch):
    async def fake_create_subprocess_exec(*args, **kwargs):
        return _FakeProc(returncode=0, stdout=b"   ")

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_create_subprocess_exec)

    with pytest.raises(ExecutorError, match="empty response"):
        run(CodexExecutor(usage_tracker=_tracker()).execute("hello"))
