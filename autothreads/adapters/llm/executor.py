"""LLM CLI executors."""

import asyncio
import os
import tempfile
import uuid
from pathlib import Path
from typing import List, Optional, Protocol

from autothreads.config import AI_PROVIDER
from autothreads.infrastructure.usage import UsageTracker


class ExecutorError(Exception):
    """The CLI process failed, timed out, or produced nothing."""


async def _run_subprocess(cmd_args: List[str]):
    """Run a subprocess command and return process/stdout/stderr."""
    proc = await asyncio.create_subprocess_exec(
        *cmd_args,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await proc.communicate()
    except asyncio.CancelledError:
        if proc.returncode is None:
            proc.kill()
        raise
    return proc, stdout, stderr


class AIExecutor(Protocol):
    """Common executor interface used by the classifier."""

    usage_tracker: UsageTracker

    async def execute(
        self,
        message: str,
        system_prompt: Optional[str] = None,
        model: Optional[str] = None,
    ) -> str:
        """Execute one completion request and return plain text output."""


class ClaudeExecutor:
    """Executes Claude CLI commands."""

    def __init__(self, timeout: float = 10.0, usage_tracker: Optional[UsageTracker] = None):
        self.timeout = timeout
        self.usage_tracker = usage_tracker or UsageTracker()

    async def execute(
        self,
        message: str,
        system_prompt: Optional[str] = None,
        model: Optional[str] = None,
    ) -> str:
        self.usage_tracker.check_limits()

        args = [
            "claude",
            "--print",
            "--session-id",
            str(uuid.uuid4()),
            "--output-format",
            "text",
        ]
        if model:
            args.extend(["--model", model])
        if system_prompt:
            args.extend(["--system-prompt", system_prompt])
        args.extend(["--", message])

        try:
            proc, stdout, stderr = await asyncio.wait_for(_run_subprocess(args), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise ExecutorError(f"Timeout ({self.timeout:g}s)")

        if proc.returncode != 0:
            raise ExecutorError(f"Exit code {proc.returncode}: {stderr.decode().strip()}")

        self.usage_tracker.record_call()
        return stdout.decode("utf-8").strip()


class CodexExecutor:
    """Executes Codex CLI commands via `codex exec`."""

    def __init__(self, timeout: float = 10.0, usage_tracker: Optional[UsageTracker] = None):
        self.timeout = timeout
        self.usage_tracker = usage_tracker or UsageTracker()

    @staticmethod
    def _compose_prompt(message: str, system_prompt: Optional[str]) -> str:
        if not system_prompt:
            return message
        # `codex exec` has no --system-prompt flag, so both sections are inlined.
        return (
            "System instructions:\n"
            f"{system_prompt}\n\n"
            "User message:\n"
            f"{message}"
        )

    async def execute(
        self,
        message: str,
        system_prompt: Optional[str] = None,
        model: Optional[str] = None,
    ) -> str:
        self.usage_tracker.check_limits()

        fd, output_path = tempfile.mkstemp(prefix="codex-last-", suffix=".txt")
        os.close(fd)
        out_file = Path(output_path)

        args = [
            "codex",
            "exec",
            "--color",
            "never",
            "--output-last-message",
            output_path,
        ]
        if model:
            args.extend(["--model", model])
        args.append(self._compose_prompt(message, system_prompt))

        try:
            try:
                proc, stdout, stderr = await asyncio.wait_for(_run_subprocess(args), timeout=self.timeout)
            except asyncio.TimeoutError:
                raise ExecutorError(f"Timeout ({self.timeout:g}s)")

            if proc.returncode != 0:
                err_text = stderr.decode("utf-8").strip() or stdout.decode("utf-8").strip()
                raise ExecutorError(f"Exit code {proc.returncode}: {err_text}")

            response = ""
            if out_file.exists():
                response = out_file.read_text(encoding="utf-8").strip()
            if not response:
                response = stdout.decode("utf-8").strip()
            if not response:
                raise ExecutorError("Codex returned empty response")

            self.usage_tracker.record_call()
            return response
        finally:
            out_file.unlink(missing_ok=True)


def create_executor(
    provider: Optional[str] = None,
    timeout: float = 10.0,
    usage_tracker: Optional[UsageTracker] = None,
) -> AIExecutor:
    """Create an executor for the selected provider."""
    selected = (provider or AI_PROVIDER).strip().lower()
    if selected == "claude":
        return ClaudeExecutor(timeout=timeout, usage_tracker=usage_tracker)
    if selected == "codex":
        return CodexExecutor(timeout=timeout, usage_tracker=usage_tracker)
    raise ValueError(f"Unsupported provider: {selected}")
