"""LLM-backed message classifier — implements ClassifierPort.

The executor is asked for a single JSON object matching ``MessageInfo``.
Process failures are transient (retryable by the caller); a reply that
does not validate is permanent.
"""

import json
import re
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from autothreads.adapters.llm.executor import AIExecutor, ExecutorError
from autothreads.domain.errors import ClassifierResponseError, ClassifierServiceError
from autothreads.domain.models import Classification


class MessageInfo(BaseModel):
    short_title: str = Field(description="A short title summarizing the message")
    has_code_examples: bool = Field(description="Are there code examples in the message?")
    has_code_fences: bool = Field(description="Does the message contain code fences, e.g. ```")


SYSTEM_PROMPT = (
    "Extract a short title and validate a message.\n"
    "Reply with exactly one JSON object and nothing else. It must match this JSON schema:\n"
    f"{json.dumps(MessageInfo.model_json_schema())}"
)

_FENCED_REPLY_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def parse_reply(reply: str) -> MessageInfo:
    """Validate the executor's reply, tolerating a ```json fence around it."""
    text = reply.strip()
    match = _FENCED_REPLY_RE.match(text)
    if match:
        text = match.group(1)
    try:
        return MessageInfo.model_validate_json(text)
    except ValidationError as e:
        raise ClassifierResponseError(f"malformed classifier reply: {e.error_count()} error(s)") from e


class LLMClassifier:
    def __init__(self, executor: AIExecutor, model: Optional[str] = None):
        self._executor = executor
        self._model = model

    async def classify(self, text: str) -> Classification:
        try:
            reply = await self._executor.execute(text, system_prompt=SYSTEM_PROMPT, model=self._model)
        except ExecutorError as e:
            raise ClassifierServiceError(str(e)) from e

        info = parse_reply(reply)
        return Classification(
            short_title=info.short_title,
            has_code_examples=info.has_code_examples,
            has_code_fences=info.has_code_fences,
        )
