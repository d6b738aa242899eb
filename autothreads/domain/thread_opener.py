"""ThreadOpener — classify an eligible message and open its thread.

Pipeline per message, strictly in order:
    classify (bounded retry, deterministic fallback)
    -> start thread from message
    -> post the control panel
    -> post the code-fence hint (only when code is missing fences)
"""

import asyncio
import sys
from typing import TYPE_CHECKING, List

from autothreads.domain.errors import ClassifierServiceError
from autothreads.domain.models import (
    ActionRow,
    Button,
    ButtonStyle,
    ChannelMetadata,
    Classification,
    ThreadHandle,
)
from autothreads.ports.inbound import IncomingMessage

if TYPE_CHECKING:
    from autothreads.ports.outbound import ClassifierPort, ThreadRest

THREAD_NAME_LIMIT = 100
AUTO_ARCHIVE_MINUTES = 1440
CLASSIFY_ATTEMPTS = 3
CLASSIFY_RETRY_DELAY = 0.5

CODE_FENCE_HINT = (
    "It looks like your code examples might be missing code fences.\n"
    "\n"
    "You can wrap your code like this:\n"
    "\n"
    "\\`\\`\\`ts\n"
    "const a = 123\n"
    "\\`\\`\\`\n"
)


def _log(msg: str):
    print(msg, file=sys.stderr)


def truncate(text: str, limit: int = THREAD_NAME_LIMIT) -> str:
    """Hard cut at ``limit`` UTF-16 code units, the unit Discord counts in.

    A surrogate pair straddling the limit is dropped rather than split.
    """
    encoded = text.encode("utf-16-le")
    if len(encoded) <= limit * 2:
        return text
    return encoded[: limit * 2].decode("utf-16-le", errors="ignore")


def control_rows(author_id: int) -> List[ActionRow]:
    """The thread control panel: [Edit title, Archive]."""
    return [
        ActionRow(
            buttons=[
                Button(custom_id=f"edit_{author_id}", label="Edit title"),
                Button(
                    custom_id=f"archive_{author_id}",
                    label="Archive",
                    style=ButtonStyle.SECONDARY,
                ),
            ]
        )
    ]


class ThreadOpener:
    def __init__(
        self,
        classifier: "ClassifierPort",
        rest: "ThreadRest",
        attempts: int = CLASSIFY_ATTEMPTS,
        retry_delay: float = CLASSIFY_RETRY_DELAY,
    ):
        self._classifier = classifier
        self._rest = rest
        self._attempts = attempts
        self._retry_delay = retry_delay

    async def classify(self, message: IncomingMessage) -> Classification:
        """Classify with a fixed-delay retry on transient errors.

        Never raises: exhausted retries and non-retryable errors both
        resolve to ``Classification.fallback``.
        """
        for attempt in range(1, self._attempts + 1):
            try:
                return await self._classifier.classify(message.content)
            except ClassifierServiceError as e:
                _log(f"[AutoThreads] classify attempt {attempt}/{self._attempts} failed: {e}")
                if attempt < self._attempts:
                    await asyncio.sleep(self._retry_delay)
            except Exception as e:
                _log(f"[AutoThreads] classify failed, not retrying: {e!r}")
                break
        return Classification.fallback(message.display_name)

    async def open_thread(
        self, message: IncomingMessage, channel: ChannelMetadata
    ) -> ThreadHandle:
        info = await self.classify(message)

        thread_id = await self._rest.start_thread_from_message(
            channel.id,
            message.id,
            name=truncate(info.short_title),
            auto_archive_duration=AUTO_ARCHIVE_MINUTES,
        )
        thread = ThreadHandle(id=thread_id, parent_message_id=message.id, author_id=message.author.id)

        await self._rest.create_message(thread.id, components=control_rows(message.author.id))

        if info.missing_code_fences:
            await self._rest.create_message(thread.id, content=CODE_FENCE_HINT)

        return thread
