"""AutoThreads — message-create handling, no framework dependencies.

``handle_message`` is the per-event boundary: every failure is resolved
or logged here, so one bad message never affects the next.
"""

import sys
import traceback
from typing import TYPE_CHECKING, Optional

from autothreads.config import CONFIG
from autothreads.domain.eligibility import EligibilityFilter
from autothreads.domain.errors import AutoThreadsError, ErrorKind, NotEligible
from autothreads.domain.interactions import InteractionRouter, build_router
from autothreads.domain.models import Rejected, ThreadHandle
from autothreads.domain.thread_opener import ThreadOpener
from autothreads.ports.inbound import IncomingMessage, InteractionContext

if TYPE_CHECKING:
    from autothreads.domain.models import InteractionResponse
    from autothreads.ports.outbound import ChannelDirectory, ClassifierPort, ThreadRest


def _log(msg: str):
    print(msg, file=sys.stderr)


def _debug(msg: str):
    if CONFIG["debug"]:
        _log(msg)


def _log_failure(message: IncomingMessage, error: Exception):
    _log(
        f"[AutoThreads] message {message.id} in ch={message.channel_id} failed: {error!r}\n"
        f"{traceback.format_exc()}"
    )


# Expected outcomes, not failures.
_SKIP_KINDS = (ErrorKind.NOT_ELIGIBLE, ErrorKind.VALIDATION_FAILED)


class AutoThreads:
    def __init__(
        self,
        channels: "ChannelDirectory",
        rest: "ThreadRest",
        classifier: "ClassifierPort",
        topic_keyword: str,
        enabled: bool = True,
        opener: Optional[ThreadOpener] = None,
    ):
        self.channels = channels
        self.eligibility = EligibilityFilter(topic_keyword, enabled=enabled)
        self.opener = opener or ThreadOpener(classifier, rest)
        self.router: InteractionRouter = build_router(channels, rest)

    async def process_message(self, message: IncomingMessage) -> ThreadHandle:
        """Run the pipeline, raising on rejection or failure."""
        decision = await self.eligibility.evaluate(message, self.channels)
        if isinstance(decision, Rejected):
            raise NotEligible(decision.reason)
        return await self.opener.open_thread(decision.message, decision.channel)

    async def handle_message(self, message: IncomingMessage) -> Optional[ThreadHandle]:
        try:
            thread = await self.process_message(message)
        except AutoThreadsError as e:
            if e.kind in _SKIP_KINDS:
                _debug(f"[AutoThreads] skipped message {message.id}: {e}")
            else:
                _log_failure(message, e)
            return None
        except Exception as e:
            _log_failure(message, e)
            return None
        _log(f"[AutoThreads] opened thread {thread.id} for message {message.id}")
        return thread

    async def handle_interaction(
        self, ctx: InteractionContext
    ) -> Optional["InteractionResponse"]:
        return await self.router.dispatch(ctx)
