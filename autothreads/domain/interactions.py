"""Thread control panel interactions: edit title and archive.

Component custom ids embed the thread author's id (``edit_{id}``,
``archive_{id}``), so authorization needs no lookup. Authorization is
evaluated on every interaction.
"""

import sys
import traceback
from typing import TYPE_CHECKING, Awaitable, Callable, List, Optional, Tuple

from autothreads.domain.errors import (
    AutoThreadsError,
    ChannelNotFound,
    DecodeError,
    ErrorKind,
    PermissionsError,
)
from autothreads.domain.models import (
    MANAGE_CHANNELS,
    InteractionResponse,
    ModalForm,
    TextField,
)
from autothreads.domain.thread_opener import THREAD_NAME_LIMIT
from autothreads.ports.inbound import InteractionContext, InteractionKind

if TYPE_CHECKING:
    from autothreads.ports.outbound import ChannelDirectory, ThreadRest

EDIT_PREFIX = "edit_"
ARCHIVE_PREFIX = "archive_"
EDIT_MODAL_ID = "edit"
TITLE_FIELD = "title"

Handler = Callable[[InteractionContext], Awaitable[InteractionResponse]]
Matcher = Callable[[InteractionContext], bool]


def _log(msg: str):
    print(msg, file=sys.stderr)


def _log_failure(ctx: InteractionContext, error: Exception):
    _log(
        f"[AutoThreads] interaction {ctx.custom_id!r} failed: {error!r}\n"
        f"{traceback.format_exc()}"
    )


def author_id_from(custom_id: str) -> str:
    """Everything after the first underscore, or "" when there is none."""
    _, _, author_id = custom_id.partition("_")
    return author_id


class InteractionAuthorizer:
    def authorize(self, ctx: InteractionContext, action: str, subject: str) -> None:
        """Raise PermissionsError unless the user owns the thread or can manage channels."""
        if author_id_from(ctx.custom_id) == str(ctx.invoking_user_id):
            return
        if ctx.invoking_user_permissions & MANAGE_CHANNELS:
            return
        raise PermissionsError(action=action, subject=subject)


class TitleEditFlow:
    def __init__(
        self,
        channels: "ChannelDirectory",
        rest: "ThreadRest",
        authorizer: InteractionAuthorizer,
    ):
        self._channels = channels
        self._rest = rest
        self._authorizer = authorizer

    async def open_modal(self, ctx: InteractionContext) -> InteractionResponse:
        self._authorizer.authorize(ctx, action="edit", subject="thread")
        channel = await self._channels.get(ctx.guild_id, ctx.channel_id)
        if channel is None:
            raise ChannelNotFound(ctx.channel_id)
        return InteractionResponse.show_modal(
            ModalForm(
                custom_id=EDIT_MODAL_ID,
                title="Edit title",
                fields=[
                    TextField(
                        custom_id=TITLE_FIELD,
                        label="New title",
                        max_length=THREAD_NAME_LIMIT,
                        value=channel.name,
                    )
                ],
            )
        )

    async def accept_submission(self, ctx: InteractionContext) -> InteractionResponse:
        # The modal only exists for users who passed open_modal's check.
        # Empty titles go straight to the platform, which enforces its own limits.
        if TITLE_FIELD not in ctx.values:
            raise DecodeError(f"modal {ctx.custom_id!r} has no {TITLE_FIELD!r} field")
        title = ctx.values[TITLE_FIELD]
        await self._rest.modify_channel(ctx.channel_id, name=title)
        return InteractionResponse.deferred_update()


class ArchiveFlow:
    def __init__(self, rest: "ThreadRest", authorizer: InteractionAuthorizer):
        self._rest = rest
        self._authorizer = authorizer

    async def archive(self, ctx: InteractionContext) -> InteractionResponse:
        self._authorizer.authorize(ctx, action="archive", subject="thread")
        await self._rest.modify_channel(ctx.channel_id, archived=True)
        return InteractionResponse.deferred_update()


def component_prefix(prefix: str) -> Matcher:
    return lambda ctx: ctx.kind == InteractionKind.COMPONENT and ctx.custom_id.startswith(prefix)


def modal_id(custom_id: str) -> Matcher:
    return lambda ctx: ctx.kind == InteractionKind.MODAL_SUBMIT and ctx.custom_id == custom_id


class InteractionRouter:
    """Dispatches interactions to the first matching handler.

    An authorization-denied error becomes an ephemeral reply. Anything
    else is logged and swallowed so one broken interaction never reaches the gateway loop.
    """

    def __init__(self):
        self._routes: List[Tuple[Matcher, Handler]] = []

    def add(self, matcher: Matcher, handler: Handler) -> "InteractionRouter":
        self._routes.append((matcher, handler))
        return self

    def match(self, ctx: InteractionContext) -> Optional[Handler]:
        for matcher, handler in self._routes:
            if matcher(ctx):
                return handler
        return None

    async def dispatch(self, ctx: InteractionContext) -> Optional[InteractionResponse]:
        handler = self.match(ctx)
        if handler is None:
            return None
        try:
            return await handler(ctx)
        except AutoThreadsError as e:
            # A denial message is written for the invoking user.
            if e.kind is ErrorKind.AUTHORIZATION_DENIED:
                return InteractionResponse.ephemeral(str(e))
            _log_failure(ctx, e)
        except Exception as e:
            _log_failure(ctx, e)
        return None


def build_router(
    channels: "ChannelDirectory", rest: "ThreadRest"
) -> InteractionRouter:
    authorizer = InteractionAuthorizer()
    edit = TitleEditFlow(channels, rest, authorizer)
    archive = ArchiveFlow(rest, authorizer)
    return (
        InteractionRouter()
        .add(component_prefix(ARCHIVE_PREFIX), archive.archive)
        .add(component_prefix(EDIT_PREFIX), edit.open_modal)
        .add(modal_id(EDIT_MODAL_ID), edit.accept_submission)
    )
