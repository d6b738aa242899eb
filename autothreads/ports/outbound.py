"""Outbound ports — interfaces for external system adapters."""

from typing import List, Optional, Protocol, runtime_checkable

from autothreads.domain.models import ActionRow, ChannelMetadata, Classification


@runtime_checkable
class ChannelDirectory(Protocol):
    """Read-mostly channel metadata cache."""

    async def get(self, guild_id: int, channel_id: int) -> Optional[ChannelMetadata]: ...


@runtime_checkable
class ThreadRest(Protocol):
    """Channel, thread and message mutations against the chat platform."""

    async def start_thread_from_message(
        self,
        channel_id: int,
        message_id: int,
        *,
        name: str,
        auto_archive_duration: int,
    ) -> int: ...

    async def create_message(
        self,
        channel_id: int,
        *,
        content: Optional[str] = None,
        components: Optional[List[ActionRow]] = None,
    ) -> int: ...

    async def modify_channel(
        self,
        channel_id: int,
        *,
        name: Optional[str] = None,
        archived: Optional[bool] = None,
    ) -> None: ...


@runtime_checkable
class ClassifierPort(Protocol):
    """Turns message text into a Classification.

    Raises ClassifierServiceError on transient failures and
    ClassifierResponseError when the reply is unusable.
    """

    async def classify(self, text: str) -> Classification: ...
