"""Discord REST adapter — implements ThreadRest over discord.py's HTTPClient."""

from typing import Any, Awaitable, Dict, List, Optional

import discord
from discord.http import Route

from autothreads.domain.errors import MutationFailed
from autothreads.domain.models import ActionRow


class DiscordRest:
    """Raw REST calls, so payloads (component layout included) go out exactly as built."""

    def __init__(self, client: discord.Client):
        self._client = client

    @staticmethod
    async def _call(label: str, request: Awaitable[Any]) -> Any:
        try:
            return await request
        except discord.HTTPException as e:
            raise MutationFailed(f"{label} failed: {e.status} {e.text}") from e

    async def start_thread_from_message(
        self,
        channel_id: int,
        message_id: int,
        *,
        name: str,
        auto_archive_duration: int,
    ) -> int:
        data = await self._call(
            f"start thread from message {message_id}",
            self._client.http.start_thread_with_message(
                channel_id,
                message_id,
                name=name,
                auto_archive_duration=auto_archive_duration,
            ),
        )
        return int(data["id"])

    async def create_message(
        self,
        channel_id: int,
        *,
        content: Optional[str] = None,
        components: Optional[List[ActionRow]] = None,
    ) -> int:
        payload: Dict[str, Any] = {}
        if content is not None:
            payload["content"] = content
        if components:
            payload["components"] = [row.to_payload() for row in components]
        route = Route("POST", "/channels/{channel_id}/messages", channel_id=channel_id)
        data = await self._call(
            f"create message in {channel_id}",
            self._client.http.request(route, json=payload),
        )
        return int(data["id"])

    async def modify_channel(
        self,
        channel_id: int,
        *,
        name: Optional[str] = None,
        archived: Optional[bool] = None,
    ) -> None:
        options: Dict[str, Any] = {}
        if name is not None:
            options["name"] = name
        if archived is not None:
            options["archived"] = archived
        await self._call(
            f"modify channel {channel_id}",
            self._client.http.edit_channel(channel_id, **options),
        )
