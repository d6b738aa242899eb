"""Channel metadata cache — implements ChannelDirectory."""

from typing import Dict, Optional, Tuple

import discord

from autothreads.domain.models import ChannelMetadata


def to_metadata(channel) -> ChannelMetadata:
    return ChannelMetadata(
        id=channel.id,
        name=getattr(channel, "name", "") or "",
        topic=getattr(channel, "topic", None),
        type=channel.type.value,
    )


class DiscordChannelDirectory:
    """Snapshots keyed by (guild_id, channel_id).

    Entries are dropped by the client's channel/thread update and delete
    events; misses go to discord.py's cache, then to the API.
    """

    def __init__(self, client: discord.Client):
        self._client = client
        self._cache: Dict[Tuple[int, int], ChannelMetadata] = {}

    def __len__(self) -> int:
        return len(self._cache)

    async def get(self, guild_id: int, channel_id: int) -> Optional[ChannelMetadata]:
        key = (guild_id, channel_id)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        channel = self._client.get_channel(channel_id)
        if channel is None:
            try:
                channel = await self._client.fetch_channel(channel_id)
            except (discord.NotFound, discord.Forbidden):
                return None

        guild = getattr(channel, "guild", None)
        if guild is None or guild.id != guild_id:
            return None

        meta = to_metadata(channel)
        self._cache[key] = meta
        return meta

    def invalidate(self, guild_id: int, channel_id: int) -> None:
        self._cache.pop((guild_id, channel_id), None)
