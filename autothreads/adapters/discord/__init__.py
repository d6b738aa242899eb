"""Discord adapter — gateway client, REST calls and channel cache."""

from autothreads.adapters.discord.bot import AutoThreadsBot
from autothreads.adapters.discord.channels import DiscordChannelDirectory
from autothreads.adapters.discord.rest import DiscordRest

__all__ = ["AutoThreadsBot", "DiscordChannelDirectory", "DiscordRest"]
