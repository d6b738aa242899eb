"""Discord adapter — bridges discord.Client to the AutoThreads service.

Message events become one pipeline task each; interactions are decoded,
routed, and the domain's InteractionResponse is translated back into
discord.py response calls.
"""

import asyncio
import sys
from typing import Set

import discord

from autothreads.adapters.discord.channels import DiscordChannelDirectory
from autothreads.adapters.discord.decode import to_incoming, to_interaction_context
from autothreads.adapters.discord.rest import DiscordRest
from autothreads.config import CONFIG
from autothreads.domain.errors import DecodeError
from autothreads.domain.models import InteractionResponse, ModalForm, ResponseKind
from autothreads.domain.service import AutoThreads
from autothreads.ports.outbound import ClassifierPort


def _log(msg: str):
    print(msg, file=sys.stderr)


def _debug(msg: str):
    if CONFIG["debug"]:
        _log(msg)


def build_modal(form: ModalForm) -> discord.ui.Modal:
    modal = discord.ui.Modal(title=form.title, custom_id=form.custom_id)
    for f in form.fields:
        modal.add_item(
            discord.ui.Label(
                text=f.label,
                component=discord.ui.TextInput(
                    custom_id=f.custom_id,
                    max_length=f.max_length,
                    default=f.value,
                ),
            )
        )
    return modal


class AutoThreadsBot(discord.Client):
    def __init__(
        self,
        classifier: ClassifierPort,
        topic_keyword: str,
        enabled: bool = True,
        **discord_kwargs,
    ):
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents, **discord_kwargs)
        self.channel_directory = DiscordChannelDirectory(self)
        self.rest = DiscordRest(self)
        self.service = AutoThreads(
            channels=self.channel_directory,
            rest=self.rest,
            classifier=classifier,
            topic_keyword=topic_keyword,
            enabled=enabled,
        )
        self._pipeline_tasks: Set[asyncio.Task] = set()

    async def on_ready(self):
        _log(f"[AutoThreads] logged in as {self.user}, keyword={self.service.eligibility.topic_keyword!r}")

    async def on_message(self, message: discord.Message):
        try:
            incoming = to_incoming(message)
        except DecodeError as e:
            _debug(f"[AutoThreads] ignoring message: {e}")
            return
        task = asyncio.create_task(self.service.handle_message(incoming))
        self._pipeline_tasks.add(task)
        task.add_done_callback(self._pipeline_tasks.discard)

    async def on_interaction(self, interaction: discord.Interaction):
        try:
            ctx = to_interaction_context(interaction)
        except DecodeError as e:
            _debug(f"[AutoThreads] ignoring interaction: {e}")
            return
        if ctx is None:
            return

        response = await self.service.handle_interaction(ctx)
        if response is None:
            return
        try:
            await self._respond(interaction, response)
        except discord.HTTPException as e:
            _log(f"[AutoThreads] responding to interaction {ctx.custom_id!r} failed: {e}")

    @staticmethod
    async def _respond(interaction: discord.Interaction, response: InteractionResponse):
        if response.kind is ResponseKind.MODAL:
            await interaction.response.send_modal(build_modal(response.modal))
        elif response.kind is ResponseKind.EPHEMERAL_MESSAGE:
            await interaction.response.send_message(response.content, ephemeral=True)
        else:
            await interaction.response.defer()

    # -- Channel cache invalidation --

    async def on_guild_channel_update(self, before, after):
        self.channel_directory.invalidate(after.guild.id, after.id)

    async def on_guild_channel_delete(self, channel):
        self.channel_directory.invalidate(channel.guild.id, channel.id)

    async def on_thread_update(self, before, after):
        self.channel_directory.invalidate(after.guild.id, after.id)

    async def on_thread_delete(self, thread):
        self.channel_directory.invalidate(thread.guild.id, thread.id)

    async def close(self):
        for task in list(self._pipeline_tasks):
            task.cancel()
        await super().close()

    @property
    def pending_pipelines(self) -> int:
        return len(self._pipeline_tasks)