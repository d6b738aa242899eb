"""Convert discord.py events into inbound port types.

Raises DecodeError when an event lacks what the pipeline needs, e.g. a
message outside a guild or a modal payload without components.
"""

from typing import Dict, List, Optional

import discord
from pydantic import BaseModel, ValidationError

from autothreads.domain.errors import DecodeError
from autothreads.ports.inbound import (
    IncomingMessage,
    InteractionContext,
    InteractionKind,
    MessageAuthor,
)


class ComponentData(BaseModel):
    custom_id: str
    component_type: int


class TextInputData(BaseModel):
    custom_id: str
    value: str = ""


class ModalRowData(BaseModel):
    # Action rows carry ``components``; label wrappers carry a single ``component``.
    components: List[TextInputData] = []
    component: Optional[TextInputData] = None


class ModalSubmitData(BaseModel):
    custom_id: str
    components: List[ModalRowData]

    def values(self) -> Dict[str, str]:
        fields: Dict[str, str] = {}
        for row in self.components:
            inputs = list(row.components)
            if row.component is not None:
                inputs.append(row.component)
            for item in inputs:
                fields[item.custom_id] = item.value
        return fields


def to_incoming(message: discord.Message) -> IncomingMessage:
    """Convert a Discord message to platform-agnostic IncomingMessage."""
    if message.guild is None:
        raise DecodeError(f"message {message.id} has no guild")
    return IncomingMessage(
        id=message.id,
        channel_id=message.channel.id,
        guild_id=message.guild.id,
        type=message.type.value,
        author=MessageAuthor(
            id=message.author.id,
            username=message.author.name,
            is_bot=message.author.bot,
        ),
        member_nickname=getattr(message.author, "nick", None),
        content=message.content,
    )


def to_interaction_context(interaction: discord.Interaction) -> Optional[InteractionContext]:
    """Decode component and modal-submit interactions; other types yield None."""
    if interaction.type is discord.InteractionType.component:
        kind = InteractionKind.COMPONENT
        model = ComponentData
    elif interaction.type is discord.InteractionType.modal_submit:
        kind = InteractionKind.MODAL_SUBMIT
        model = ModalSubmitData
    else:
        return None

    if interaction.guild_id is None or interaction.channel_id is None:
        raise DecodeError(f"interaction {interaction.id} has no guild or channel")

    try:
        data = model.model_validate(interaction.data or {})
    except ValidationError as e:
        raise DecodeError(f"interaction {interaction.id}: {e.error_count()} invalid field(s)") from e

    return InteractionContext(
        interaction_id=interaction.id,
        kind=kind,
        custom_id=data.custom_id,
        invoking_user_id=interaction.user.id,
        invoking_user_permissions=interaction.permissions.value,
        channel_id=interaction.channel_id,
        guild_id=interaction.guild_id,
        values=data.values() if isinstance(data, ModalSubmitData) else {},
    )
