"""Inbound port — platform-agnostic event representations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


@dataclass(frozen=True)
class MessageAuthor:
    id: int
    username: str
    is_bot: bool = False


@dataclass(frozen=True)
class IncomingMessage:
    """Discord-agnostic view of a message-create event."""

    id: int
    channel_id: int
    guild_id: int
    type: int
    author: MessageAuthor
    content: str
    member_nickname: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.member_nickname or self.author.username


class InteractionKind(str, Enum):
    COMPONENT = "component"
    MODAL_SUBMIT = "modal_submit"


@dataclass(frozen=True)
class InteractionContext:
    """One component click or modal submission."""

    interaction_id: int
    kind: InteractionKind
    custom_id: str
    invoking_user_id: int
    invoking_user_permissions: int
    channel_id: int
    guild_id: int
    values: Dict[str, str] = field(default_factory=dict)
