"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Union

if TYPE_CHECKING:
    from autothreads.ports.inbound import IncomingMessage


class MessageType:
    """Discord message type values the pipeline cares about."""

    DEFAULT = 0


class ChannelType:
    """Discord channel type values the pipeline cares about."""

    GUILD_TEXT = 0


MANAGE_CHANNELS = 1 << 4


@dataclass(frozen=True)
class ChannelMetadata:
    id: int
    name: str
    topic: Optional[str]
    type: int


@dataclass(frozen=True)
class Classification:
    """Short title and code-example flags extracted from a message."""

    short_title: str
    has_code_examples: bool = False
    has_code_fences: bool = False

    @property
    def missing_code_fences(self) -> bool:
        return self.has_code_examples and not self.has_code_fences

    @classmethod
    def fallback(cls, display_name: str) -> "Classification":
        """Deterministic classification used when the classifier is unavailable."""
        return cls(short_title=f"{display_name}'s thread")


@dataclass(frozen=True)
class ThreadHandle:
    id: int
    parent_message_id: int
    author_id: int


class RejectReason(str, Enum):
    NON_DEFAULT = "non-default"
    FROM_BOT = "from-bot"
    NON_TEXT_CHANNEL = "non-text-channel"
    CHANNEL_NOT_ELIGIBLE = "channel-not-eligible"
    DISABLED = "disabled"


@dataclass(frozen=True)
class Eligible:
    message: "IncomingMessage"
    channel: ChannelMetadata


@dataclass(frozen=True)
class Rejected:
    reason: RejectReason


EligibilityDecision = Union[Eligible, Rejected]


# ── Message components ──────────────────────────────────────


class ButtonStyle:
    PRIMARY = 1
    SECONDARY = 2


@dataclass(frozen=True)
class Button:
    custom_id: str
    label: str
    style: int = ButtonStyle.PRIMARY

    def to_payload(self) -> dict:
        return {"type": 2, "custom_id": self.custom_id, "label": self.label, "style": self.style}


@dataclass(frozen=True)
class ActionRow:
    buttons: List[Button] = field(default_factory=list)

    def to_payload(self) -> dict:
        return {"type": 1, "components": [b.to_payload() for b in self.buttons]}


# ── Interaction responses ───────────────────────────────────


class ResponseKind(str, Enum):
    MODAL = "modal"
    DEFERRED_UPDATE = "deferred_update"
    EPHEMERAL_MESSAGE = "ephemeral_message"


@dataclass(frozen=True)
class TextField:
    custom_id: str
    label: str
    max_length: int
    value: str = ""


@dataclass(frozen=True)
class ModalForm:
    custom_id: str
    title: str
    fields: List[TextField] = field(default_factory=list)


@dataclass(frozen=True)
class InteractionResponse:
    """What the adapter should answer an interaction with."""

    kind: ResponseKind
    content: Optional[str] = None
    modal: Optional[ModalForm] = None

    @classmethod
    def deferred_update(cls) -> "InteractionResponse":
        return cls(kind=ResponseKind.DEFERRED_UPDATE)

    @classmethod
    def ephemeral(cls, content: str) -> "InteractionResponse":
        return cls(kind=ResponseKind.EPHEMERAL_MESSAGE, content=content)

    @classmethod
    def show_modal(cls, modal: ModalForm) -> "InteractionResponse":
        return cls(kind=ResponseKind.MODAL, modal=modal)

