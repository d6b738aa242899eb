"""Port interfaces (Hexagonal Architecture)."""

from autothreads.ports.inbound import (
    IncomingMessage,
    InteractionContext,
    InteractionKind,
    MessageAuthor,
)
from autothreads.ports.outbound import ChannelDirectory, ClassifierPort, ThreadRest

__all__ = [
    "IncomingMessage",
    "InteractionContext",
    "InteractionKind",
    "MessageAuthor",
    "ChannelDirectory",
    "ClassifierPort",
    "ThreadRest",
]
