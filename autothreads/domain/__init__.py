"""Domain layer — pure Python, no framework dependencies."""

from autothreads.domain.models import Classification, ChannelMetadata, ThreadHandle
from autothreads.domain.errors import ErrorKind, PermissionsError
from autothreads.domain.eligibility import EligibilityFilter
from autothreads.domain.thread_opener import ThreadOpener
from autothreads.domain.interactions import (
    ArchiveFlow,
    InteractionAuthorizer,
    InteractionRouter,
    TitleEditFlow,
)
from autothreads.domain.service import AutoThreads

__all__ = [
    "ArchiveFlow",
    "AutoThreads",
    "ChannelMetadata",
    "Classification",
    "EligibilityFilter",
    "ErrorKind",
    "InteractionAuthorizer",
    "InteractionRouter",
    "PermissionsError",
    "ThreadHandle",
    "ThreadOpener",
    "TitleEditFlow",
]
