"""Typed failures raised inside the auto-thread pipeline.

Every exception carries an ``ErrorKind`` so the outer handlers can decide
once, at the boundary, whether to log, fall back, or answer the user.
"""

from enum import Enum


class ErrorKind(str, Enum):
    NOT_ELIGIBLE = "not-eligible"
    VALIDATION_FAILED = "validation-failed"
    CLASSIFIER_TRANSIENT = "classifier-transient"
    CLASSIFIER_PERMANENT = "classifier-permanent"
    MUTATION_FAILED = "mutation-failed"
    AUTHORIZATION_DENIED = "authorization-denied"


class AutoThreadsError(Exception):
    """Base class for pipeline failures."""

    kind: ErrorKind


class NotEligible(AutoThreadsError):
    kind = ErrorKind.NOT_ELIGIBLE

    def __init__(self, reason):
        super().__init__(f"message not eligible: {reason.value}")
        self.reason = reason


class DecodeError(AutoThreadsError):
    """Raised when an event payload does not have the expected shape."""

    kind = ErrorKind.VALIDATION_FAILED


class ClassifierServiceError(AutoThreadsError):
    """Transient classifier failure (process error, timeout). Retryable."""

    kind = ErrorKind.CLASSIFIER_TRANSIENT


class ClassifierResponseError(AutoThreadsError):
    """The classifier answered, but not with a usable classification."""

    kind = ErrorKind.CLASSIFIER_PERMANENT


class MutationFailed(AutoThreadsError):
    """A REST call against the chat platform failed."""

    kind = ErrorKind.MUTATION_FAILED


class ChannelNotFound(MutationFailed):
    def __init__(self, channel_id: int):
        super().__init__(f"channel {channel_id} not found")
        self.channel_id = channel_id


class PermissionsError(AutoThreadsError):
    kind = ErrorKind.AUTHORIZATION_DENIED

    def __init__(self, action: str, subject: str):
        self.action = action
        self.subject = subject
        super().__init__(self.user_message)

    @property
    def user_message(self) -> str:
        return f"You don't have permission to {self.action} this {self.subject}."
