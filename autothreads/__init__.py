"""AutoThreads — opens a classified follow-up thread for messages in keyword-tagged channels."""

from autothreads.config import CONFIG, AppConfig, __version__
from autothreads.domain.service import AutoThreads

__all__ = [
    "CONFIG",
    "AppConfig",
    "AutoThreads",
    "__version__",
]
