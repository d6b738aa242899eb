"""Infrastructure helpers shared by adapters."""

from autothreads.infrastructure.usage import UsageLimitExceeded, UsageTracker

__all__ = ["UsageLimitExceeded", "UsageTracker"]
