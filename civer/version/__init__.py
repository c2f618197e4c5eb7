"""Version resolution domain."""

from .model import (
    DispatchTrigger,
    PullRequestTrigger,
    PushTrigger,
    ReleaseInfo,
    ReleaseLookup,
    ReleaseTrigger,
    Repository,
    ResolutionError,
    ResolutionResult,
    TriggerContext,
    UnrecognizedTrigger,
)
from .resolver import resolve

__all__ = [
    "DispatchTrigger",
    "PullRequestTrigger",
    "PushTrigger",
    "ReleaseInfo",
    "ReleaseLookup",
    "ReleaseTrigger",
    "Repository",
    "ResolutionError",
    "ResolutionResult",
    "TriggerContext",
    "UnrecognizedTrigger",
    "resolve",
]
