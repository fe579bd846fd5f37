"""Core data models for the Yelix Cloud client."""

from .events import RequestEvent
from .results import (
    BootstrapAction,
    Immediate,
    NeedsBootstrap,
    PendingRequest,
    SubmitResult,
)
from .state import InstanceState, InstanceStatus

__all__ = [
    # Events
    "RequestEvent",
    # State
    "InstanceState",
    "InstanceStatus",
    # Queue and results
    "PendingRequest",
    "Immediate",
    "NeedsBootstrap",
    "SubmitResult",
    "BootstrapAction",
]
