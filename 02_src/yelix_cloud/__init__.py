"""Lazily-initializing telemetry client for the Yelix collector."""

from .client import IYelixCloud, YelixCloud
from .config import ClientSettings
from .errors import (
    ConfigurationError,
    DeliveryError,
    InitializationFailedError,
    QueueFullError,
    YelixCloudError,
)
from .identity import MachineIdentity, get_machine_identity
from .models import (
    BootstrapAction,
    Immediate,
    InstanceState,
    InstanceStatus,
    NeedsBootstrap,
    PendingRequest,
    RequestEvent,
    SubmitResult,
)
from .submission import SubmissionQueue
from .transport import HttpCollectorTransport, ICollectorTransport

__all__ = [
    # Client
    "YelixCloud",
    "IYelixCloud",
    "ClientSettings",
    # Models
    "RequestEvent",
    "InstanceState",
    "InstanceStatus",
    "PendingRequest",
    "Immediate",
    "NeedsBootstrap",
    "SubmitResult",
    "BootstrapAction",
    "MachineIdentity",
    # Components
    "SubmissionQueue",
    "ICollectorTransport",
    "HttpCollectorTransport",
    "get_machine_identity",
    # Errors
    "YelixCloudError",
    "ConfigurationError",
    "InitializationFailedError",
    "QueueFullError",
    "DeliveryError",
]
