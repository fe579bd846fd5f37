"""Instance lifecycle state models."""

from dataclasses import dataclass
from enum import Enum


class InstanceStatus(str, Enum):
    """Lifecycle of the collector instance registration."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class InstanceState:
    """Current lifecycle state; instance_id is only set when READY."""

    status: InstanceStatus
    instance_id: str | None = None

    @classmethod
    def uninitialized(cls) -> "InstanceState":
        return cls(InstanceStatus.UNINITIALIZED)

    @classmethod
    def initializing(cls) -> "InstanceState":
        return cls(InstanceStatus.INITIALIZING)

    @classmethod
    def ready(cls, instance_id: str) -> "InstanceState":
        return cls(InstanceStatus.READY, instance_id)

    @classmethod
    def failed(cls) -> "InstanceState":
        return cls(InstanceStatus.FAILED)

    @property
    def is_terminal(self) -> bool:
        return self.status in (InstanceStatus.READY, InstanceStatus.FAILED)
