"""Request event models."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class RequestEvent:
    """One observed request, as reported by the host application."""

    start_time: float  # epoch milliseconds
    path: str
    duration: float  # milliseconds
    method: str

    def __post_init__(self) -> None:
        if not math.isfinite(self.start_time):
            raise ValueError(f"start_time must be finite, got {self.start_time}")
        if not math.isfinite(self.duration) or self.duration < 0:
            raise ValueError(
                f"duration must be finite and non-negative, got {self.duration}"
            )

    def to_payload(self) -> dict:
        """Collector representation of the event."""
        return {
            "startTime": self.start_time,
            "path": self.path,
            "duration": self.duration,
            "method": self.method,
        }
