"""SubmissionQueue implementation."""

from collections import deque
from typing import Callable

from ..errors import QueueFullError
from ..models import PendingRequest


class SubmissionQueue:
    """FIFO of events submitted before the instance is ready."""

    def __init__(self, max_size: int | None = None):
        self._max_size = max_size
        self._entries: deque[PendingRequest] = deque()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def max_size(self) -> int | None:
        return self._max_size

    def is_full(self) -> bool:
        return self._max_size is not None and len(self._entries) >= self._max_size

    def push(self, entry: PendingRequest) -> None:
        """Append an entry at the tail."""
        if self.is_full():
            raise QueueFullError(
                f"Submission queue is full ({self._max_size} pending requests)"
            )
        self._entries.append(entry)

    def pop(self) -> PendingRequest:
        """Remove and return the head entry."""
        return self._entries.popleft()

    def reject_all(self, make_error: Callable[[], BaseException]) -> int:
        """Fail every queued entry with a fresh error and empty the queue."""
        rejected = 0
        while self._entries:
            entry = self._entries.popleft()
            if not entry.completion.done():
                entry.completion.set_exception(make_error())
                rejected += 1
        return rejected

    def snapshot(self) -> list[PendingRequest]:
        """Get queued entries in order, without removing them."""
        return list(self._entries)
