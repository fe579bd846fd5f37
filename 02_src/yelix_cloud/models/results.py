"""Queue entries and submit results."""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Union

from .events import RequestEvent

BootstrapAction = Callable[[str, Mapping[str, Any]], Awaitable[bool]]


@dataclass
class PendingRequest:
    """A queued event and the future its submitter awaits."""

    event: RequestEvent
    completion: asyncio.Future


@dataclass(frozen=True)
class Immediate:
    """Submit result carrying only the delivery outcome."""

    outcome: Awaitable[bool]


@dataclass(frozen=True)
class NeedsBootstrap:
    """
    Submit result for the first caller while uninitialized.

    The event is already queued. Awaiting ``bootstrap(environment, schema)``
    starts initialization and returns this caller's delivery outcome.
    """

    outcome: Awaitable[bool]
    bootstrap: BootstrapAction


SubmitResult = Union[Immediate, NeedsBootstrap]
