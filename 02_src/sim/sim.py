"""SIM implementation - synthetic request traffic for a YelixCloud client."""

import asyncio
import random
import time
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from yelix_cloud import (
    IYelixCloud,
    NeedsBootstrap,
    RequestEvent,
    YelixCloudError,
)
from yelix_cloud.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_ROUTES = [
    ("GET", "/api/users"),
    ("GET", "/api/users/{id}"),
    ("POST", "/api/users"),
    ("DELETE", "/api/sessions"),
    ("GET", "/health"),
]


@dataclass
class SimReport:
    """Outcome counts of one scenario run."""

    delivered: int = 0
    failed: int = 0
    rejected: int = 0

    @property
    def total(self) -> int:
        return self.delivered + self.failed + self.rejected


class ISim(Protocol):
    """Generate synthetic request events."""

    async def run(self) -> SimReport:
        """Submit the scenario's events and wait for every outcome."""
        ...


class Sim:
    """SIM that reports a burst of synthetic requests, then bootstraps."""

    def __init__(
        self,
        client: IYelixCloud,
        environment: str = "development",
        schema: Mapping[str, Any] | None = None,
        request_count: int = 10,
        routes: list[tuple[str, str]] | None = None,
        seed: int | None = None,
    ):
        self._client = client
        self._environment = environment
        self._schema = schema or {}
        self._request_count = request_count
        self._routes = routes or DEFAULT_ROUTES
        self._random = random.Random(seed)

    def _make_event(self) -> RequestEvent:
        method, path = self._random.choice(self._routes)
        return RequestEvent(
            start_time=time.time() * 1000,
            path=path,
            duration=round(self._random.uniform(0.5, 250.0), 3),
            method=method,
        )

    async def run(self) -> SimReport:
        """Submit every event first, then invoke the bootstrap action."""
        outcomes = []
        bootstrap = None

        for _ in range(self._request_count):
            result = self._client.submit(self._make_event())
            if isinstance(result, NeedsBootstrap):
                bootstrap = result.bootstrap
            outcomes.append(result.outcome)

        if bootstrap is not None:
            try:
                await bootstrap(self._environment, self._schema)
            except YelixCloudError as e:
                logger.error("SIM: bootstrap failed: %s", e)

        report = SimReport()
        results = await asyncio.gather(*outcomes, return_exceptions=True)
        for result in results:
            if isinstance(result, Exception):
                report.rejected += 1
            elif result:
                report.delivered += 1
            else:
                report.failed += 1

        logger.info(
            "SIM: %s delivered, %s failed, %s rejected",
            report.delivered,
            report.failed,
            report.rejected,
        )
        return report
