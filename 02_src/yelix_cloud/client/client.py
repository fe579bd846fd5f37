"""YelixCloud client: lazy initialization and queued delivery."""

import asyncio
from typing import Any, Mapping, Protocol

from ..config import DEFAULT_MAX_QUEUE_SIZE, DEFAULT_TIMEOUT, ClientSettings
from ..errors import (
    DeliveryError,
    InitializationFailedError,
    QueueFullError,
)
from ..identity import MachineIdentity, get_machine_identity
from ..logging_config import get_diagnostics_logger
from ..models import (
    Immediate,
    InstanceState,
    InstanceStatus,
    NeedsBootstrap,
    PendingRequest,
    RequestEvent,
    SubmitResult,
)
from ..submission import SubmissionQueue
from ..transport import HttpCollectorTransport, ICollectorTransport


class IYelixCloud(Protocol):
    """Telemetry client facing the host application."""

    def submit(self, event: RequestEvent) -> SubmitResult:
        """Deliver now if ready, otherwise queue; first caller gets the bootstrap."""
        ...

    async def initialize(self, environment: str, schema: Mapping[str, Any]) -> None:
        """Register the instance with the collector, once."""
        ...

    def drain(self) -> None:
        """Hand every queued event to the transport in FIFO order."""
        ...

    async def aclose(self) -> None:
        """Wait for in-flight deliveries and close the transport."""
        ...


class YelixCloud:
    """
    Lazily-initializing telemetry client.

    Events submitted before the collector instance exists are queued. The
    first such submission returns a bootstrap action; once it has run and
    the instance is ready, the queue is drained in submission order. If
    initialization fails the client refuses all delivery from then on.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        debug: bool = False,
        max_queue_size: int | None = DEFAULT_MAX_QUEUE_SIZE,
        timeout: float = DEFAULT_TIMEOUT,
        transport: ICollectorTransport | None = None,
        identity: MachineIdentity | None = None,
    ):
        settings = ClientSettings(
            api_key=api_key,
            base_url=base_url,
            debug=debug,
            max_queue_size=max_queue_size,
            timeout=timeout,
        )
        self._settings = settings
        self._log = get_diagnostics_logger(__name__, enabled=settings.debug)

        self._transport = transport or HttpCollectorTransport(
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout,
            debug=settings.debug,
        )
        self._identity = identity or get_machine_identity()

        self._state = InstanceState.uninitialized()
        self._queue = SubmissionQueue(settings.max_queue_size)
        self._draining = False
        self._bootstrap_issued = False
        self._delivery_tasks: set[asyncio.Task] = set()

        self._log.info(
            "YelixCloud instance created",
            context={
                "baseUrl": settings.base_url,
                "debug": settings.debug,
                "hasApiKey": True,
            },
        )

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        transport: ICollectorTransport | None = None,
        identity: MachineIdentity | None = None,
    ) -> "YelixCloud":
        """Create a client from prepared settings."""
        return cls(
            api_key=settings.api_key,
            base_url=settings.base_url,
            debug=settings.debug,
            max_queue_size=settings.max_queue_size,
            timeout=settings.timeout,
            transport=transport,
            identity=identity,
        )

    @property
    def state(self) -> InstanceState:
        return self._state

    @property
    def instance_id(self) -> str | None:
        return self._state.instance_id

    @property
    def is_ready(self) -> bool:
        return self._state.status is InstanceStatus.READY

    @property
    def queue_size(self) -> int:
        return len(self._queue)

    @property
    def identity(self) -> MachineIdentity:
        return self._identity

    # Submission ------------------------------------------------------------

    def submit(self, event: RequestEvent) -> SubmitResult:
        """
        Report one observed request.

        Must be called from a running event loop. Returns NeedsBootstrap only
        to the first caller while uninitialized; every other call returns
        Immediate. Either way ``result.outcome`` resolves to the transport's
        boolean outcome or raises a YelixCloudError.
        """
        self._log.info(
            "Request logged: %s %s - Duration: %s ms",
            event.method,
            event.path,
            event.duration,
        )
        completion = asyncio.get_running_loop().create_future()
        status = self._state.status

        if status is InstanceStatus.READY:
            self._log.info("YelixCloud initialized, processing request immediately")
            self._dispatch(PendingRequest(event, completion))
            return Immediate(completion)

        if status is InstanceStatus.FAILED:
            self._log.warning("YelixCloud initialization failed, rejecting request")
            completion.set_exception(
                InitializationFailedError("YelixCloud initialization failed")
            )
            return Immediate(completion)

        self._enqueue(PendingRequest(event, completion))

        if status is InstanceStatus.UNINITIALIZED and not self._bootstrap_issued:
            self._bootstrap_issued = True
            self._log.info(
                "YelixCloud not initialized, returning initialization function"
            )
            return NeedsBootstrap(completion, self._make_bootstrap(completion))

        self._log.info("YelixCloud initializing, queueing request")
        return Immediate(completion)

    def _enqueue(self, entry: PendingRequest) -> None:
        try:
            self._queue.push(entry)
        except QueueFullError as e:
            self._log.warning("Queue full, rejecting request", context={"maxSize": self._queue.max_size})
            entry.completion.set_exception(e)
            return

        self._log.info("Request queued", context={"queueLength": len(self._queue)})

    def _make_bootstrap(self, completion: asyncio.Future):
        async def bootstrap(environment: str, schema: Mapping[str, Any]) -> bool:
            await self.initialize(environment, schema)
            self.drain()
            return await completion

        return bootstrap

    # Initialization --------------------------------------------------------

    async def initialize(self, environment: str, schema: Mapping[str, Any]) -> None:
        """Create the collector instance; a no-op unless uninitialized."""
        if self._state.status is not InstanceStatus.UNINITIALIZED:
            self._log.warning(
                "YelixCloud is already initialized or in the process of initializing."
            )
            return

        self._log.info(
            "Starting YelixCloud initialization", context={"environment": environment}
        )
        # Set before the first await so concurrent callers see INITIALIZING.
        self._state = InstanceState.initializing()

        try:
            instance_id = await self._transport.create_instance(
                environment, schema, self._identity
            )
        except asyncio.CancelledError:
            self._fail()
            raise
        except Exception as e:
            self._log.error("Failed to initialize YelixCloud: %s", e, exc_info=True)
            self._fail()
            return

        if instance_id is None:
            self._log.warning("Failed to initialize YelixCloud: collector refused")
            self._fail()
            return

        self._state = InstanceState.ready(instance_id)
        self._log.info(
            "YelixCloud initialized successfully",
            context={
                "instanceId": instance_id,
                "queuedRequests": len(self._queue),
            },
        )
        self.drain()

    def _fail(self) -> None:
        self._state = InstanceState.failed()
        rejected = self._queue.reject_all(
            lambda: InitializationFailedError("YelixCloud initialization failed")
        )
        self._log.warning(
            "YelixCloud marked as failed", context={"rejectedRequests": rejected}
        )

    # Delivery --------------------------------------------------------------

    def drain(self) -> None:
        """Dispatch every queued event without awaiting the deliveries."""
        if self._draining or len(self._queue) == 0 or not self.is_ready:
            self._log.info(
                "Queue processing skipped",
                context={
                    "isProcessing": self._draining,
                    "queueLength": len(self._queue),
                    "status": self._state.status.value,
                },
            )
            return

        self._log.info("Starting queue processing", context={"queueLength": len(self._queue)})
        self._draining = True
        try:
            while len(self._queue) > 0:
                entry = self._queue.pop()
                self._log.info(
                    "Processing queued request",
                    context={"method": entry.event.method, "path": entry.event.path},
                )
                self._dispatch(entry)
        finally:
            self._draining = False

        self._log.info("Queue processing completed")

    def _dispatch(self, entry: PendingRequest) -> None:
        task = asyncio.get_running_loop().create_task(self._deliver(entry))
        self._delivery_tasks.add(task)
        task.add_done_callback(self._delivery_tasks.discard)

    async def _deliver(self, entry: PendingRequest) -> None:
        """Send one event and settle its completion future."""
        event = entry.event
        try:
            try:
                success = await self._transport.send_request(
                    event, self._state.instance_id, self._identity
                )
            except asyncio.CancelledError:
                entry.completion.cancel()
                raise
            except Exception as e:
                self._log.error("Queued request failed: %s", e, exc_info=True)
                raise DeliveryError(
                    f"Delivery of {event.method} {event.path} failed: {e}"
                ) from e
        except DeliveryError as error:
            if not entry.completion.done():
                entry.completion.set_exception(error)
            return

        self._log.info("Queued request completed", context={"success": success})
        if not entry.completion.done():
            entry.completion.set_result(success)

    # Lifecycle -------------------------------------------------------------

    async def wait_idle(self) -> None:
        """Wait until every dispatched delivery has settled."""
        while self._delivery_tasks:
            await asyncio.gather(*list(self._delivery_tasks), return_exceptions=True)

    async def aclose(self) -> None:
        """Wait for in-flight deliveries and close the transport."""
        await self.wait_idle()
        await self._transport.aclose()

    async def __aenter__(self) -> "YelixCloud":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
