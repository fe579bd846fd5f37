"""HTTP transport to the Yelix collector."""

from typing import Any, Mapping, Protocol

import httpx

from ..config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, resolve_base_url
from ..identity import MachineIdentity
from ..logging_config import get_diagnostics_logger
from ..models import RequestEvent

CREATE_INSTANCE_PATH = "/v1/instances/create"
COLLECT_REQUEST_PATH = "/api/v1/collect/request"


class ICollectorTransport(Protocol):
    """Network calls made by the client."""

    async def create_instance(
        self,
        environment: str,
        schema: Mapping[str, Any],
        identity: MachineIdentity,
    ) -> str | None:
        """Register this client; return the instance id or None on failure."""
        ...

    async def send_request(
        self,
        event: RequestEvent,
        instance_id: str,
        identity: MachineIdentity,
    ) -> bool:
        """Deliver one event. Never raises."""
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...


class HttpCollectorTransport:
    """Collector transport over httpx."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
        debug: bool = False,
    ):
        self._base_url = resolve_base_url(base_url)
        self._headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._log = get_diagnostics_logger(__name__, enabled=debug)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def create_instance(
        self,
        environment: str,
        schema: Mapping[str, Any],
        identity: MachineIdentity,
    ) -> str | None:
        """POST the instance registration. Network errors propagate."""
        url = self._base_url + CREATE_INSTANCE_PATH
        self._log.info("Sending initialization request to %s", url)

        response = await self._client.post(
            url,
            headers=self._headers,
            json={
                "environment": environment,
                **identity.to_payload(),
                "schema": dict(schema),
            },
        )

        if not response.is_success:
            self._log.warning(
                "Failed to initialize YelixCloud: %s %s",
                response.status_code,
                response.reason_phrase,
            )
            return None

        try:
            instance_id = response.json()["data"]["instance_id"]
        except (ValueError, KeyError, TypeError):
            self._log.warning("Malformed initialization response: %s", response.text[:200])
            return None

        if not isinstance(instance_id, str) or not instance_id:
            self._log.warning("Initialization response has no instance id")
            return None

        return instance_id

    async def send_request(
        self,
        event: RequestEvent,
        instance_id: str,
        identity: MachineIdentity,
    ) -> bool:
        """POST one event; failures become False."""
        self._log.info(
            "Sending request",
            context={
                "method": event.method,
                "path": event.path,
                "duration": event.duration,
                "instanceId": instance_id,
            },
        )

        try:
            response = await self._client.post(
                self._base_url + COLLECT_REQUEST_PATH,
                headers=self._headers,
                json={
                    **event.to_payload(),
                    "metaData": {
                        "source": {"instanceId": instance_id, **identity.to_payload()},
                    },
                },
            )
        except (httpx.HTTPError, ValueError, TypeError) as e:
            # ValueError/TypeError: body not JSON-encodable
            self._log.error("Failed to send request: %s", e)
            return False

        if not response.is_success:
            self._log.warning(
                "Failed to send request to YelixCloud: %s %s",
                response.status_code,
                response.reason_phrase,
            )
            return False

        self._log.info("Request sent successfully")
        return True

    async def aclose(self) -> None:
        """Close the httpx client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
