"""Machine identity resolved once per process."""

import socket
import sys
from dataclasses import dataclass
from functools import lru_cache

from ..logging_config import get_logger

logger = get_logger(__name__)

# Routing probe target; connect() on a UDP socket sends no packets.
_PROBE_ADDRESS = ("10.255.255.255", 1)


@dataclass(frozen=True)
class MachineIdentity:
    """Network identity of the host reported alongside every call."""

    machine_name: str
    machine_ip: str | None
    machine_os: str

    def to_payload(self) -> dict:
        """Collector representation of the identity fields."""
        return {
            "machineName": self.machine_name,
            "machineIP": self.machine_ip,
            "machineOS": self.machine_os,
        }


def _is_external_ipv4(address: str) -> bool:
    return not address.startswith("127.")


def resolve_machine_ip(hostname: str) -> str | None:
    """Return the first non-loopback IPv4 address of this machine, if any."""
    try:
        infos = socket.getaddrinfo(hostname, None, socket.AF_INET)
    except OSError:
        infos = []

    for info in infos:
        address = info[4][0]
        if _is_external_ipv4(address):
            return address

    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as probe:
            probe.connect(_PROBE_ADDRESS)
            address = probe.getsockname()[0]
    except OSError as e:
        logger.debug("Could not resolve machine IP: %s", e)
        return None

    return address if _is_external_ipv4(address) else None


@lru_cache(maxsize=1)
def get_machine_identity() -> MachineIdentity:
    """Resolve hostname, IP and OS once and reuse the result."""
    hostname = socket.gethostname()
    return MachineIdentity(
        machine_name=hostname,
        machine_ip=resolve_machine_ip(hostname),
        machine_os=sys.platform,
    )
