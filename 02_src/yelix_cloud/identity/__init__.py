"""Machine identity module."""

from .identity import MachineIdentity, get_machine_identity, resolve_machine_ip

__all__ = ["MachineIdentity", "get_machine_identity", "resolve_machine_ip"]
