"""Collector transport module."""

from .transport import (
    COLLECT_REQUEST_PATH,
    CREATE_INSTANCE_PATH,
    HttpCollectorTransport,
    ICollectorTransport,
)

__all__ = [
    "HttpCollectorTransport",
    "ICollectorTransport",
    "CREATE_INSTANCE_PATH",
    "COLLECT_REQUEST_PATH",
]
