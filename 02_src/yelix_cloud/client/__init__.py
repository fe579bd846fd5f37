"""Client module."""

from .client import IYelixCloud, YelixCloud

__all__ = ["IYelixCloud", "YelixCloud"]
