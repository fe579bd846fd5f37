"""Synthetic traffic generator."""

from .sim import ISim, Sim, SimReport

__all__ = ["ISim", "Sim", "SimReport"]
