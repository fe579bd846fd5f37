"""Submission queue module."""

from .queue import SubmissionQueue

__all__ = ["SubmissionQueue"]
