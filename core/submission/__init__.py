"""Submission writing."""

from .writer import SubmissionWriter

__all__ = ["SubmissionWriter"]
