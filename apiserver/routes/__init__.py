"""API routes."""

from .results import handle as results
from .submit import handle as submit

__all__ = ["results", "submit"]
