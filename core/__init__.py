"""Core domain models and services for the SatRate survey API."""

from .models import SubmissionAck, SurveySummary

__all__ = ["SubmissionAck", "SurveySummary"]
