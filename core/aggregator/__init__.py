"""Aggregation routines for survey submissions."""

from .distribution import SurveyAggregator, rating_bucket

__all__ = ["SurveyAggregator", "rating_bucket"]
