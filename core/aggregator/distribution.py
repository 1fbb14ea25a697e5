"""Aggregate stored survey submissions into per-field distributions."""

from __future__ import annotations

import json
import logging
import numbers
from typing import Any, Iterable, Iterator, Optional

from core.constants import KEY_PREFIX, LENGTH_FIELDS, LENGTH_OPTIONS, LIST_PAGE_SIZE, RATING_FIELDS, RATING_VALUES
from core.errors import ConfigurationError
from core.models import SurveySummary
from core.store.base import KeyValueStore, iter_key_pages

logger = logging.getLogger(__name__)


def rating_bucket(value: Any) -> Optional[int]:
    """Return the 1-5 bucket for ``value``, or ``None`` when it should not be counted."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    # NaN fails the range check.
    if not RATING_VALUES[0] <= value <= RATING_VALUES[-1] or int(value) != value:
        return None
    return int(value)


class SurveyAggregator:
    """Tally rating and length answers across every stored submission."""

    def __init__(
        self,
        rating_fields: Iterable[str] = RATING_FIELDS,
        length_fields: Iterable[str] = LENGTH_FIELDS,
        length_options: Iterable[str] = LENGTH_OPTIONS,
        page_size: int = LIST_PAGE_SIZE,
        prefix: str = KEY_PREFIX,
    ) -> None:
        self.rating_fields = tuple(rating_fields)
        self.length_fields = tuple(length_fields)
        self.length_options = tuple(length_options)
        self.page_size = max(page_size, 1)
        self.prefix = prefix

    def aggregate(self, store: Optional[KeyValueStore]) -> SurveySummary:
        if store is None:
            raise ConfigurationError()
        summary = self.summarize(self.load(store))
        logger.info("Aggregated %d survey responses", summary.total_responses)
        return summary

    def load(self, store: KeyValueStore) -> Iterator[Any]:
        """Yield every stored submission that parses as JSON."""
        for _, submission in self.iter_items(store):
            yield submission

    def iter_items(self, store: KeyValueStore) -> Iterator[tuple[str, Any]]:
        """Yield ``(key, submission)`` pairs, skipping absent or unparseable values."""
        for keys in iter_key_pages(store, prefix=self.prefix, limit=self.page_size):
            for key in keys:
                raw = store.get(key)
                if not raw:
                    continue
                try:
                    submission = json.loads(raw)
                except (ValueError, RecursionError):
                    logger.debug("Skipping unparseable submission %s", key)
                    continue
                yield key, submission

    def summarize(self, submissions: Iterable[Any]) -> SurveySummary:
        summary = SurveySummary.empty(self.rating_fields, self.length_fields, self.length_options)
        for submission in submissions:
            summary.total_responses += 1
            if not isinstance(submission, dict):
                continue
            for field in self.rating_fields:
                bucket = rating_bucket(submission.get(field))
                if bucket is not None:
                    summary.rating[field][bucket] += 1
            for field in self.length_fields:
                value = submission.get(field)
                if isinstance(value, str) and value in self.length_options:
                    summary.length[field][value] += 1
        return summary


__all__ = ["SurveyAggregator", "rating_bucket"]
