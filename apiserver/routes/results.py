"""API route for returning aggregated survey results."""

from __future__ import annotations

import logging
from typing import Any, Optional

from apiserver.responses import error_response, json_response
from core.aggregator.distribution import SurveyAggregator
from core.config import Settings
from core.errors import SatRateError
from core.store.base import KeyValueStore

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Failed to load results"


def handle(event: dict[str, Any], store: Optional[KeyValueStore], settings: Optional[Settings] = None) -> dict[str, Any]:
    settings = settings or Settings()
    try:
        summary = SurveyAggregator(page_size=settings.page_size).aggregate(store)
    except SatRateError as exc:
        logger.warning("Results unavailable: %s", exc.message)
        return error_response(exc.status_code, exc.message or FALLBACK_MESSAGE)
    except Exception as exc:
        logger.exception("Failed to aggregate submissions")
        return error_response(500, str(exc) or FALLBACK_MESSAGE)
    return json_response(200, summary.model_dump(mode="json", by_alias=True), allow_origin=settings.allow_origin)
