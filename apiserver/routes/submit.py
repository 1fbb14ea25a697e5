"""API route for storing a survey submission."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Optional

from apiserver.responses import error_response, json_response
from core.config import Settings
from core.errors import BadRequestError, ConfigurationError, SatRateError
from core.store.base import KeyValueStore
from core.submission.writer import SubmissionWriter

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Failed to save"


def _request_body(event: dict[str, Any]) -> Any:
    body = event.get("body")
    if event.get("isBase64Encoded") and isinstance(body, str):
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise BadRequestError("Request body is not valid base64") from exc
    return body


def handle(event: dict[str, Any], store: Optional[KeyValueStore], settings: Optional[Settings] = None) -> dict[str, Any]:
    settings = settings or Settings()
    try:
        if store is None:
            raise ConfigurationError()
        ack = SubmissionWriter(store).submit(_request_body(event))
    except SatRateError as exc:
        logger.warning("Submission rejected: %s", exc.message)
        return error_response(exc.status_code, exc.message or FALLBACK_MESSAGE)
    except Exception as exc:
        logger.exception("Failed to save submission")
        return error_response(500, str(exc) or FALLBACK_MESSAGE)
    return json_response(200, ack.model_dump(), allow_origin=settings.allow_origin)
