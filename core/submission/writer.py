"""Persist survey submissions under time-ordered keys."""

from __future__ import annotations

import json
import logging
import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Mapping, Optional

from core.constants import KEY_PREFIX
from core.errors import BadRequestError, ConfigurationError
from core.models import SubmissionAck
from core.store.base import KeyValueStore

logger = logging.getLogger(__name__)

SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
SUFFIX_LENGTH = 7
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def epoch_millis(moment: datetime) -> int:
    return (_as_utc(moment) - EPOCH) // timedelta(milliseconds=1)


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    text = _as_utc(moment).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def new_submission_id(moment: datetime, suffix_length: int = SUFFIX_LENGTH) -> str:
    suffix = "".join(secrets.choice(SUFFIX_ALPHABET) for _ in range(suffix_length))
    return f"{KEY_PREFIX}{epoch_millis(moment)}:{suffix}"


def parse_body(raw: str | bytes | Mapping[str, Any] | None) -> dict[str, Any]:
    """Decode a request body into a submission mapping."""
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BadRequestError("Request body is not valid UTF-8") from exc
    if raw is None or not raw.strip():
        raise BadRequestError("Request body is empty")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise BadRequestError(f"Request body is not valid JSON: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise BadRequestError("Request body must be a JSON object")
    return data


def _is_truthy(value: Any) -> bool:
    """JSON-level truthiness: empty containers are kept, as a browser client would."""
    if isinstance(value, float) and value != value:
        return False
    return value not in (None, "", 0, False)


def build_record(body: Mapping[str, Any], moment: datetime) -> dict[str, Any]:
    record = dict(body)
    supplied = body.get("submittedAt")
    record["submittedAt"] = supplied if _is_truthy(supplied) else format_timestamp(moment)
    return record


class SubmissionWriter:
    """Write one submission per call; no retries, no uniqueness check."""

    def __init__(
        self,
        store: Optional[KeyValueStore],
        clock: Optional[Clock] = None,
        suffix_length: int = SUFFIX_LENGTH,
    ) -> None:
        self.store = store
        self.clock = clock or _utc_now
        self.suffix_length = suffix_length

    def submit(self, raw: str | bytes | Mapping[str, Any] | None) -> SubmissionAck:
        if self.store is None:
            raise ConfigurationError()

        body = parse_body(raw)
        moment = self.clock()
        key = new_submission_id(moment, self.suffix_length)
        record = build_record(body, moment)
        self.store.put(key, json.dumps(record))
        logger.info("Stored submission %s", key)
        return SubmissionAck(id=key)


__all__ = ["SubmissionWriter", "build_record", "format_timestamp", "new_submission_id", "parse_body"]
