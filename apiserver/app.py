"""Entrypoint compatible with AWS Lambda + API Gateway."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from apiserver.responses import error_response, preflight_response
from apiserver.routes import results, submit
from core.config import Settings
from core.errors import ConfigurationError
from core.store.base import KeyValueStore
from core.store.factory import open_store

logger = logging.getLogger(__name__)

RouteHandler = Callable[[dict[str, Any], Optional[KeyValueStore], Settings], dict[str, Any]]


ROUTES: Dict[str, RouteHandler] = {
    "POST /api/submit": submit,
    "GET /api/results": results,
}

_STORES: Dict[str, KeyValueStore] = {}


def resolve_store(settings: Settings) -> Optional[KeyValueStore]:
    """Return the store bound via ``SATRATE_KV``, or ``None`` when unbound."""
    if not settings.store_url:
        return None
    store = _STORES.get(settings.store_url)
    if store is None:
        store = open_store(settings.store_url)
        _STORES[settings.store_url] = store
    return store


def _allowed_methods(path: str) -> list[str]:
    return sorted(key.split(" ", 1)[0] for key in ROUTES if key.split(" ", 1)[1] == path)


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return error_response(500, str(exc))
    logging.getLogger().setLevel(settings.log_level)

    method = (event.get("httpMethod") or "GET").upper()
    path = event.get("resource") or event.get("path", "/")
    key = f"{method} {path}"
    logger.info("Dispatching %s", key)

    if method == "OPTIONS":
        methods = _allowed_methods(path)
        if methods:
            return preflight_response(settings.allow_origin, ",".join([*methods, "OPTIONS"]))

    handler = ROUTES.get(key)
    if not handler:
        return error_response(404, "Route not found")

    try:
        store = resolve_store(settings)
    except ConfigurationError as exc:
        logger.warning("Store binding unusable: %s", exc.message)
        return error_response(exc.status_code, exc.message)
    return handler(event, store, settings)
