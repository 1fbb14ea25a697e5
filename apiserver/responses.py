"""JSON response envelopes for API Gateway proxy integrations."""

from __future__ import annotations

import json
from typing import Any

JSON_HEADERS = {"Content-Type": "application/json"}


def json_response(status: int, body: Any, allow_origin: str | None = None) -> dict[str, Any]:
    headers = dict(JSON_HEADERS)
    if allow_origin:
        headers["Access-Control-Allow-Origin"] = allow_origin
    return {
        "statusCode": status,
        "headers": headers,
        "body": json.dumps(body, ensure_ascii=False),
    }


def error_response(status: int, message: str) -> dict[str, Any]:
    return json_response(status, {"error": message})


def preflight_response(allow_origin: str, methods: str) -> dict[str, Any]:
    return {
        "statusCode": 204,
        "headers": {
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Methods": methods,
            "Access-Control-Allow-Headers": "Content-Type",
        },
        "body": "",
    }


__all__ = ["JSON_HEADERS", "json_response", "error_response", "preflight_response"]
