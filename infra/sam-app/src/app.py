"""SAM entrypoint for the survey API function (Handler: app.lambda_handler)."""

from __future__ import annotations

from typing import Any

from apiserver.app import lambda_handler as survey_api_handler


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    return survey_api_handler(event, context)
