"""Configuration loader shared by the Lambda entrypoint and the CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from core.constants import LIST_PAGE_SIZE

DEFAULTS = {
    "store_url": None,
    "page_size": LIST_PAGE_SIZE,
    "allow_origin": "*",
    "log_level": "INFO",
    "default_format": "json",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENV_VARS = {
    "store_url": "SATRATE_KV",
    "page_size": "SATRATE_PAGE_SIZE",
    "allow_origin": "SATRATE_ALLOW_ORIGIN",
    "log_level": "SATRATE_LOG_LEVEL",
}


@dataclass(slots=True)
class Settings:
    store_url: str | None = DEFAULTS["store_url"]
    page_size: int = DEFAULTS["page_size"]
    allow_origin: str = DEFAULTS["allow_origin"]
    log_level: str = DEFAULTS["log_level"]
    default_format: str = DEFAULTS["default_format"]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Settings":
        page_size = int(data.get("page_size") or DEFAULTS["page_size"])
        if page_size < 1:
            raise ValueError("page_size must be a positive integer.")
        log_level = str(data.get("log_level") or DEFAULTS["log_level"]).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log_level: {log_level}")
        return cls(
            store_url=data.get("store_url") or DEFAULTS["store_url"],
            page_size=page_size,
            allow_origin=data.get("allow_origin") or DEFAULTS["allow_origin"],
            log_level=log_level,
            default_format=data.get("default_format") or DEFAULTS["default_format"],
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, base: "Settings | None" = None) -> "Settings":
        """Overlay ``SATRATE_*`` environment variables on ``base`` (or the defaults)."""
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {}
        if base is not None:
            data.update(
                store_url=base.store_url,
                page_size=base.page_size,
                allow_origin=base.allow_origin,
                log_level=base.log_level,
                default_format=base.default_format,
            )
        for name, variable in ENV_VARS.items():
            value = env.get(variable)
            if value:
                data[name] = value
        return cls.from_mapping(data)

    def merge_cli(self, store_url: str | None = None, format_override: str | None = None) -> "Settings":
        return replace(
            self,
            store_url=store_url or self.store_url,
            default_format=format_override or self.default_format,
        )


def load_settings(path: Path) -> Settings:
    if not path.exists():
        return Settings()

    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    if not isinstance(data, dict):
        raise ValueError("Configuration file must be a mapping of keys to values.")

    return Settings.from_mapping(data)


__all__ = ["Settings", "load_settings"]
