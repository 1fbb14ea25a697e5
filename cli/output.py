"""Output helpers for the SatRate CLI."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Iterable

from pydantic import BaseModel


def _default_serializer(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def render(data: Any, fmt: str) -> str:
    """Render ``data`` as JSON, or a list of row dicts as a markdown or plain table."""
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False, default=_default_serializer)
    if fmt == "md":
        return _to_markdown(data)
    if fmt == "table":
        return _to_table(data)
    raise ValueError(f"Unsupported format: {fmt}")


def emit(data: Any, fmt: str, output_path: Path | None = None) -> None:
    write_text(render(data, fmt), output_path)


def write_jsonl(records: Iterable[Any], output_path: Path | None = None) -> None:
    lines = [json.dumps(record, ensure_ascii=False, default=_default_serializer) for record in records]
    write_text("\n".join(lines), output_path)


def read_payload(source: str) -> str:
    """Read a request payload from a file path, or stdin when ``source`` is ``-``."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def write_text(rendered: str, output_path: Path | None = None) -> None:
    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered + ("\n" if rendered and not rendered.endswith("\n") else ""), encoding="utf-8")
    elif rendered:
        print(rendered)


def _headers(rows: list[dict[str, Any]]) -> list[str]:
    headers: list[str] = []
    for row in rows:
        for key in row:
            if key not in headers:
                headers.append(key)
    return headers


def _to_markdown(rows: list[dict[str, Any]]) -> str:
    headers = _headers(rows)
    lines = ["| " + " | ".join(headers) + " |", "| " + " | ".join(["---"] * len(headers)) + " |"]
    for row in rows:
        values = [str(row.get(header, "")) for header in headers]
        lines.append("| " + " | ".join(values) + " |")
    return "\n".join(lines)


def _to_table(rows: list[dict[str, Any]]) -> str:
    headers = _headers(rows)
    widths = {header: max(len(header), *(len(str(row.get(header, ""))) for row in rows)) for header in headers}
    header_line = " ".join(header.ljust(widths[header]) for header in headers)
    sep_line = " ".join("-" * widths[header] for header in headers)
    lines = [" ".join(str(row.get(header, "")).ljust(widths[header]) for header in headers) for row in rows]
    return "\n".join([header_line, sep_line, *lines])


__all__ = ["emit", "render", "write_jsonl", "write_text", "read_payload"]
