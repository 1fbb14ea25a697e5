"""Data models shared across the writer, aggregator and API."""

from __future__ import annotations

from typing import Any, Iterable

from pydantic import BaseModel, Field

from core.constants import LENGTH_FIELDS, LENGTH_OPTIONS, RATING_FIELDS, RATING_VALUES


class SubmissionAck(BaseModel):
    """Acknowledgement returned after a submission is stored."""

    ok: bool = True
    id: str = Field(..., description="Store key the submission was written under")


class SurveySummary(BaseModel):
    """Anonymous per-field frequency distributions over all stored submissions."""

    total_responses: int = Field(0, alias="totalResponses")
    rating: dict[str, dict[int, int]] = Field(default_factory=dict)
    length: dict[str, dict[str, int]] = Field(default_factory=dict)

    model_config = {
        "populate_by_name": True,
    }

    @classmethod
    def empty(
        cls,
        rating_fields: Iterable[str] = RATING_FIELDS,
        length_fields: Iterable[str] = LENGTH_FIELDS,
        length_options: Iterable[str] = LENGTH_OPTIONS,
    ) -> "SurveySummary":
        options = tuple(length_options)
        return cls(
            total_responses=0,
            rating={field: {value: 0 for value in RATING_VALUES} for field in rating_fields},
            length={field: {option: 0 for option in options} for field in length_fields},
        )

    def rows(self) -> list[dict[str, Any]]:
        """Flatten the distributions into one row per field for tabular output."""
        rows: list[dict[str, Any]] = []
        for field, dist in self.rating.items():
            row: dict[str, Any] = {"field": field, "kind": "rating"}
            row.update({str(value): count for value, count in dist.items()})
            row["answered"] = sum(dist.values())
            rows.append(row)
        for field, dist in self.length.items():
            row = {"field": field, "kind": "length"}
            row.update(dist)
            row["answered"] = sum(dist.values())
            rows.append(row)
        return rows


__all__ = ["SubmissionAck", "SurveySummary"]
