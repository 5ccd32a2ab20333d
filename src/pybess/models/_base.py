"""Base model and timestamp helpers for pybess models.

Every pybess model inherits from :class:`BessBaseModel` which provides:

* ``alias_generator=to_camel`` so the camelCase wire format maps
  automatically to snake_case fields.  Fields whose wire name keeps an
  upper-case unit suffix (``capacityMWh``) declare an explicit alias.
* ``populate_by_name=True`` so Python callers can use field names.
* Frozen instances; updates go through ``model_copy(update=...)``.

Timestamps are normalised to timezone-aware UTC datetimes.  The
canonical string key of an instant (:func:`canonical_timestamp`) is the
identity used for telemetry deduplication and trend grouping.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def ensure_utc(value: datetime) -> datetime:
    """Return *value* as an aware UTC datetime (naive values are taken as UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def canonical_timestamp(value: datetime) -> str:
    """Render an instant as its canonical ISO 8601 key.

    ``2024-01-01T00:00:00.000Z`` for whole milliseconds, microsecond
    precision otherwise.  Distinct instants always map to distinct keys.
    """
    utc = ensure_utc(value)
    timespec = "milliseconds" if utc.microsecond % 1000 == 0 else "microseconds"
    return utc.replace(tzinfo=None).isoformat(timespec=timespec) + "Z"


UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]
"""Annotated type that normalises datetimes to aware UTC."""


class BessBaseModel(BaseModel):
    """Base for pybess domain and report models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        allow_inf_nan=False,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump using camelCase aliases and JSON-compatible values."""
        return self.model_dump(by_alias=True, mode="json")
