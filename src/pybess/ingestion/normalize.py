"""Normalization of raw asset and telemetry records.

Turns loosely typed JSON-ish records into :class:`~pybess.models.Asset` and
:class:`~pybess.models.Metric` instances, failing fast with a
:class:`~pybess.exceptions.BessValidationError` subclass on the first
malformed field.  Nothing here touches a repository.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import UTC, date, datetime
from typing import Any

from pybess._constants import DEFAULT_STATUS, MS_THRESHOLD, REQUIRED_NUMERIC_FIELDS
from pybess.exceptions import (
    InvalidMetricValueError,
    InvalidNumericFieldError,
    InvalidRecordError,
    InvalidTimestampError,
    MissingIdentifierError,
)
from pybess.models._base import ensure_utc
from pybess.models.asset import Asset, Metric


def finite_float(value: Any) -> float | None:
    """Coerce *value* to a finite float, or ``None`` when that is impossible.

    Booleans, ``None`` and blank strings are not numbers here even though
    ``float()`` would accept some of them.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def _identifier(value: Any) -> str | None:
    """Return *value* as an id string, unchanged, or ``None`` when blank."""
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a sample timestamp to an aware UTC datetime.

    - ``datetime`` -> UTC (naive values are taken as UTC)
    - ``date`` -> midnight UTC
    - ISO 8601 strings (``Z`` suffix, offsets and date-only forms)
    - epoch numbers, seconds or milliseconds (>= 1e12)
    - anything else -> ``None``
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            if not math.isfinite(value):
                return None
            seconds = value / 1000 if abs(value) >= MS_THRESHOLD else value
            return datetime.fromtimestamp(seconds, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return ensure_utc(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def _pick(raw: Mapping[str, Any], wire_name: str, field_name: str) -> Any:
    """Read a field by its camelCase wire name, falling back to snake_case."""
    if wire_name in raw:
        return raw[wire_name]
    return raw.get(field_name)


def normalize_metric(raw: Any, asset_id: str | None = None) -> Metric:
    """Validate one telemetry sample.

    Raises
    ------
    InvalidRecordError
        *raw* is not a mapping.
    InvalidTimestampError
        ``timestamp`` is missing or unparseable.
    InvalidMetricValueError
        ``stateOfCharge`` or ``temperatureC`` is not a finite number.
    """
    if not isinstance(raw, Mapping):
        raise InvalidRecordError(
            f"Invalid metric payload for asset {asset_id or 'unknown'}",
            asset_id=asset_id,
        )

    raw_timestamp = raw.get("timestamp")
    timestamp = parse_timestamp(raw_timestamp)
    if timestamp is None:
        raise InvalidTimestampError(asset_id, raw_timestamp)

    readings: dict[str, float] = {}
    for wire_name, field_name in (("stateOfCharge", "state_of_charge"), ("temperatureC", "temperature_c")):
        number = finite_float(_pick(raw, wire_name, field_name))
        if number is None:
            raise InvalidMetricValueError(wire_name, asset_id)
        readings[field_name] = number

    return Metric(timestamp=timestamp, **readings)


def normalize_asset(raw: Any) -> Asset:
    """Validate and coerce one raw asset record.

    ``status`` defaults to ``online`` and is otherwise accepted as-is.  A
    ``metrics`` value that is not a list is treated as no telemetry.
    Availability and efficiency are not range-checked.
    """
    if not isinstance(raw, Mapping):
        raise InvalidRecordError("Each telemetry record must be an object")

    asset_id = _identifier(_pick(raw, "assetId", "asset_id"))
    if asset_id is None:
        raise MissingIdentifierError()

    ratings: dict[str, float] = {}
    for wire_name, field_name in REQUIRED_NUMERIC_FIELDS:
        number = finite_float(_pick(raw, wire_name, field_name))
        if number is None:
            raise InvalidNumericFieldError(wire_name, asset_id)
        ratings[field_name] = number

    raw_metrics = raw.get("metrics")
    metrics: tuple[Metric, ...] = ()
    if isinstance(raw_metrics, (list, tuple)):
        metrics = tuple(normalize_metric(item, asset_id) for item in raw_metrics)

    return Asset(
        asset_id=asset_id,
        site=safe_str(raw.get("site")),
        region=safe_str(raw.get("region")),
        status=safe_str(raw.get("status")) or DEFAULT_STATUS,
        metrics=metrics,
        **ratings,
    )
