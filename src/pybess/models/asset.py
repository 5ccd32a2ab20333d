"""Asset and telemetry sample models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from pybess._constants import DEFAULT_STATUS
from pybess.models._base import BessBaseModel, UtcDatetime, canonical_timestamp


class AssetStatus(StrEnum):
    """Operating states an asset conventionally reports.

    ``Asset.status`` is a plain string; values outside this enum are
    stored as received.
    """

    ONLINE = "online"
    MAINTENANCE = "maintenance"
    FAULT = "fault"
    COMMISSIONING = "commissioning"


class Metric(BessBaseModel):
    """One telemetry sample for an asset.

    Parameters
    ----------
    timestamp : datetime
        Sample instant (aware UTC).  Its canonical key is the dedup identity.
    state_of_charge : float
        State of charge as a fraction.
    temperature_c : float
        Cell temperature in degrees Celsius.
    """

    timestamp: UtcDatetime
    state_of_charge: float
    temperature_c: float

    @property
    def key(self) -> str:
        """Canonical timestamp key used for exact-instant dedup."""
        return canonical_timestamp(self.timestamp)


class Asset(BessBaseModel):
    """A battery energy storage unit and its telemetry history."""

    asset_id: str = Field(min_length=1)
    """Globally unique, immutable identifier."""
    site: str | None = None
    region: str | None = None
    capacity_mwh: float = Field(alias="capacityMWh")
    """Energy rating in MWh."""
    power_rating_mw: float = Field(alias="powerRatingMW")
    """Power rating in MW."""
    round_trip_efficiency: float
    """Fraction of stored energy recovered per cycle (not range-checked)."""
    availability: float
    """Fraction of time available (not range-checked)."""
    status: str = DEFAULT_STATUS
    last_updated: UtcDatetime | None = None
    """Ingestion wall-clock time of the most recent mutation."""
    metrics: tuple[Metric, ...] = ()
    """Telemetry samples in insertion order."""

    def metric_keys(self) -> set[str]:
        """Canonical keys of every stored sample."""
        return {metric.key for metric in self.metrics}

    @property
    def latest_metric_timestamp(self) -> datetime | None:
        """Newest sample instant, or ``None`` without telemetry."""
        if not self.metrics:
            return None
        return max(metric.timestamp for metric in self.metrics)
