"""Scalar-field merge policies.

This module decides which descriptive/rating fields of an incoming record
replace the stored ones.  Telemetry samples are never handled here; the
merge step appends them independently of the policy.
"""

from __future__ import annotations

from typing import Any, Protocol

from pybess.exceptions import BessConfigError
from pybess.models.asset import Asset

SCALAR_FIELDS: tuple[str, ...] = (
    "site",
    "region",
    "capacity_mwh",
    "power_rating_mw",
    "round_trip_efficiency",
    "availability",
    "status",
)


class ScalarMergeStrategy(Protocol):
    name: str

    def resolve(self, existing: Asset, incoming: Asset) -> dict[str, Any]:
        """Return the scalar field updates to apply to *existing*."""
        ...


def _scalars(asset: Asset) -> dict[str, Any]:
    return {field: getattr(asset, field) for field in SCALAR_FIELDS}


class OverwriteScalars:
    """Last write wins: every scalar is replaced, no conflict detection."""

    name = "overwrite"

    def resolve(self, existing: Asset, incoming: Asset) -> dict[str, Any]:
        return _scalars(incoming)


class LatestSampleWins:
    """Replace scalars only when the incoming record carries telemetry at
    least as new as what is stored.

    A side without samples gives no ordering signal, in which case the
    incoming record wins.
    """

    name = "latest_sample"

    def resolve(self, existing: Asset, incoming: Asset) -> dict[str, Any]:
        stored_latest = existing.latest_metric_timestamp
        incoming_latest = incoming.latest_metric_timestamp
        if stored_latest is None or incoming_latest is None or incoming_latest >= stored_latest:
            return _scalars(incoming)
        return {}


OVERWRITE = OverwriteScalars()
LATEST_SAMPLE = LatestSampleWins()

STRATEGIES: dict[str, ScalarMergeStrategy] = {
    OVERWRITE.name: OVERWRITE,
    LATEST_SAMPLE.name: LATEST_SAMPLE,
}


def get_strategy(name: str) -> ScalarMergeStrategy:
    """Look up a strategy by its configured name."""
    strategy = STRATEGIES.get(name.strip().lower())
    if strategy is None:
        raise BessConfigError(f"Unknown scalar merge strategy {name!r}; expected one of {sorted(STRATEGIES)}")
    return strategy
