from __future__ import annotations

from datetime import UTC, datetime

import pytest

from pybess.analytics.summary import format_summary, summarize
from pybess.models.asset import Asset, Metric
from pybess.models.reports import AssetSummary


def _asset(asset_id: str, *samples: tuple[datetime, float]) -> Asset:
    return Asset(
        asset_id=asset_id,
        site="NASA Glenn Research Center",
        region="Ohio",
        capacity_mwh=10.0,
        power_rating_mw=5.0,
        round_trip_efficiency=0.9,
        availability=0.95,
        metrics=tuple(Metric(timestamp=ts, state_of_charge=soc, temperature_c=20.0) for ts, soc in samples),
    )


T1 = datetime(2024, 1, 8, 3, tzinfo=UTC)
T2 = datetime(2024, 1, 8, 1, tzinfo=UTC)


def test_empty_input() -> None:
    assert summarize([]) == []


def test_average_and_latest_timestamp() -> None:
    (summary,) = summarize([_asset("a1", (T1, 0.6), (T2, 0.8))])

    assert summary.asset_id == "a1"
    assert summary.site == "NASA Glenn Research Center"
    assert summary.region == "Ohio"
    assert summary.metrics_count == 2
    assert summary.average_state_of_charge == pytest.approx(0.7)
    # T1 is chronologically later even though it was stored first.
    assert summary.latest_timestamp == T1


def test_asset_without_metrics() -> None:
    (summary,) = summarize([_asset("a1")])

    assert summary.metrics_count == 0
    assert summary.latest_timestamp is None
    assert summary.average_state_of_charge is None


def test_filter_restricts_and_ignores_unknown_ids() -> None:
    assets = [_asset("a1", (T1, 0.5)), _asset("a2", (T1, 0.5)), _asset("a3")]

    summaries = summarize(assets, {"a3", "a1", "missing"})

    assert [summary.asset_id for summary in summaries] == ["a1", "a3"]


def test_empty_filter_means_all_assets() -> None:
    assets = [_asset("a1"), _asset("a2")]

    assert len(summarize(assets, [])) == 2
    assert len(summarize(assets, None)) == 2


def test_unknown_ids_only_yield_nothing() -> None:
    assert summarize([_asset("a1")], ["non-existent-asset"]) == []


def test_format_summary() -> None:
    (summary,) = summarize([_asset("a1", (T1, 0.6), (T2, 0.8))])

    assert format_summary(summary).splitlines() == [
        "Asset a1 (NASA Glenn Research Center, Ohio)",
        "  Telemetry samples: 2",
        "  Latest sample: 2024-01-08T03:00:00.000Z",
        "  Avg state-of-charge: 0.700",
    ]


def test_format_summary_without_telemetry() -> None:
    text = format_summary(AssetSummary(asset_id="a9"))

    assert "Latest sample: n/a" in text
    assert "Avg state-of-charge: n/a" in text
    assert text.startswith("Asset a9 (n/a, n/a)")
