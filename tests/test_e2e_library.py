from __future__ import annotations

import json
from pathlib import Path

import pytest

from pybess import FleetService, IngestionPipeline, IngestionResult, JsonFileAssetRepository

DATASET_PATH = Path(__file__).resolve().parent.parent / "data" / "bess-telemetry-sample.json"


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_ingest_verify_and_dashboard_through_file_store(tmp_path: Path) -> None:
    store = tmp_path / "store.json"

    result = await IngestionPipeline(JsonFileAssetRepository(store)).ingest_file(DATASET_PATH)
    assert result == IngestionResult(assets_processed=2, new_assets=2, metrics_inserted=6)

    # A second run in a fresh process sees the persisted store.
    rerun = await IngestionPipeline(JsonFileAssetRepository(store)).ingest_file(DATASET_PATH)
    assert rerun == IngestionResult(assets_processed=2, new_assets=0, metrics_inserted=0)

    service = FleetService(JsonFileAssetRepository(store))
    (summary,) = await service.telemetry_summary(["nasa-bess-001"])
    assert summary.site == "NASA Glenn Research Center"
    assert summary.region == "Ohio"
    assert summary.metrics_count == 3
    assert summary.average_state_of_charge is not None
    assert 0.6 < summary.average_state_of_charge < 0.8

    payload = await service.dashboard()
    assert payload.metrics.total_assets == 2
    assert payload.metrics.total_capacity_mwh == 32.5
    assert payload.metrics.average_availability == 95.0
    assert payload.metrics.average_round_trip_efficiency == 90.0
    assert [point.average_state_of_charge for point in payload.metrics.state_of_charge_trend] == [0.54, 0.6, 0.66]


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_incremental_file_appends_only_new_samples(tmp_path: Path) -> None:
    store = tmp_path / "store.json"
    await IngestionPipeline(JsonFileAssetRepository(store)).ingest_file(DATASET_PATH)

    dataset = json.loads(DATASET_PATH.read_text(encoding="utf-8"))
    first = dataset[0]
    first["metrics"] = [
        first["metrics"][0],
        {"timestamp": "2024-01-08T03:00:00Z", "stateOfCharge": 0.8, "temperatureC": 22.9},
    ]
    incremental = tmp_path / "incremental.json"
    incremental.write_text(json.dumps([first]), encoding="utf-8")

    result = await IngestionPipeline(JsonFileAssetRepository(store)).ingest_file(incremental)

    assert result == IngestionResult(assets_processed=1, new_assets=0, metrics_inserted=1)
    stored = await JsonFileAssetRepository(store).find_asset_by_id("nasa-bess-001")
    assert stored is not None
    assert len(stored.metrics) == 4
