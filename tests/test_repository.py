from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from pybess.exceptions import RepositoryError
from pybess.models.asset import Asset, Metric
from pybess.repository import InMemoryAssetRepository, JsonFileAssetRepository
from pybess.state.merge import MergeResult, merge_asset

NOW = datetime(2026, 1, 1, tzinfo=UTC)


def _asset(asset_id: str, *hours: int) -> Asset:
    return Asset(
        asset_id=asset_id,
        site="Site",
        region="X",
        capacity_mwh=10.0,
        power_rating_mw=5.0,
        round_trip_efficiency=0.9,
        availability=0.95,
        metrics=tuple(
            Metric(timestamp=datetime(2024, 1, 1, hour, tzinfo=UTC), state_of_charge=0.5, temperature_c=20.0)
            for hour in hours
        ),
    )


class TestInMemoryAssetRepository:
    @pytest.mark.asyncio
    async def test_list_preserves_insertion_order_and_filters(self) -> None:
        repository = InMemoryAssetRepository([_asset("b"), _asset("a")])
        await repository.upsert_asset(_asset("c"))

        assert [asset.asset_id for asset in await repository.list_assets()] == ["b", "a", "c"]
        assert [asset.asset_id for asset in await repository.list_assets({"c", "b", "zz"})] == ["b", "c"]
        assert await repository.count_assets() == 3

    @pytest.mark.asyncio
    async def test_upsert_replaces_in_place(self) -> None:
        repository = InMemoryAssetRepository([_asset("a"), _asset("b")])

        await repository.upsert_asset(_asset("a", 1))

        stored = await repository.find_asset_by_id("a")
        assert stored is not None and len(stored.metrics) == 1
        assert [asset.asset_id for asset in await repository.list_assets()] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_find_missing(self) -> None:
        assert await InMemoryAssetRepository().find_asset_by_id("nope") is None

    @pytest.mark.asyncio
    async def test_upsert_with_merge_sees_current_state(self) -> None:
        repository = InMemoryAssetRepository([_asset("a", 0)])
        seen: list[Asset | None] = []

        def _merge(existing: Asset | None) -> MergeResult:
            seen.append(existing)
            return merge_asset(existing, _asset("a", 1), NOW)

        result = await repository.upsert_with_merge("a", _merge)

        assert seen[0] is not None and len(seen[0].metrics) == 1
        assert result.metrics_inserted == 1
        stored = await repository.find_asset_by_id("a")
        assert stored is not None and len(stored.metrics) == 2

    @pytest.mark.asyncio
    async def test_upsert_with_merge_rejects_id_change(self) -> None:
        repository = InMemoryAssetRepository()

        with pytest.raises(ValueError):
            await repository.upsert_with_merge("a", lambda existing: merge_asset(existing, _asset("b"), NOW))

        assert await repository.count_assets() == 0

    @pytest.mark.asyncio
    async def test_merge_errors_leave_store_untouched(self) -> None:
        repository = InMemoryAssetRepository([_asset("a", 0)])

        def _boom(existing: Asset | None) -> MergeResult:
            raise RuntimeError("merge failed")

        with pytest.raises(RuntimeError):
            await repository.upsert_with_merge("a", _boom)

        stored = await repository.find_asset_by_id("a")
        assert stored is not None and len(stored.metrics) == 1


class TestJsonFileAssetRepository:
    @pytest.mark.asyncio
    async def test_missing_file_starts_empty_and_is_created_on_write(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "store.json"
        repository = JsonFileAssetRepository(path)

        assert await repository.count_assets() == 0
        assert not path.exists()

        await repository.upsert_asset(_asset("a", 0))

        assert path.exists()
        payload = json.loads(path.read_text(encoding="utf-8"))
        assert payload[0]["assetId"] == "a"
        assert payload[0]["capacityMWh"] == 10.0
        assert payload[0]["metrics"][0]["stateOfCharge"] == 0.5

    @pytest.mark.asyncio
    async def test_state_survives_reopen(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        first = JsonFileAssetRepository(path)
        await first.upsert_with_merge("a", lambda existing: merge_asset(existing, _asset("a", 0, 1), NOW))

        reopened = JsonFileAssetRepository(path)

        stored = await reopened.find_asset_by_id("a")
        assert stored is not None
        assert stored == await first.find_asset_by_id("a")
        assert stored.last_updated == NOW

    def test_corrupt_file(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text('[{"assetId": "a"}]', encoding="utf-8")

        with pytest.raises(RepositoryError):
            JsonFileAssetRepository(path)

    def test_blank_file_is_empty_store(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("\n", encoding="utf-8")

        assert JsonFileAssetRepository(path).path == path

    @pytest.mark.asyncio
    async def test_failed_write_leaves_memory_and_disk_unchanged(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        repository = JsonFileAssetRepository(path)
        await repository.upsert_asset(_asset("a", 0))
        path.unlink()
        path.mkdir()

        with pytest.raises(RepositoryError):
            await repository.upsert_with_merge("a", lambda existing: merge_asset(existing, _asset("a", 1), NOW))
        with pytest.raises(RepositoryError):
            await repository.upsert_asset(_asset("b"))

        stored = await repository.find_asset_by_id("a")
        assert stored is not None and len(stored.metrics) == 1
        assert await repository.find_asset_by_id("b") is None
        assert await repository.count_assets() == 1
        assert not (tmp_path / "store.json.tmp").exists()

        path.rmdir()
        retried = await repository.upsert_with_merge("a", lambda existing: merge_asset(existing, _asset("a", 1), NOW))
        assert retried.metrics_inserted == 1
        reopened = await JsonFileAssetRepository(path).find_asset_by_id("a")
        assert reopened is not None and len(reopened.metrics) == 2
