from __future__ import annotations

import pytest

from pybess.config import BessConfig
from pybess.exceptions import BessConfigError
from pybess.state.policy import LATEST_SAMPLE, OVERWRITE

_ENV_KEYS = (
    "BESS_STORE_PATH",
    "BESS_DATASET_PATH",
    "BESS_SEED_PATH",
    "BESS_SCALAR_MERGE_STRATEGY",
    "BESS_SEED_ON_START",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = BessConfig.from_env()

    assert config.store_path == "bess-store.json"
    assert config.dataset_path == "data/bess-telemetry-sample.json"
    assert config.seed_on_start is True
    assert config.merge_strategy() is OVERWRITE


def test_values_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BESS_STORE_PATH", "/tmp/store.json")
    monkeypatch.setenv("BESS_SCALAR_MERGE_STRATEGY", "latest_sample")
    monkeypatch.setenv("BESS_SEED_ON_START", "no")

    config = BessConfig.from_env()

    assert config.store_path == "/tmp/store.json"
    assert config.merge_strategy() is LATEST_SAMPLE
    assert config.seed_on_start is False


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BESS_STORE_PATH", "/tmp/store.json")
    monkeypatch.setenv("BESS_SEED_ON_START", "false")

    config = BessConfig.from_env(store_path="other.json", seed_on_start=True)

    assert config.store_path == "other.json"
    assert config.seed_on_start is True


def test_unparseable_bool_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BESS_SEED_ON_START", "maybe")

    assert BessConfig.from_env().seed_on_start is True


def test_unknown_strategy_raises_on_use() -> None:
    config = BessConfig(scalar_merge_strategy="first_write_wins")

    with pytest.raises(BessConfigError):
        config.merge_strategy()
