"""Runtime configuration for pybess tooling."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pybess._constants import DEFAULT_DATASET_PATH, DEFAULT_SEED_PATH, DEFAULT_STORE_PATH
from pybess.state.policy import ScalarMergeStrategy, get_strategy


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class BessConfig:
    """Configuration shared by the ingestion and reporting scripts.

    Parameters
    ----------
    store_path : str
        JSON file backing the asset repository.
    dataset_path : str
        Default telemetry file for ingestion runs.
    seed_path : str
        Asset list used to seed an empty store.
    scalar_merge_strategy : str
        Name of the scalar merge policy (``"overwrite"`` or
        ``"latest_sample"``).
    seed_on_start : bool
        Seed the store before building the dashboard when it is empty.
    """

    store_path: str = DEFAULT_STORE_PATH
    dataset_path: str = DEFAULT_DATASET_PATH
    seed_path: str = DEFAULT_SEED_PATH
    scalar_merge_strategy: str = "overwrite"
    seed_on_start: bool = True

    def merge_strategy(self) -> ScalarMergeStrategy:
        """Resolve :attr:`scalar_merge_strategy`.

        Raises :class:`~pybess.exceptions.BessConfigError` for unknown names.
        """
        return get_strategy(self.scalar_merge_strategy)

    @classmethod
    def from_env(cls, **overrides: Any) -> BessConfig:
        """Create configuration from ``BESS_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "BESS_STORE_PATH": "store_path",
            "BESS_DATASET_PATH": "dataset_path",
            "BESS_SEED_PATH": "seed_path",
            "BESS_SCALAR_MERGE_STRATEGY": "scalar_merge_strategy",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        if "seed_on_start" not in overrides:
            config_kwargs["seed_on_start"] = _env_bool(env.get("BESS_SEED_ON_START"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
