"""Asset repository mirrored to a JSON file.

The file holds a JSON array of assets in the camelCase wire format, the
same shape the ingestion scripts accept.  The whole store is rewritten
after every write; it is meant for tooling and small fleets, not as a
database.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from pybess.exceptions import RepositoryError
from pybess.models.asset import Asset
from pybess.repository.memory import InMemoryAssetRepository

_logger = logging.getLogger(__name__)

_ASSET_LIST = TypeAdapter(list[Asset])


class JsonFileAssetRepository(InMemoryAssetRepository):
    """In-memory repository loaded from and persisted to *path*.

    A missing file starts an empty store; it is created on first write.

    Raises
    ------
    RepositoryError
        The file cannot be read, decoded, or written.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._write_lock = asyncio.Lock()
        super().__init__(self._load())

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> list[Asset]:
        if not self._path.exists():
            _logger.debug("Asset store %s does not exist yet; starting empty", self._path)
            return []
        try:
            payload = self._path.read_bytes()
        except OSError as exc:
            raise RepositoryError(f"Cannot read asset store {self._path}: {exc}") from exc
        if not payload.strip():
            return []
        try:
            assets = _ASSET_LIST.validate_json(payload)
        except ValidationError as exc:
            raise RepositoryError(f"Asset store {self._path} is corrupt: {exc}") from exc
        _logger.debug("Loaded %d assets from %s", len(assets), self._path)
        return assets

    def _write(self, payload: bytes) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(payload)
            os.replace(tmp_path, self._path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

    async def _store(self, asset: Asset) -> None:
        # Memory only changes after the file holds the new snapshot.
        async with self._write_lock:
            snapshot = dict(self._assets)
            snapshot[asset.asset_id] = asset
            payload = _ASSET_LIST.dump_json(list(snapshot.values()), by_alias=True, indent=2)
            try:
                await asyncio.to_thread(self._write, payload)
            except OSError as exc:
                raise RepositoryError(f"Cannot write asset store {self._path}: {exc}") from exc
            self._assets[asset.asset_id] = asset
