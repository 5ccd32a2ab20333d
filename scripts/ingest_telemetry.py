#!/usr/bin/env python3
"""Ingest a BESS telemetry file into the asset store.

Usage
-----
::

    python scripts/ingest_telemetry.py                      # default dataset
    python scripts/ingest_telemetry.py path/to/telemetry.json

Options::

    --store FILE         Asset store JSON file (default: $BESS_STORE_PATH)
    --strategy NAME      Scalar merge strategy: overwrite | latest_sample
    --verbose / -v       Enable debug logging

Exit code is 1 when the file cannot be ingested.  Records written before a
failing record stay in the store.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pybess import BessConfig, BessError, IngestionPipeline, JsonFileAssetRepository  # noqa: E402

LOG = logging.getLogger("ingest_telemetry")


async def run(args: argparse.Namespace) -> int:
    overrides = {}
    if args.store:
        overrides["store_path"] = args.store
    if args.strategy:
        overrides["scalar_merge_strategy"] = args.strategy
    config = BessConfig.from_env(**overrides)

    dataset = Path(args.dataset or config.dataset_path)
    try:
        repository = JsonFileAssetRepository(config.store_path)
        pipeline = IngestionPipeline(repository, strategy=config.merge_strategy())
        result = await pipeline.ingest_file(dataset)
    except BessError as exc:
        print(f"Telemetry ingestion failed: {exc}", file=sys.stderr)
        LOG.debug("Ingestion failure", exc_info=True)
        return 1

    print(f"Processed {result.assets_processed} BESS assets from {dataset}")
    print(f"New assets inserted: {result.new_assets}")
    print(f"Telemetry points ingested: {result.metrics_inserted}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Ingest a BESS telemetry JSON file into the asset store.")
    parser.add_argument("dataset", nargs="?", help="Telemetry JSON file (default: $BESS_DATASET_PATH)")
    parser.add_argument("--store", help="Asset store JSON file")
    parser.add_argument("--strategy", help="Scalar merge strategy (overwrite, latest_sample)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
