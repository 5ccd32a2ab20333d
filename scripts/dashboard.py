#!/usr/bin/env python3
"""Print the fleet dashboard payload as JSON.

Seeds an empty store from the sample asset list first (disable with
``BESS_SEED_ON_START=false``).

Options::

    --store FILE         Asset store JSON file (default: $BESS_STORE_PATH)
    --seed FILE          Seed asset list (default: $BESS_SEED_PATH)
    --metrics-only       Omit the asset list from the output
    --verbose / -v       Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pybess import BessConfig, BessError, FleetService, JsonFileAssetRepository  # noqa: E402

LOG = logging.getLogger("dashboard")


async def run(args: argparse.Namespace) -> int:
    overrides = {}
    if args.store:
        overrides["store_path"] = args.store
    if args.seed:
        overrides["seed_path"] = args.seed
    config = BessConfig.from_env(**overrides)

    try:
        service = FleetService(JsonFileAssetRepository(config.store_path), strategy=config.merge_strategy())
        if config.seed_on_start:
            seed_path = Path(config.seed_path)
            try:
                records = json.loads(seed_path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                LOG.warning("Failed to read seed file %s: %s", seed_path, exc)
            else:
                outcome = await service.seed(records if isinstance(records, list) else [])
                if outcome.seeded:
                    LOG.info("Seeded %d BESS assets", outcome.count)
                else:
                    LOG.info("BESS asset store already populated (%d records)", outcome.count)
        payload = await service.dashboard()
    except BessError as exc:
        print(f"Failed to build dashboard metrics: {exc}", file=sys.stderr)
        return 1

    output = payload.metrics.to_wire() if args.metrics_only else payload.to_wire()
    print(json.dumps(output, indent=2))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Build the BESS fleet dashboard payload.")
    parser.add_argument("--store", help="Asset store JSON file")
    parser.add_argument("--seed", help="Seed asset list JSON file")
    parser.add_argument("--metrics-only", action="store_true", help="Omit the asset list from the output")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
