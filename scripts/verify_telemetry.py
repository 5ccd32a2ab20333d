#!/usr/bin/env python3
"""Print per-asset telemetry summaries from the asset store.

Usage
-----
::

    python scripts/verify_telemetry.py                   # every asset
    python scripts/verify_telemetry.py nasa-bess-001     # selected assets

Options::

    --store FILE         Asset store JSON file (default: $BESS_STORE_PATH)
    --json               Output machine-readable JSON
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

from pybess import BessConfig, BessError, FleetService, JsonFileAssetRepository, format_summary  # noqa: E402


async def run(args: argparse.Namespace) -> int:
    config = BessConfig.from_env(**({"store_path": args.store} if args.store else {}))
    try:
        service = FleetService(JsonFileAssetRepository(config.store_path))
        summaries = await service.telemetry_summary(args.asset_ids)
    except BessError as exc:
        print(f"Failed to verify telemetry: {exc}", file=sys.stderr)
        return 1

    if args.json_mode:
        print(json.dumps([summary.to_wire() for summary in summaries], indent=2))
        return 0

    if not summaries:
        if args.asset_ids:
            print(f"No telemetry found for asset IDs: {', '.join(args.asset_ids)}")
        else:
            print("No BESS telemetry records found in the asset store.")
        return 0

    for summary in summaries:
        print(format_summary(summary))
        print()
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Summarize stored BESS telemetry per asset.")
    parser.add_argument("asset_ids", nargs="*", help="Restrict to these asset IDs")
    parser.add_argument("--store", help="Asset store JSON file")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
