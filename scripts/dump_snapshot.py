#!/usr/bin/env python3
"""Print the device context snapshot for this host.

Configuration is read from ``LQD_*`` environment variables; command
line flags override them.

Examples:
  python scripts/dump_snapshot.py
  python scripts/dump_snapshot.py --storage ~/.lqd/prefs.json --location 52.37 4.89
  python scripts/dump_snapshot.py --push-token abc123 --compact
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pylqd import DeviceProfile, LqdConfig, LqdError  # noqa: E402
from pylqd.host import HostFactsProvider  # noqa: E402


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print the device context snapshot for this host")
    parser.add_argument("--storage", help="Preferences file holding the device identifier")
    parser.add_argument("--package", help="Installed distribution describing the host app")
    parser.add_argument("--location", nargs=2, type=float, metavar=("LAT", "LON"))
    parser.add_argument("--push-token", default=None)
    parser.add_argument("--screen", default="0x0", help="Screen size as WIDTHxHEIGHT")
    parser.add_argument("--compact", action="store_true", help="Emit compact JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def _parse_screen(value: str) -> tuple[int, int]:
    width, _, height = value.lower().partition("x")
    return int(width), int(height)


def main() -> int:
    args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.storage:
        overrides["storage_path"] = str(Path(args.storage).expanduser())
    if args.package:
        overrides["package_name"] = args.package

    try:
        config = LqdConfig.from_env(**overrides)
        facts = HostFactsProvider(config, screen=_parse_screen(args.screen))
        profile = DeviceProfile.from_config(
            config,
            facts=facts,
            location=tuple(args.location) if args.location else None,
        )
    except (LqdError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    profile.set_push_token(args.push_token)
    snapshot = profile.snapshot()
    if snapshot is None:
        print("error: snapshot could not be serialized", file=sys.stderr)
        return 1

    if args.compact:
        print(json.dumps(snapshot, separators=(",", ":")))
    else:
        print(json.dumps(snapshot, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
