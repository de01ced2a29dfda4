#!/usr/bin/env python3
"""Prepare cabinet panels for the packing optimizer and resolve GADDI marking."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cutlist_prep import (
    PlacementError,
    PrepConfig,
    build_grain_lookup,
    markings_for_parts,
    prepare_parts,
)
from cutlist_prep.observers import LoggingObserver

logger = logging.getLogger("prepare_cutlist")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Normalize, constrain and order cabinet panels for nesting"
    )
    parser.add_argument(
        "--panels", required=True, help="JSON file with a list of raw panels"
    )
    grain = parser.add_mutually_exclusive_group()
    grain.add_argument(
        "--grain", help="JSON object mapping front laminate code -> wood grain flag"
    )
    grain.add_argument(
        "--laminates", help="JSON list of laminate catalog records"
    )
    parser.add_argument(
        "--placements",
        help="JSON object mapping part id -> {\"w\": .., \"h\": ..} from the optimizer",
    )
    parser.add_argument("--output", help="Write prepared parts/markings JSON here")
    parser.add_argument(
        "--backfill-display",
        action="store_true",
        help="Write resolved display dimensions back onto the panel records",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logs"
    )
    return parser


def _load_json(parser: argparse.ArgumentParser, path: str, kind: type):
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        parser.error(f"cannot read {path}: {exc}")
    if not isinstance(payload, kind):
        parser.error(f"{path} must contain a JSON {kind.__name__}")
    return payload


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    panels = _load_json(parser, args.panels, list)
    grain_lookup = {}
    if args.grain:
        grain_lookup = _load_json(parser, args.grain, dict)
    elif args.laminates:
        grain_lookup = build_grain_lookup(_load_json(parser, args.laminates, list))

    config = PrepConfig(backfill_display=args.backfill_display)
    result = prepare_parts(
        panels, grain_lookup, config=config, observer=LoggingObserver()
    )

    markings = {}
    if args.placements:
        placements = _load_json(parser, args.placements, dict)
        by_id = {part.id: part for part in result.parts}
        for part_id, placed in placements.items():
            part = by_id.get(part_id)
            if part is None or not isinstance(placed, dict):
                logger.warning("Placement for part %s ignored", part_id)
                continue
            try:
                part.apply_placement(placed.get("w", 0), placed.get("h", 0))
            except PlacementError as exc:
                logger.error("%s", exc)
                return 1
        markings = markings_for_parts(result.parts, config)

    payload = {
        "parts": [part.to_dict() for part in result.parts],
        "roleCounts": result.role_counts,
        "markings": {part_id: m.to_dict() for part_id, m in markings.items()},
    }
    if args.backfill_display:
        payload["panels"] = panels
    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        with out.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

    locked = sum(1 for part in result.parts if not part.rotation_allowed)
    print(f"Parts: {len(result.parts)}")
    print(f"Grain locked: {locked}")
    print(f"Markings: {len(markings)}")
    if args.output:
        print(f"Output: {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
