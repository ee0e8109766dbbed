"""
GeoJSON <-> H3 command-line converter
Usage:
  python scripts/convert_geojson.py fill region.geojson --resolution 9
  python scripts/convert_geojson.py outline cells.json --mode collection -o cells.geojson
"""

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parent.parent))

from core.exceptions import BizError
from modules.geojson_h3 import (
    cell_set_to_feature,
    cell_set_to_feature_collection,
    cell_set_to_multi_polygon_feature,
    fill_set,
)

logger = logging.getLogger("convert_geojson")

OUTLINE_MODES = {
    "merged": cell_set_to_feature,
    "cells": cell_set_to_multi_polygon_feature,
    "collection": cell_set_to_feature_collection,
}


def _read_json(path: str):
    if path == "-":
        return json.load(sys.stdin)
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _write_json(data, output: str = None):
    text = json.dumps(data, ensure_ascii=False)
    if output:
        Path(output).write_text(text, encoding="utf-8")
        logger.info("Wrote %s", output)
    else:
        print(text)


def run_fill(args) -> None:
    feature = _read_json(args.input)
    cells = fill_set(feature, args.resolution, ensure_output=args.ensure_output)
    logger.info("Filled %s at resolution %s: %d cells", args.input, args.resolution, len(cells))
    _write_json(cells, args.output)


def run_outline(args) -> None:
    cells = _read_json(args.input)
    if not isinstance(cells, list):
        raise BizError("Cell input must be a JSON list of H3 indices")
    result = OUTLINE_MODES[args.mode](cells)
    logger.info("Converted %d cells (%s)", len(cells), args.mode)
    _write_json(result, args.output)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert between GeoJSON polygons and H3 cell sets")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    fill_parser = sub.add_parser("fill", help="GeoJSON Feature/FeatureCollection -> H3 cells")
    fill_parser.add_argument("input", help="GeoJSON file path, or - for stdin")
    fill_parser.add_argument("--resolution", type=int, required=True)
    fill_parser.add_argument("--ensure-output", action="store_true")
    fill_parser.add_argument("-o", "--output")
    fill_parser.set_defaults(func=run_fill)

    outline_parser = sub.add_parser("outline", help="H3 cells -> GeoJSON")
    outline_parser.add_argument("input", help="JSON list of H3 indices, or - for stdin")
    outline_parser.add_argument("--mode", choices=sorted(OUTLINE_MODES), default="merged")
    outline_parser.add_argument("-o", "--output")
    outline_parser.set_defaults(func=run_outline)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
        stream=sys.stderr,
    )
    try:
        args.func(args)
    except BizError as e:
        logger.error("%s | %s", e.message, e.payload)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
