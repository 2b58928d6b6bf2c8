#!/usr/bin/env python3
"""
Convert Map Editor / Menyoo Spooner placements to GTA V .ymap.xml files.

Commands:
- convert INPUT [-o OUTPUT] [--names PATH] [--name NAME]
                              Map Editor / Spooner .xml (or .ymap.xml) -> .ymap.xml
- extents INPUT [-o OUTPUT]   recompute streaming/entities extents of a .ymap.xml
- info INPUT                  print a JSON summary of any supported file
- new OUTPUT                  write an empty .ymap.xml

Settings (model name table, log level, car generator scale) are read from .env / env.local,
see ymap_modules/config.py.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ymap_modules.config import Settings, load_settings
from ymap_modules.errors import YmapError
from ymap_modules.extents import calc_extents
from ymap_modules.loader import YMAP, YMAP_SUFFIX, file_kind, open_file, save_ymap, ymap_stem
from ymap_modules.ymap import YMapDocument

logger = logging.getLogger("ymap_exporter")


def _default_output(input_path: Path) -> Path:
    return input_path.with_name(ymap_stem(input_path) + YMAP_SUFFIX)


def _open(path: Path, settings: Settings) -> YMapDocument:
    table = settings.load_name_table()
    return open_file(path, table.lookup, settings.cargen_scale)


def _is_ymap_path(path: Path) -> bool:
    return path.name.lower().endswith(YMAP_SUFFIX)


def cmd_convert(args: argparse.Namespace, settings: Settings) -> int:
    output = args.output or _default_output(args.input)
    if not _is_ymap_path(output):
        print(f"ERROR: convert expects a {YMAP_SUFFIX} output path: {output}")
        return 2
    ymap = _open(args.input, settings)
    if file_kind(args.input) == YMAP:
        calc_extents(ymap)
    ymap.name = args.name or ymap.name or ymap_stem(output)
    save_ymap(output, ymap)
    print(f"Wrote {output} ({len(ymap.entities)} entities, {len(ymap.car_generators)} car generators)")
    return 0


def cmd_extents(args: argparse.Namespace, settings: Settings) -> int:
    if file_kind(args.input) != YMAP:
        print(f"ERROR: extents expects a {YMAP_SUFFIX} file: {args.input}")
        return 2
    ymap = _open(args.input, settings)
    if not calc_extents(ymap):
        logger.warning("Document has no entities or car generators; extents unchanged")
    save_ymap(args.output or args.input, ymap)
    return 0


def cmd_info(args: argparse.Namespace, settings: Settings) -> int:
    ymap = _open(args.input, settings)
    print(json.dumps(ymap.summary(), indent=2))
    return 0


def cmd_new(args: argparse.Namespace, settings: Settings) -> int:
    if not _is_ymap_path(args.output):
        print(f"ERROR: new expects a {YMAP_SUFFIX} output path: {args.output}")
        return 2
    save_ymap(args.output, YMapDocument(name=ymap_stem(args.output)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    names_help = "Model name table (.json or one name per line); overrides ymap_model_names"
    # Sub-command copy of --names; SUPPRESS keeps a value given before the command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--names", type=Path, default=argparse.SUPPRESS, help=names_help)

    ap = argparse.ArgumentParser(description="Convert Map Editor / Spooner XML to GTA V .ymap.xml.")
    ap.add_argument("--names", type=Path, default=None, help=names_help)
    ap.add_argument("--cargen-scale", type=float, default=None, help="Car generator spacing (default 1.5; overrides ymap_cargen_scale)")
    ap.add_argument("--log-level", default=None, help="Logging level (default INFO; overrides ymap_log_level)")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("convert", parents=[common], help="Convert a Map Editor / Spooner .xml (or .ymap.xml) to .ymap.xml")
    p.add_argument("input", type=Path)
    p.add_argument("-o", "--output", type=Path, default=None, help="Output .ymap.xml (default: <input stem>.ymap.xml)")
    p.add_argument("--name", default="", help="Map name written to <name> (default: output file stem)")
    p.set_defaults(func=cmd_convert)

    p = sub.add_parser("extents", parents=[common], help="Recompute extents of a .ymap.xml")
    p.add_argument("input", type=Path)
    p.add_argument("-o", "--output", type=Path, default=None, help="Output path (default: overwrite input)")
    p.set_defaults(func=cmd_extents)

    p = sub.add_parser("info", parents=[common], help="Print a JSON summary of a supported file")
    p.add_argument("input", type=Path)
    p.set_defaults(func=cmd_info)

    p = sub.add_parser("new", help="Write an empty .ymap.xml")
    p.add_argument("output", type=Path)
    p.set_defaults(func=cmd_new)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_settings()
    if args.names is not None:
        settings.model_names_path = args.names
    if args.cargen_scale is not None:
        settings.cargen_scale = args.cargen_scale
    if args.log_level:
        settings.log_level = args.log_level.upper()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        return args.func(args, settings)
    except (YmapError, OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
