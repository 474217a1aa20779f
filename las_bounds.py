#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Lager bounding box-polygoner for alle LAS-filer i en mappe
og lagrer dem i ESRI Shapefile.

Eksempler:
  python las_bounds.py data/tiles
      -> data/tiles.shp med én feature per .las-fil (feltene name, path)

  python las_bounds.py data/tiles --epsg 25832 --txt
      -> som over, med koordinatsystem og en .txt med min/max per fil

  python las_bounds.py data/tiles --per-file
      -> data/tiles/<navn>.shp for hver .las-fil (felt Name="BBOX")

  python las_bounds.py data/tiles --driver GPKG -o out/tiles.gpkg
"""

import argparse
import sys
from pathlib import Path

from lasbounds.config import (
    DEFAULT_DRIVER,
    DEFAULT_NAME_VALUE,
    DRIVERS,
    LAS_SUFFIX,
    Mode,
    RunOptions,
    __version__,
)
from lasbounds.errors import LasBoundsError
from lasbounds.pipeline import run


def build_parser():
    parser = argparse.ArgumentParser(
        prog="las-bounds",
        description="Generates bounds of LAS files and saves them in ESRI Shapefiles.",
    )
    parser.add_argument("directory", metavar="DIRECTORY", type=Path,
                        help="Directory containing LAS files.")
    parser.add_argument("-e", "--epsg", type=int, default=None, metavar="NUM",
                        help="EPSG code of LAS coordinate system.")
    parser.add_argument("--per-file", action="store_true",
                        help="Write one shapefile per LAS file instead of one for the directory.")
    parser.add_argument("--name-value", default=None,
                        help=f"Value of the 'Name' field, only with --per-file (default: {DEFAULT_NAME_VALUE}).")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="Output path for the directory dataset, not with --per-file (default: <DIRECTORY> + extension).")
    parser.add_argument("--driver", choices=sorted(DRIVERS), default=DEFAULT_DRIVER,
                        help=f"OGR driver for the output (default: {DEFAULT_DRIVER}).")
    parser.add_argument("--ext", default=LAS_SUFFIX,
                        help=f"File extension to look for (default: {LAS_SUFFIX}).")
    parser.add_argument("--txt", action="store_true",
                        help="Also write <name>.txt with the raw min/max next to each LAS file.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def options_from_args(args) -> RunOptions:
    suffix = args.ext if args.ext.startswith(".") else f".{args.ext}"
    return RunOptions(
        directory=args.directory,
        epsg=args.epsg,
        mode=Mode.PER_FILE if args.per_file else Mode.AGGREGATE,
        output=args.output,
        driver=args.driver,
        suffix=suffix,
        name_value=args.name_value if args.name_value is not None else DEFAULT_NAME_VALUE,
        write_txt=args.txt,
    )


def parse_args(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.per_file and args.output is not None:
        parser.error("-o/--output cannot be combined with --per-file")
    if not args.per_file and args.name_value is not None:
        parser.error("--name-value requires --per-file")
    return args


def main(argv=None):
    args = parse_args(argv)
    options = options_from_args(args)

    try:
        run(options)
    except LasBoundsError as e:
        print(f"{e.kind}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
