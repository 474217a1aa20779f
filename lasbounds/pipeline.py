# lasbounds/pipeline.py

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pyproj import CRS
from pyproj.exceptions import CRSError

from .bounds import read_bounds
from .config import Mode, RunOptions
from .errors import LasBoundsIOError, OutputDriverError
from .scanner import list_las
from .writer import BoundsLayer, swap_extension, write_txt


def resolve_srs(epsg: Optional[int]) -> Optional[CRS]:
    """EPSG-kode -> pyproj.CRS, eller None om ingen kode er gitt."""
    if epsg is None:
        return None
    try:
        return CRS.from_epsg(epsg)
    except CRSError as e:
        raise OutputDriverError(
            f"Ukjent EPSG-kode {epsg}: {e}", stage="setup"
        ) from e


def aggregate_output_path(options: RunOptions) -> Path:
    if options.output is not None:
        return Path(options.output)
    directory = Path(options.directory).expanduser().resolve()
    return swap_extension(directory, options.extension)


def write_aggregate(
    files: List[Path],
    out_path: Path,
    options: RunOptions,
    srs: Optional[CRS],
) -> Path:
    """
    Én fil for hele mappen: feltene "name" og "path",
    én feature per LAS-fil i samme rekkefølge som 'files'.
    """
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise LasBoundsIOError(
            f"Kunne ikke opprette mappe: {e.strerror or e}",
            stage="write",
            path=out_path.parent,
        ) from e

    total = len(files)
    with BoundsLayer(out_path, ["name", "path"], crs=srs, driver=options.driver) as layer:
        for i, las_path in enumerate(files, start=1):
            print(f"[{i}/{total}] {las_path}")
            bounds = read_bounds(las_path)
            if options.write_txt:
                write_txt(bounds)
            layer.add(bounds, {"name": bounds.name, "path": str(bounds.source_path)})

    print(f"Skrev {total} omriss til: {out_path}")
    return out_path


def write_per_file(
    files: List[Path],
    options: RunOptions,
    srs: Optional[CRS],
) -> List[Path]:
    """
    Én fil per LAS-fil (a.las -> a.shp) med ett felt "Name"
    og nøyaktig én feature.
    """
    written = []
    for las_path in files:
        bounds = read_bounds(las_path)
        if options.write_txt:
            write_txt(bounds)

        out_path = swap_extension(las_path, options.extension)
        with BoundsLayer(out_path, ["Name"], crs=srs, driver=options.driver) as layer:
            layer.add(bounds, {"Name": options.name_value})
        written.append(out_path)

    print(f"Skrev {len(written)} filer")
    return written


def run(options: RunOptions) -> List[Path]:
    """
    Kjører hele løpet: EPSG -> skann -> les headere -> skriv.
    Returnerer stiene til datasettene som ble skrevet.

    Første feil stopper alt; det som allerede er skrevet blir liggende.
    """
    srs = resolve_srs(options.epsg)

    if options.mode is Mode.PER_FILE:
        print(f"Searching in: {options.directory}")

    directory = Path(options.directory).expanduser().resolve()
    files = list_las(directory, options.suffix)

    if options.mode is Mode.PER_FILE:
        return write_per_file(files, options, srs)

    out_path = aggregate_output_path(options)
    return [write_aggregate(files, out_path, options, srs)]
