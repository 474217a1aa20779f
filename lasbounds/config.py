# lasbounds/config.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


__version__ = "0.1.0"

# ---- KONFIG ----

LAS_SUFFIX = ".las"
LAYER_NAME = "bounds"
DEFAULT_NAME_VALUE = "BBOX"
TXT_SUFFIX = ".txt"

# OGR-driver -> filendelse for utdata
DRIVERS = {
    "ESRI Shapefile": ".shp",
    "GPKG": ".gpkg",
}
DEFAULT_DRIVER = "ESRI Shapefile"

# Shapefile (DBF) lagrer maks 254 tegn i et tekstfelt, lengre verdier kuttes.
# GPKG har ingen grense.
STR_FIELDS = {
    "ESRI Shapefile": "str:254",
    "GPKG": "str",
}


class Mode(Enum):
    AGGREGATE = "aggregate"   # én fil for hele mappen
    PER_FILE = "per-file"     # én fil per LAS-fil


@dataclass(frozen=True)
class RunOptions:
    directory: Path
    epsg: Optional[int] = None
    mode: Mode = Mode.AGGREGATE
    output: Optional[Path] = None
    driver: str = DEFAULT_DRIVER
    suffix: str = LAS_SUFFIX
    name_value: str = DEFAULT_NAME_VALUE
    write_txt: bool = False

    @property
    def extension(self) -> str:
        return DRIVERS[self.driver]
