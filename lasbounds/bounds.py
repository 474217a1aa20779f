# lasbounds/bounds.py

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

import laspy
import numpy as np
from laspy.errors import LaspyException

from .errors import LasBoundsIOError, LasFormatError, ValidationError


Triple = Tuple[float, float, float]


@dataclass(frozen=True)
class FileBounds:
    """Bounding box (min/max av X, Y, Z) fra headeren til én LAS-fil."""

    source_path: Path
    mins: Triple
    maxs: Triple

    @property
    def name(self) -> str:
        name = self.source_path.name
        if not name:
            raise ValidationError(
                "Kan ikke finne filnavn", stage="write", path=self.source_path
            )
        return name

    @property
    def bbox_2d(self) -> Tuple[float, float, float, float]:
        minx, miny, _ = self.mins
        maxx, maxy, _ = self.maxs
        return minx, miny, maxx, maxy


def _as_triple(values) -> Triple:
    x, y, z = np.asarray(values, dtype=float)
    return float(x), float(y), float(z)


def read_bounds(path: Union[str, Path]) -> FileBounds:
    """
    Leser bare headeren (ingen punkter) og returnerer min/max
    i filens egne enheter.
    """
    path = Path(path)
    try:
        with laspy.open(path) as reader:
            header = reader.header
            mins = _as_triple(header.mins)
            maxs = _as_triple(header.maxs)
    except (LaspyException, ValueError, EOFError, struct.error) as e:
        raise LasFormatError(str(e), stage="read", path=path) from e
    except OSError as e:
        raise LasBoundsIOError(
            f"Kunne ikke åpne fil: {e.strerror or e}", stage="read", path=path
        ) from e

    return FileBounds(source_path=path, mins=mins, maxs=maxs)


def format_bounds(bounds: FileBounds) -> str:
    """Lesbar dump av min/max, brukes til .txt-filene."""
    minx, miny, minz = bounds.mins
    maxx, maxy, maxz = bounds.maxs
    return (
        f"file: {bounds.source_path}\n"
        f"min: x={minx!r} y={miny!r} z={minz!r}\n"
        f"max: x={maxx!r} y={maxy!r} z={maxz!r}\n"
    )
