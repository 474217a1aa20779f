# lasbounds/writer.py

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Union

import fiona
from fiona.errors import FionaError
from pyproj import CRS
from shapely.geometry import mapping

from .bounds import FileBounds, format_bounds
from .config import DEFAULT_DRIVER, LAYER_NAME, STR_FIELDS, TXT_SUFFIX
from .errors import LasBoundsIOError, OutputDriverError, ValidationError
from .geometry import bbox_polygon


def swap_extension(path: Path, extension: str) -> Path:
    try:
        return path.with_suffix(extension)
    except ValueError as e:
        raise ValidationError(
            f"Kan ikke lage filnavn med endelse {extension!r}", stage="write", path=path
        ) from e


class BoundsLayer:
    """
    Polygonlag for bounding boxes, skrevet via fiona (OGR).

    Skjemaet (tekstfeltene i 'fields') låses når laget åpnes;
    alle features som legges til må ha nøyaktig de feltene.

        with BoundsLayer(out, ["name", "path"], crs=srs) as layer:
            layer.add(bounds, {"name": ..., "path": ...})
    """

    def __init__(
        self,
        path: Union[str, Path],
        fields: List[str],
        crs: Optional[CRS] = None,
        driver: str = DEFAULT_DRIVER,
    ):
        self.path = Path(path)
        self.fields = list(fields)
        self.crs = crs
        self.driver = driver
        field_type = STR_FIELDS.get(driver, "str")
        self.schema = {
            "geometry": "Polygon",
            "properties": {name: field_type for name in self.fields},
        }
        self.count = 0
        self._collection = None

    def __enter__(self) -> "BoundsLayer":
        kwargs = {}
        # Shapefile-driveren navngir laget etter .shp-filen
        if self.driver != "ESRI Shapefile":
            kwargs["layer"] = LAYER_NAME
        if self.crs is not None:
            kwargs["crs_wkt"] = self.crs.to_wkt()

        try:
            self._collection = fiona.open(
                str(self.path),
                "w",
                driver=self.driver,
                schema=self.schema,
                **kwargs,
            )
        except (FionaError, OSError, ValueError) as e:
            raise OutputDriverError(
                f"Kunne ikke opprette datasett ({self.driver}): {e}",
                stage="write",
                path=self.path,
            ) from e
        return self

    def add(self, bounds: FileBounds, properties: Dict[str, str]) -> None:
        if self._collection is None:
            raise OutputDriverError("Laget er ikke åpnet", stage="write", path=self.path)
        if set(properties) != set(self.fields):
            raise ValidationError(
                f"Feltene {sorted(properties)} passer ikke skjemaet {self.fields}",
                stage="write",
                path=bounds.source_path,
            )

        polygon = bbox_polygon(*bounds.bbox_2d)
        try:
            self._collection.write(
                {"geometry": mapping(polygon), "properties": dict(properties)}
            )
        except (FionaError, OSError, ValueError) as e:
            raise OutputDriverError(
                f"Kunne ikke skrive feature for {bounds.source_path}: {e}",
                stage="write",
                path=self.path,
            ) from e
        self.count += 1

    def close(self) -> None:
        if self._collection is None:
            return
        collection, self._collection = self._collection, None
        try:
            collection.close()
        except (FionaError, OSError) as e:
            raise OutputDriverError(
                f"Kunne ikke lukke datasett: {e}", stage="write", path=self.path
            ) from e

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def write_txt(bounds: FileBounds) -> Path:
    """Skriver <navn>.txt ved siden av LAS-filen med min/max."""
    txt_path = swap_extension(bounds.source_path, TXT_SUFFIX)
    try:
        txt_path.write_text(format_bounds(bounds), encoding="utf-8")
    except OSError as e:
        raise LasBoundsIOError(
            f"Kunne ikke skrive tekstfil: {e.strerror or e}", stage="write", path=txt_path
        ) from e
    return txt_path
