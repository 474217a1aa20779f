# lasbounds/geometry.py

from __future__ import annotations

from shapely.geometry import Polygon


def bbox_polygon(minx: float, miny: float, maxx: float, maxy: float) -> Polygon:
    """
    Rektangel i XY fra en bounding box.

    Ringen går (minx,miny) -> (maxx,miny) -> (maxx,maxy) -> (minx,maxy)
    og lukkes tilbake til (minx,miny), altså fem hjørner totalt.
    shapely.geometry.box starter i (maxx,miny), derfor bygges den for hånd.
    """
    return Polygon(
        [
            (minx, miny),
            (maxx, miny),
            (maxx, maxy),
            (minx, maxy),
            (minx, miny),
        ]
    )
