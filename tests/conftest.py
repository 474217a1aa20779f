from pathlib import Path

import laspy
import numpy as np
import pytest


def write_las(path: Path, points) -> Path:
    """Skriver en liten LAS 1.2-fil; laspy regner ut min/max i headeren ved write."""
    pts = np.asarray(points, dtype=float)

    header = laspy.LasHeader(point_format=3, version="1.2")
    header.scales = np.array([0.01, 0.01, 0.01])
    header.offsets = np.array([0.0, 0.0, 0.0])

    las = laspy.LasData(header)
    las.x = pts[:, 0]
    las.y = pts[:, 1]
    las.z = pts[:, 2]
    las.write(str(path))
    return path


@pytest.fixture
def tiles(tmp_path: Path) -> Path:
    folder = tmp_path / "tiles"
    folder.mkdir()
    return folder


@pytest.fixture
def las_factory(tiles: Path):
    def make(name: str, mins, maxs) -> Path:
        return write_las(tiles / name, [mins, maxs])

    return make
