from pathlib import Path

import fiona
import geopandas as gpd
import pytest

from lasbounds.config import Mode, RunOptions
from lasbounds.errors import LasFormatError, OutputDriverError
from lasbounds.pipeline import resolve_srs, run


def corners(poly):
    return set(list(poly.exterior.coords)[:-1])


def test_aggregate_end_to_end(tiles: Path, las_factory, capsys):
    a = las_factory("a.las", (0, 0, 0), (10, 10, 5))
    (tiles / "b.txt").write_text("ikke las")

    written = run(RunOptions(directory=tiles))

    out = tiles.resolve().with_suffix(".shp")
    assert written == [out]

    gdf = gpd.read_file(out)
    assert len(gdf) == 1
    assert gdf["name"].tolist() == ["a.las"]
    assert gdf["path"].tolist() == [str(a.resolve())]
    assert corners(gdf.geometry.iloc[0]) == {(0, 0), (10, 0), (10, 10), (0, 10)}
    assert gdf.crs is None

    stdout = capsys.readouterr().out
    assert f"[1/1] {a.resolve()}" in stdout


def test_aggregate_keeps_listing_order(tiles: Path, las_factory, capsys):
    las_factory("c.las", (20, 20, 0), (30, 30, 1))
    las_factory("a.las", (0, 0, 0), (10, 10, 1))
    las_factory("b.las", (10, 10, 0), (20, 20, 1))

    out = run(RunOptions(directory=tiles))[0]

    gdf = gpd.read_file(out)
    assert gdf["name"].tolist() == ["a.las", "b.las", "c.las"]
    assert [g.bounds for g in gdf.geometry] == [
        (0, 0, 10, 10),
        (10, 10, 20, 20),
        (20, 20, 30, 30),
    ]

    lines = [l for l in capsys.readouterr().out.splitlines() if l.startswith("[")]
    assert [l.split()[0] for l in lines] == ["[1/3]", "[2/3]", "[3/3]"]


def test_aggregate_zero_inputs(tiles: Path):
    out = run(RunOptions(directory=tiles))[0]

    with fiona.open(out) as src:
        assert len(src) == 0


def test_aggregate_idempotent_attributes(tiles: Path, las_factory, tmp_path: Path):
    las_factory("a.las", (0, 0, 0), (1, 1, 1))
    las_factory("b.las", (1, 1, 0), (2, 2, 1))

    first = run(RunOptions(directory=tiles, output=tmp_path / "run1" / "out.shp"))[0]
    second = run(RunOptions(directory=tiles, output=tmp_path / "run2" / "out.shp"))[0]

    g1, g2 = gpd.read_file(first), gpd.read_file(second)
    assert g1[["name", "path"]].values.tolist() == g2[["name", "path"]].values.tolist()


def test_aggregate_with_epsg_and_txt(tiles: Path, las_factory):
    a = las_factory("a.las", (0, 0, 0), (10, 10, 5))

    out = run(RunOptions(directory=tiles, epsg=25832, write_txt=True))[0]

    assert out.with_suffix(".prj").exists()
    assert gpd.read_file(out).crs is not None
    assert "max: x=10.0 y=10.0 z=5.0" in a.with_suffix(".txt").read_text(encoding="utf-8")


def test_per_file_mode(tiles: Path, las_factory, capsys):
    las_factory("a.las", (0, 0, 0), (10, 10, 5))
    (tiles / "b.txt").write_text("ikke las")

    written = run(RunOptions(directory=tiles, mode=Mode.PER_FILE))

    shp = tiles.resolve() / "a.shp"
    assert written == [shp]
    gdf = gpd.read_file(shp)
    assert len(gdf) == 1
    assert list(gdf.columns) == ["Name", "geometry"]
    assert gdf["Name"].tolist() == ["BBOX"]
    assert corners(gdf.geometry.iloc[0]) == {(0, 0), (10, 0), (10, 10), (0, 10)}
    assert not (tiles / "a.txt").exists()
    assert not tiles.resolve().with_suffix(".shp").exists()

    assert f"Searching in: {tiles}" in capsys.readouterr().out


def test_per_file_custom_name_value(tiles: Path, las_factory):
    las_factory("a.las", (0, 0, 0), (1, 1, 1))
    las_factory("b.las", (0, 0, 0), (2, 2, 1))

    written = run(RunOptions(directory=tiles, mode=Mode.PER_FILE, name_value="tile"))

    assert [p.name for p in written] == ["a.shp", "b.shp"]
    for shp in written:
        assert gpd.read_file(shp)["Name"].tolist() == ["tile"]


def test_per_file_zero_inputs_is_noop(tiles: Path):
    assert run(RunOptions(directory=tiles, mode=Mode.PER_FILE)) == []
    assert list(tiles.iterdir()) == []


def test_per_file_stops_at_first_bad_file(tiles: Path, las_factory):
    las_factory("a.las", (0, 0, 0), (1, 1, 1))
    (tiles / "b.las").write_text("ødelagt\n" * 100)
    las_factory("c.las", (0, 0, 0), (1, 1, 1))

    with pytest.raises(LasFormatError) as excinfo:
        run(RunOptions(directory=tiles, mode=Mode.PER_FILE))

    assert excinfo.value.path.name == "b.las"
    assert (tiles / "a.shp").exists()
    assert not (tiles / "c.shp").exists()


def test_invalid_epsg_writes_nothing(tiles: Path, las_factory):
    las_factory("a.las", (0, 0, 0), (1, 1, 1))

    with pytest.raises(OutputDriverError) as excinfo:
        run(RunOptions(directory=tiles, epsg=999999))

    assert excinfo.value.stage == "setup"
    assert not tiles.resolve().with_suffix(".shp").exists()
    assert sorted(p.name for p in tiles.iterdir()) == ["a.las"]


def test_resolve_srs():
    assert resolve_srs(None) is None
    assert resolve_srs(4326).to_epsg() == 4326
