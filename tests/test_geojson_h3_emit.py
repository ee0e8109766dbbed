import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parent.parent))

import h3
import pytest
from shapely.geometry import MultiPolygon, Polygon
from shapely.ops import unary_union

from core.exceptions import GridLibraryError
from modules.geojson_h3 import (
    cell_set_to_feature,
    cell_set_to_feature_collection,
    cell_set_to_multi_polygon_feature,
    cell_set_to_shape,
    cell_to_feature,
    fill_set,
)
from modules.geojson_h3 import grid

SAMPLE_CELL = "8928308280fffff"


def _sample_cells():
    lat = 31.2304
    lon = 121.4737
    d = 0.01
    ring = [
        [lon - d, lat - d],
        [lon + d, lat - d],
        [lon + d, lat + d],
        [lon - d, lat + d],
        [lon - d, lat - d],
    ]
    feature = {"type": "Feature", "properties": {}, "geometry": {"type": "Polygon", "coordinates": [ring]}}
    return fill_set(feature, 9)


def _far_apart_cells():
    return [
        h3.latlng_to_cell(31.2304, 121.4737, 9),
        h3.latlng_to_cell(40.7128, -74.0060, 9),
    ]


def test_cell_to_feature_shape():
    feature = cell_to_feature(SAMPLE_CELL)
    assert feature["type"] == "Feature"
    assert feature["id"] == SAMPLE_CELL
    assert feature["properties"] == {}
    assert feature["geometry"]["type"] == "Polygon"

    rings = feature["geometry"]["coordinates"]
    assert len(rings) == 1
    ring = rings[0]
    assert len(ring) == 7
    assert ring[0] == ring[-1]
    assert Polygon(ring).is_valid


def test_cell_to_feature_uses_lng_lat_order():
    ring = cell_to_feature(SAMPLE_CELL)["geometry"]["coordinates"][0]
    lat, lng = h3.cell_to_latlng(SAMPLE_CELL)
    center = Polygon(ring).centroid
    assert center.x == pytest.approx(lng, abs=1e-3)
    assert center.y == pytest.approx(lat, abs=1e-3)


def test_cell_to_feature_passes_properties_through():
    properties = {"name": "sf", "value": 3}
    feature = cell_to_feature(SAMPLE_CELL, properties)
    assert feature["properties"] is properties


def test_cell_set_to_feature_single_outline_is_polygon():
    feature = cell_set_to_feature(_sample_cells(), {"label": "region"})
    assert "id" not in feature
    assert feature["properties"] == {"label": "region"}
    assert feature["geometry"]["type"] == "Polygon"
    coordinates = feature["geometry"]["coordinates"]
    assert len(coordinates) >= 1
    assert all(ring[0] == ring[-1] for ring in coordinates)


def test_cell_set_to_feature_single_cell_is_polygon():
    feature = cell_set_to_feature([SAMPLE_CELL])
    assert feature["geometry"]["type"] == "Polygon"
    assert len(feature["geometry"]["coordinates"]) == 1
    assert len(feature["geometry"]["coordinates"][0]) == 7


def test_cell_set_to_feature_disjoint_cells_is_multipolygon():
    feature = cell_set_to_feature(_far_apart_cells())
    assert feature["geometry"]["type"] == "MultiPolygon"
    assert len(feature["geometry"]["coordinates"]) == 2


def test_cell_set_to_feature_empty_set():
    feature = cell_set_to_feature([])
    assert feature["geometry"] == {"type": "Polygon", "coordinates": []}
    assert feature["properties"] == {}


def test_cell_set_to_feature_keeps_holes():
    center = h3.latlng_to_cell(31.2304, 121.4737, 9)
    ring_cells = list(h3.grid_ring(center, 1))
    feature = cell_set_to_feature(ring_cells)
    assert feature["geometry"]["type"] == "Polygon"
    # outer ring plus the hole left by the missing center cell
    assert len(feature["geometry"]["coordinates"]) == 2


def test_unwrap_rule_follows_outline_count(monkeypatch):
    outline = [[[0, 0], [1, 0], [1, 1], [0, 0]]]
    other = [[[5, 5], [6, 5], [6, 6], [5, 5]]]

    monkeypatch.setattr(grid, "cells_to_outline_loops", lambda cells: [outline])
    single = cell_set_to_feature(["a"])
    assert single["geometry"] == {"type": "Polygon", "coordinates": outline}

    monkeypatch.setattr(grid, "cells_to_outline_loops", lambda cells: [outline, other])
    multi = cell_set_to_feature(["a", "b"])
    assert multi["geometry"] == {"type": "MultiPolygon", "coordinates": [outline, other]}

    monkeypatch.setattr(grid, "cells_to_outline_loops", lambda cells: [])
    empty = cell_set_to_feature([])
    assert empty["geometry"] == {"type": "Polygon", "coordinates": []}


def test_multi_polygon_feature_never_unwraps():
    feature = cell_set_to_multi_polygon_feature([SAMPLE_CELL])
    assert feature["geometry"]["type"] == "MultiPolygon"
    coordinates = feature["geometry"]["coordinates"]
    assert len(coordinates) == 1
    assert coordinates[0] == cell_to_feature(SAMPLE_CELL)["geometry"]["coordinates"]


def test_multi_polygon_feature_one_loop_per_cell():
    cells = _sample_cells()
    feature = cell_set_to_multi_polygon_feature(cells, {"kind": "cells"})
    assert feature["properties"] == {"kind": "cells"}
    assert len(feature["geometry"]["coordinates"]) == len(cells)
    assert all(len(polygon) == 1 for polygon in feature["geometry"]["coordinates"])


def test_multi_polygon_feature_empty_set():
    feature = cell_set_to_multi_polygon_feature([])
    assert feature["geometry"] == {"type": "MultiPolygon", "coordinates": []}


def test_feature_collection_with_properties_function():
    fc = cell_set_to_feature_collection([SAMPLE_CELL], lambda h3_index: {"name": h3_index})
    assert fc["type"] == "FeatureCollection"
    assert len(fc["features"]) == 1
    feature = fc["features"][0]
    assert feature["properties"] == {"name": SAMPLE_CELL}
    assert feature["id"] == SAMPLE_CELL


def test_feature_collection_preserves_input_order():
    cells = list(reversed(_sample_cells()))
    fc = cell_set_to_feature_collection(cells)
    assert [f["id"] for f in fc["features"]] == cells
    assert all(f["properties"] == {} for f in fc["features"])


def test_feature_collection_empty_set():
    assert cell_set_to_feature_collection([]) == {"type": "FeatureCollection", "features": []}


def test_round_trip_covers_same_cells():
    cells = _sample_cells()
    ids = [f["id"] for f in cell_set_to_feature_collection(cells)["features"]]
    outline = cell_set_to_feature(ids)
    assert set(fill_set(outline, 9)) == set(cells)


def test_merged_outline_matches_union_of_cells():
    cells = _sample_cells()
    merged = cell_set_to_shape(cells)
    union = unary_union([Polygon(grid.cell_to_boundary(c)) for c in cells])
    assert merged.area == pytest.approx(union.area, rel=1e-4)


def test_cell_set_to_shape_types():
    assert isinstance(cell_set_to_shape([SAMPLE_CELL]), Polygon)
    assert isinstance(cell_set_to_shape(_far_apart_cells()), MultiPolygon)
    assert cell_set_to_shape([]).is_empty


def test_emit_does_not_mutate_input():
    cells = _sample_cells()
    snapshot = list(cells)
    cell_set_to_feature(cells)
    cell_set_to_multi_polygon_feature(cells)
    cell_set_to_feature_collection(cells)
    assert cells == snapshot


def test_cell_set_to_feature_ignores_repeated_cells():
    cell = h3.latlng_to_cell(31.2304, 121.4737, 9)
    assert cell_set_to_feature([cell, cell]) == cell_set_to_feature([cell])

    cells = _sample_cells()
    assert cell_set_to_feature(cells + cells[:5]) == cell_set_to_feature(cells)


def test_cell_set_to_shape_ignores_repeated_cells():
    cells = _far_apart_cells()
    shape = cell_set_to_shape(cells + cells)
    assert isinstance(shape, MultiPolygon)
    assert len(shape.geoms) == 2


def test_outline_loops_dedup_before_merge(monkeypatch):
    seen = []

    def fake_cells_to_geo(cells, tight=True):
        seen.append(list(cells))
        return {"type": "MultiPolygon", "coordinates": []}

    monkeypatch.setattr(h3, "cells_to_geo", fake_cells_to_geo)
    grid.cells_to_outline_loops(["b", "a", "b", "c", "a"])
    assert seen == [["b", "a", "c"]]


def test_emit_accepts_tuples():
    cells = tuple(_sample_cells())
    assert cell_set_to_feature(cells) == cell_set_to_feature(list(cells))


@pytest.mark.parametrize("bad_cell", ["not-a-cell", "ffffffffffffffff"])
def test_invalid_cell_raises_grid_error(bad_cell):
    with pytest.raises(GridLibraryError):
        cell_to_feature(bad_cell)


if __name__ == "__main__":
    test_cell_to_feature_shape()
    test_cell_set_to_feature_single_outline_is_polygon()
    test_multi_polygon_feature_never_unwraps()
    test_feature_collection_with_properties_function()
    test_round_trip_covers_same_cells()
    print("geojson_h3 emit tests passed.")
