import logging
from typing import Any, Iterable, List, Sequence

import h3

from core.exceptions import GridLibraryError

from .utils import flatten

logger = logging.getLogger(__name__)

Ring = List[List[float]]
PolygonCoords = List[Ring]


def _to_lists(value: Any) -> Any:
    # h3 returns nested tuples; GeoJSON consumers expect lists.
    if isinstance(value, (list, tuple)):
        return [_to_lists(item) for item in value]
    return value


def _lnglat_ring(ring: Sequence[Sequence[float]]) -> Ring:
    return [[float(pt[0]), float(pt[1])] for pt in ring]


def _ensure_closed_ring(coords: Ring) -> Ring:
    if not coords:
        return []
    if coords[0] == coords[-1]:
        return coords
    return coords + [list(coords[0])]


def polygon_to_cells(polygon: Sequence[Sequence[Sequence[float]]], resolution: int) -> List[str]:
    """
    Cells whose center lies inside the polygon (holes excluded).

    Args:
        polygon: GeoJSON polygon coordinates, outer ring first, [lng, lat] order.
        resolution: H3 resolution (0-15).

    Returns:
        List of H3 indices (strings).
    """
    geo_json = {
        "type": "Polygon",
        "coordinates": [_lnglat_ring(ring) for ring in polygon],
    }
    try:
        # h3 >= 4.0.0: geo_to_cells accepts GeoJSON-ordered coordinates
        cells = h3.geo_to_cells(geo_json, resolution)
    except (h3.H3BaseException, ValueError) as e:
        raise GridLibraryError("H3 polygon fill failed", original_error=str(e)) from e
    return list(cells)


def coordinate_to_cell(lat: float, lng: float, resolution: int) -> str:
    try:
        return h3.latlng_to_cell(lat, lng, resolution)
    except (h3.H3BaseException, ValueError) as e:
        raise GridLibraryError("H3 point index failed", original_error=str(e)) from e


def cell_to_boundary(h3_index: str) -> Ring:
    """
    Get the boundary of an H3 cell as a closed GeoJSON ring.

    Returns:
        List of [lng, lat] pairs, first point repeated at the end.
    """
    try:
        # h3 v4: cell_to_boundary -> ((lat, lng), ...), open loop
        boundary = h3.cell_to_boundary(h3_index)
    except (h3.H3BaseException, ValueError) as e:
        raise GridLibraryError(f"H3 boundary failed for {h3_index}", original_error=str(e)) from e
    return _ensure_closed_ring([[lng, lat] for lat, lng in boundary])


def cells_to_outline_loops(cells: Iterable[str]) -> List[PolygonCoords]:
    """
    Merge a set of cells into the minimal outlines covering their union.

    Returns:
        One entry per outline, each a list of closed [lng, lat] rings
        (outer ring first, holes after). Empty list for no cells.
    """
    # h3 rejects repeated cells; a cell set ignores them
    cells = flatten([cells])
    if not cells:
        return []
    try:
        # tight=False keeps the MultiPolygon wrapper even for a single outline
        geo = h3.cells_to_geo(cells, tight=False)
    except (h3.H3BaseException, ValueError) as e:
        raise GridLibraryError("H3 outline merge failed", original_error=str(e)) from e
    polygons = [
        [_ensure_closed_ring(_to_lists(ring)) for ring in polygon]
        for polygon in geo["coordinates"]
    ]
    logger.debug("Merged %d cells into %d outlines", len(cells), len(polygons))
    return polygons
