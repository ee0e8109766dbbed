import logging
from typing import Any, Callable, Dict, Iterable, Optional

from shapely.geometry import Polygon, shape

from . import grid
from .fill import FEATURE, FEATURE_COLLECTION, MULTI_POLYGON, POLYGON

logger = logging.getLogger(__name__)

Properties = Dict[str, Any]


def cell_to_feature(h3_index: str, properties: Optional[Properties] = None) -> Dict[str, Any]:
    """
    Convert a single H3 cell to a Polygon feature whose id is the cell.
    """
    if properties is None:
        properties = {}
    # Wrap in a list for a single-ring polygon
    coordinates = [grid.cell_to_boundary(h3_index)]
    return {
        "type": FEATURE,
        "id": h3_index,
        "properties": properties,
        "geometry": {
            "type": POLYGON,
            "coordinates": coordinates,
        },
    }


def cell_set_to_feature(cells: Iterable[str], properties: Optional[Properties] = None) -> Dict[str, Any]:
    """
    Convert a set of cells to one Feature with the merged outline(s).

    The geometry is a Polygon when the cells merge into a single outline and a
    MultiPolygon when more than one outline is needed. An empty set gives a
    Polygon with empty coordinates.
    """
    if properties is None:
        properties = {}
    polygons = grid.cells_to_outline_loops(cells)
    # See if we can unwrap to a simple Polygon
    is_multi_polygon = len(polygons) > 1
    geometry_type = MULTI_POLYGON if is_multi_polygon else POLYGON
    if is_multi_polygon:
        coordinates = polygons
    else:
        coordinates = polygons[0] if polygons else []
    return {
        "type": FEATURE,
        "properties": properties,
        "geometry": {
            "type": geometry_type,
            "coordinates": coordinates,
        },
    }


def cell_set_to_multi_polygon_feature(
    cells: Iterable[str],
    properties: Optional[Properties] = None,
) -> Dict[str, Any]:
    """
    Convert a set of cells to a MultiPolygon feature holding each cell's own
    outline, without merging neighbours.
    """
    if properties is None:
        properties = {}
    coordinates = [[grid.cell_to_boundary(h3_index)] for h3_index in cells]
    return {
        "type": FEATURE,
        "properties": properties,
        "geometry": {
            "type": MULTI_POLYGON,
            "coordinates": coordinates,
        },
    }


def cell_set_to_feature_collection(
    cells: Iterable[str],
    get_properties: Optional[Callable[[str], Properties]] = None,
) -> Dict[str, Any]:
    """
    Convert a set of cells to a FeatureCollection with one Polygon feature per
    cell, in input order. ``get_properties(cell)`` supplies each feature's
    properties when given.
    """
    features = []
    for h3_index in cells:
        properties = get_properties(h3_index) if get_properties else {}
        features.append(cell_to_feature(h3_index, properties))
    logger.debug("Built feature collection with %d features", len(features))
    return {
        "type": FEATURE_COLLECTION,
        "features": features,
    }


def cell_set_to_shape(cells: Iterable[str]):
    """Shapely geometry of the merged outline(s); empty Polygon for no cells."""
    geometry = cell_set_to_feature(cells)["geometry"]
    if not geometry["coordinates"]:
        return Polygon()
    return shape(geometry)
