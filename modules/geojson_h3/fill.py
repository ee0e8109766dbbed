import logging
import numbers
from typing import Any, List, Mapping, Sequence

from shapely.geometry import Polygon, mapping

from core.exceptions import (
    InvalidCoordinatesError,
    InvalidResolutionError,
    MissingFeaturesError,
    UnsupportedFeatureTypeError,
    UnsupportedGeometryTypeError,
)

from . import grid
from .utils import centroid, flatten

logger = logging.getLogger(__name__)

FEATURE = "Feature"
FEATURE_COLLECTION = "FeatureCollection"
POLYGON = "Polygon"
MULTI_POLYGON = "MultiPolygon"

MIN_RESOLUTION = 0
MAX_RESOLUTION = 15


def _is_position(value: Any) -> bool:
    return (
        isinstance(value, (list, tuple))
        and len(value) >= 2
        and all(isinstance(v, numbers.Real) for v in value[:2])
    )


def _check_polygon_coords(polygon: Any, geometry_type: str) -> None:
    if not isinstance(polygon, (list, tuple)):
        raise InvalidCoordinatesError(geometry_type, "polygon must be a list of rings")
    for ring in polygon:
        if not isinstance(ring, (list, tuple)) or not all(_is_position(pt) for pt in ring):
            raise InvalidCoordinatesError(geometry_type, "ring must be a list of [lng, lat] positions")


def _validate_resolution(resolution: Any) -> int:
    if isinstance(resolution, bool) or not isinstance(resolution, int):
        raise InvalidResolutionError(resolution)
    if not MIN_RESOLUTION <= resolution <= MAX_RESOLUTION:
        raise InvalidResolutionError(resolution)
    return resolution


def _polygons_of(geometry: Mapping[str, Any]) -> List[Sequence]:
    geometry_type = geometry.get("type")
    coordinates = geometry.get("coordinates")
    # Normalize to MultiPolygon
    if geometry_type == POLYGON:
        _check_polygon_coords(coordinates, geometry_type)
        return [coordinates]
    if not isinstance(coordinates, (list, tuple)):
        raise InvalidCoordinatesError(geometry_type, "expected a list of polygons")
    for polygon in coordinates:
        _check_polygon_coords(polygon, geometry_type)
    return list(coordinates)


def _is_degenerate_ring(ring: Sequence) -> bool:
    # h3 rejects rings without area instead of returning an empty fill
    distinct = {(float(pt[0]), float(pt[1])) for pt in ring}
    if len(distinct) < 3:
        return True
    return Polygon([(pt[0], pt[1]) for pt in ring]).area == 0


def _polygon_to_cells(polygon: Sequence, resolution: int, ensure_output: bool) -> List[str]:
    if not polygon or not polygon[0]:
        return []
    if _is_degenerate_ring(polygon[0]):
        cells = []
    else:
        # Degenerate holes exclude nothing
        loops = [polygon[0]] + [ring for ring in polygon[1:] if not _is_degenerate_ring(ring)]
        cells = grid.polygon_to_cells(loops, resolution)
    if cells or not ensure_output:
        return cells
    # If we got no results, index the centroid
    lng, lat = centroid(polygon)
    logger.debug("Empty fill at res %s, falling back to centroid (%s, %s)", resolution, lng, lat)
    return [grid.coordinate_to_cell(lat, lng, resolution)]


def _feature_collection_to_cells(
    feature_collection: Mapping[str, Any],
    resolution: int,
    ensure_output: bool,
) -> List[str]:
    features = feature_collection.get("features")
    if not isinstance(features, (list, tuple)):
        raise MissingFeaturesError()
    return flatten(
        fill_set(feature, resolution, ensure_output=ensure_output)
        for feature in features
    )


def fill_set(
    feature: Mapping[str, Any],
    resolution: int,
    *,
    ensure_output: bool = False,
) -> List[str]:
    """
    Convert a GeoJSON Feature or FeatureCollection to a list of H3 cells.

    Only cells whose centers fall within the polygon(s) are included, so the
    result approximates the shape at the precision of the chosen resolution.
    A polygon that is small compared to the resolution may contain no cell
    center at all; with ``ensure_output`` the cell covering the polygon's
    vertex-mean centroid is used instead.

    Args:
        feature: GeoJSON mapping of type Feature or FeatureCollection, with
                 Polygon or MultiPolygon geometry.
        resolution: H3 resolution (0-15).
        ensure_output: Substitute the centroid cell for polygons that fill empty.

    Returns:
        Deduplicated list of H3 indices in first-occurrence order.

    Raises:
        UnsupportedFeatureTypeError, UnsupportedGeometryTypeError,
        MissingFeaturesError, InvalidCoordinatesError, InvalidResolutionError.
    """
    resolution = _validate_resolution(resolution)
    if not isinstance(feature, Mapping):
        raise UnsupportedFeatureTypeError(type(feature).__name__)
    feature_type = feature.get("type")

    if feature_type == FEATURE_COLLECTION:
        return _feature_collection_to_cells(feature, resolution, ensure_output)

    if feature_type != FEATURE:
        raise UnsupportedFeatureTypeError(feature_type)

    geometry = feature.get("geometry")
    if not isinstance(geometry, Mapping):
        geometry = {}
    geometry_type = geometry.get("type")
    if geometry_type not in (POLYGON, MULTI_POLYGON):
        raise UnsupportedGeometryTypeError(geometry_type)

    polygons = _polygons_of(geometry)
    cells = flatten(
        _polygon_to_cells(polygon, resolution, ensure_output)
        for polygon in polygons
    )
    logger.debug("Filled %d polygon(s) at res %s into %d cells", len(polygons), resolution, len(cells))
    return cells


def geometry_to_cells(geometry: Any, resolution: int, *, ensure_output: bool = False) -> List[str]:
    """
    Fill a bare geometry: a shapely Polygon/MultiPolygon, anything exposing
    ``__geo_interface__``, or a GeoJSON geometry mapping.
    """
    if not isinstance(geometry, Mapping):
        geometry = mapping(geometry)
    feature = {"type": FEATURE, "properties": {}, "geometry": geometry}
    return fill_set(feature, resolution, ensure_output=ensure_output)
