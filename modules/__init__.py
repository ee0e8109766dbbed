"""Convenience exports for conversion helpers."""

from .geojson_h3 import (
    cell_set_to_feature,
    cell_set_to_feature_collection,
    cell_set_to_multi_polygon_feature,
    cell_to_feature,
    fill_set,
)

__all__ = [
    "cell_set_to_feature",
    "cell_set_to_feature_collection",
    "cell_set_to_multi_polygon_feature",
    "cell_to_feature",
    "fill_set",
]
