from .emit import (
    cell_set_to_feature,
    cell_set_to_feature_collection,
    cell_set_to_multi_polygon_feature,
    cell_set_to_shape,
    cell_to_feature,
)
from .fill import fill_set, geometry_to_cells
from .utils import centroid, flatten

__all__ = [
    "cell_set_to_feature",
    "cell_set_to_feature_collection",
    "cell_set_to_multi_polygon_feature",
    "cell_set_to_shape",
    "cell_to_feature",
    "centroid",
    "fill_set",
    "flatten",
    "geometry_to_cells",
]
