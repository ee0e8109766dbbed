from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class FillRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    feature: Dict[str, Any] = Field(
        ...,
        description="GeoJSON Feature or FeatureCollection (Polygon / MultiPolygon)",
    )
    resolution: Optional[int] = Field(
        None,
        ge=0,
        le=15,
        description="H3 resolution, defaults to H3_DEFAULT_RESOLUTION",
    )
    ensure_output: Optional[bool] = Field(
        None,
        description="Fall back to the centroid cell for polygons containing no cell center",
    )


class FillResponse(BaseModel):
    cells: List[str] = Field(default_factory=list)
    count: int = Field(0, ge=0)
    resolution: int = Field(..., ge=0, le=15)


class CellSetRequest(BaseModel):
    cells: List[str] = Field(default_factory=list, description="H3 indices")
    properties: Dict[str, Any] = Field(default_factory=dict, description="Feature properties")


class FeatureCollectionRequest(BaseModel):
    cells: List[str] = Field(default_factory=list, description="H3 indices")
    properties_by_cell: Optional[Dict[str, Dict[str, Any]]] = Field(
        None,
        description="Per-cell properties keyed by H3 index; missing cells get {}",
    )


class GeoFeature(BaseModel):
    type: Literal["Feature"] = "Feature"
    id: Optional[str] = None
    properties: Dict[str, Any] = Field(default_factory=dict)
    geometry: Dict[str, Any]


class GeoFeatureCollection(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[GeoFeature] = Field(default_factory=list)
