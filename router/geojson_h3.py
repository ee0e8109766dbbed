import asyncio
import logging

from fastapi import APIRouter

from core.config import settings
from modules.geojson_h3 import (
    cell_set_to_feature,
    cell_set_to_feature_collection,
    cell_set_to_multi_polygon_feature,
    cell_to_feature,
    fill_set,
)
from modules.geojson_h3.schemas import (
    CellSetRequest,
    FeatureCollectionRequest,
    FillRequest,
    FillResponse,
    GeoFeature,
    GeoFeatureCollection,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/h3", tags=["GeoJSON H3"])


@router.post("/fill", response_model=FillResponse, summary="GeoJSON -> H3 cells")
async def fill_cells(payload: FillRequest):
    resolution = payload.resolution if payload.resolution is not None else settings.default_resolution
    ensure_output = (
        payload.ensure_output if payload.ensure_output is not None else settings.ensure_output_default
    )
    logger.info("fill request: type=%s, res=%s", payload.feature.get("type"), resolution)
    cells = await asyncio.to_thread(
        fill_set,
        payload.feature,
        resolution,
        ensure_output=ensure_output,
    )
    return {"cells": cells, "count": len(cells), "resolution": resolution}


@router.post(
    "/outline",
    response_model=GeoFeature,
    response_model_exclude_unset=True,
    summary="H3 cells -> merged outline Feature",
)
async def build_outline(payload: CellSetRequest):
    logger.info("outline request: %d cells", len(payload.cells))
    return await asyncio.to_thread(cell_set_to_feature, payload.cells, payload.properties)


@router.post(
    "/cells-multipolygon",
    response_model=GeoFeature,
    response_model_exclude_unset=True,
    summary="H3 cells -> per-cell MultiPolygon Feature",
)
async def build_cells_multipolygon(payload: CellSetRequest):
    logger.info("cells-multipolygon request: %d cells", len(payload.cells))
    return await asyncio.to_thread(cell_set_to_multi_polygon_feature, payload.cells, payload.properties)


@router.post(
    "/feature-collection",
    response_model=GeoFeatureCollection,
    response_model_exclude_unset=True,
    summary="H3 cells -> FeatureCollection",
)
async def build_feature_collection(payload: FeatureCollectionRequest):
    logger.info("feature-collection request: %d cells", len(payload.cells))
    get_properties = None
    if payload.properties_by_cell is not None:
        properties_by_cell = payload.properties_by_cell

        def get_properties(h3_index: str):
            return properties_by_cell.get(h3_index, {})

    return await asyncio.to_thread(cell_set_to_feature_collection, payload.cells, get_properties)


@router.get(
    "/cells/{h3_index}",
    response_model=GeoFeature,
    response_model_exclude_unset=True,
    summary="Single H3 cell -> Polygon Feature",
)
async def get_cell_feature(h3_index: str):
    return await asyncio.to_thread(cell_to_feature, h3_index)
