from .geojson_h3 import router as geojson_h3_router
from .misc import router as misc_router

__all__ = ["geojson_h3_router", "misc_router"]
