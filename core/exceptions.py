from typing import Any, Dict, Optional

class BizError(Exception):
    """
    通用业务异常
    """
    def __init__(
        self,
        message: str,
        code: int = 400,
        payload: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.payload = payload or {}
        super().__init__(self.message)

class UnsupportedFeatureTypeError(BizError):
    """
    GeoJSON type 既不是 Feature 也不是 FeatureCollection
    """
    def __init__(self, feature_type: Any):
        super().__init__(
            message=f"Unhandled type: {feature_type}",
            payload={"type": feature_type},
        )

class UnsupportedGeometryTypeError(BizError):
    """
    geometry.type 既不是 Polygon 也不是 MultiPolygon
    """
    def __init__(self, geometry_type: Any):
        super().__init__(
            message=f"Unhandled geometry type: {geometry_type}",
            payload={"geometry_type": geometry_type},
        )

class MissingFeaturesError(BizError):
    """
    FeatureCollection 缺少 features 字段（空列表是合法的）
    """
    def __init__(self):
        super().__init__(message="No features found")

EmptyCollectionError = MissingFeaturesError

class InvalidCoordinatesError(BizError):
    """
    coordinates 的嵌套层级与声明的 geometry.type 不一致
    """
    def __init__(self, geometry_type: str, reason: str):
        super().__init__(
            message=f"Invalid {geometry_type} coordinates: {reason}",
            payload={"geometry_type": geometry_type},
        )

class InvalidResolutionError(BizError):
    """
    H3 分辨率不在 0~15 范围内
    """
    def __init__(self, resolution: Any):
        super().__init__(
            message=f"Invalid resolution: {resolution!r} (expected integer 0-15)",
            payload={"resolution": repr(resolution)},
        )

class GridLibraryError(BizError):
    """
    H3 库调用失败 (如非法 cell、非法分辨率)
    """
    def __init__(self, message: str, original_error: str = ""):
        super().__init__(
            message=message,
            payload={"original_error": str(original_error)}
        )
