"""
FastAPI主应用入口
职责：创建应用实例、集成中间件、挂载路由、处理请求生命周期
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from core.config import settings
from core.exceptions import BizError
from router import geojson_h3_router, misc_router

# ==================== 配置日志 ====================
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(levelname)s - %(name)s - %(message)s'
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(_: FastAPI):
    """应用生命周期管理"""
    logger.info("=" * 50)
    logger.info("应用启动中...")
    logger.info(f"基础URL: {settings.app_base_url}")
    logger.info(f"默认H3分辨率: {settings.default_resolution}")
    logger.info("=" * 50)

    try:
        yield
    finally:
        logger.info("应用关闭中...")
        logger.info("应用已关闭")

# ==================== 创建FastAPI应用 ====================
app = FastAPI(
    title="GeoJSON H3 转换服务",
    description="GeoJSON 多边形与 H3 网格集合之间的双向转换",
    version="1.0.0",
    lifespan=lifespan,
)

# 配置CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 开启Gzip压缩（网格边界坐标体积较大）
app.add_middleware(GZipMiddleware, minimum_size=500)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    logger.error(f"Validation Error: {exc.body}")
    logger.error(f"Errors: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors(), "body": exc.body},
    )

@app.exception_handler(BizError)
async def biz_exception_handler(request, exc: BizError):
    logger.error(f"BizError: {exc.message} | Payload: {exc.payload}")
    return JSONResponse(
        status_code=exc.code,
        content={
            "status": "error",
            "message": exc.message,
            "detail": exc.payload
        },
    )

# ==================== API路由 ====================

app.include_router(misc_router)
app.include_router(geojson_h3_router)

# ==================== 主入口 ====================

if __name__ == "__main__":
    import uvicorn

    logger.info("启动FastAPI应用...")
    logger.info(f"访问地址: http://localhost:{settings.app_port}")
    logger.info(f"API文档: http://localhost:{settings.app_port}/docs")

    uvicorn.run(
        "main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=True,
        log_level="info"
    )
