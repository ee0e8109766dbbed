"""
配置管理模块
使用Pydantic Settings从环境变量加载配置
"""

from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    应用配置类
    从环境变量加载配置，支持类型转换和验证
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # 未声明的 env 变量忽略，不抛出校验错误
    )

    # 应用配置
    app_host: str = "0.0.0.0"  # 应用主机地址，默认0.0.0.0（允许外部访问）
    app_port: int = 8000  # 应用端口，默认8000
    app_base_url: str = "http://localhost:8000"  # 基础URL，用于生成完整的访问链接

    # CORS跨域配置
    cors_origins: List[str] = ["*"]  # 允许访问的域名列表

    # 日志配置
    log_level: str = Field(
        "INFO",
        validation_alias="LOG_LEVEL",
        description="日志级别（DEBUG/INFO/WARNING/ERROR）",
    )

    # H3 转换配置
    default_resolution: int = Field(
        9,
        ge=0,
        le=15,
        validation_alias="H3_DEFAULT_RESOLUTION",
        description="fill 请求未指定 resolution 时使用的 H3 分辨率",
    )
    ensure_output_default: bool = Field(
        False,
        validation_alias="H3_ENSURE_OUTPUT",
        description="fill 请求未指定 ensure_output 时的默认值",
    )


settings = Settings()
