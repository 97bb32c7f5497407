"""
使用 Pydantic Settings 进行配置管理
从 app.properties 文件和环境变量加载进程配置，
并从 JSON 文件加载作业 / 队列配置
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from loguru import logger


class Settings(BaseSettings):
    """进程级配置，包含参数校验"""

    # Redis 配置
    REDIS_HOST: str = Field(default="localhost", description="Redis 主机")
    REDIS_PORT: int = Field(default=6379, description="Redis 端口")
    REDIS_DB: int = Field(default=0, description="Redis 数据库编号")
    REDIS_PASSWORD: Optional[str] = Field(default=None, description="Redis 密码")

    # 作业 / 队列配置文件
    IDLE_CONFIG_FILE: str = Field(
        default="idle.json", description="作业与队列配置文件（JSON）"
    )

    # 消费者配置
    CONSUMER_POLL_INTERVAL: float = Field(
        default=1.0, description="队列为空时的轮询间隔（秒）"
    )
    CONSUMER_REQUEUE_ON_START: bool = Field(
        default=True, description="启动时将未确认的消息移回待处理队列（单消费者部署）"
    )

    # 日志配置
    LOG_LEVEL: str = Field(default="INFO", description="日志级别")
    LOG_FILE: Optional[str] = Field(default=None, description="日志文件路径")

    model_config = SettingsConfigDict(
        env_file="app.properties",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("CONSUMER_POLL_INTERVAL")
    @classmethod
    def validate_poll_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("CONSUMER_POLL_INTERVAL 必须大于 0")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL 必须为 {valid_levels} 中的一项")
        return v_upper


@lru_cache()
def get_settings() -> Settings:
    """
    获取配置实例（单例）

    返回:
        配置实例
    """
    settings = Settings()
    logger.info("Settings loaded")
    return settings


def load_idle_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    加载作业与队列配置

    文件结构:
        {
            "job": {"types": {...}},
            "queues": {"default": {...}, "<id>": {...}}
        }

    参数:
        path: 配置文件路径，默认使用 IDLE_CONFIG_FILE

    返回:
        配置字典
    """
    config_path = Path(path or get_settings().IDLE_CONFIG_FILE)
    if not config_path.is_file():
        raise FileNotFoundError(f"Idle config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as fp:
        data = json.load(fp)

    if not isinstance(data, dict):
        raise ValueError(f"Idle config must be a JSON object: {config_path}")

    logger.info(f"Idle config loaded from {config_path}")
    return data
