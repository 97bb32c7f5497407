"""
Job Middleware - 作业生命周期中间件

- BaseJobMiddleware: 基类，子类自动注册
- JobMiddlewareManager: 按优先级执行 before_process / on_stage / on_error / after_process
"""

# 导入中间件类以触发自动注册
from .logging import LoggingMiddleware

from .base import BaseJobMiddleware, middleware_metadata
from .manager import JobMiddlewareManager, create_default_manager, get_default_manager

__all__ = [
    "BaseJobMiddleware",
    "middleware_metadata",
    "JobMiddlewareManager",
    "create_default_manager",
    "get_default_manager",
    "LoggingMiddleware",
]
