"""
Workers - Worker 接口、工厂与内置 Worker

内置 Worker 在导入时自动注册
"""

from .base import DefaultWorker, Worker, get_worker_registry
from .command import CommandWorker
from .factory import WorkerFactory

__all__ = [
    "Worker",
    "DefaultWorker",
    "WorkerFactory",
    "CommandWorker",
    "get_worker_registry",
]
