"""
Worker Factory - Worker 工厂

根据类型 ID 和参数构造 Worker 实例
"""

from typing import Any, Callable, Dict, Optional

from loguru import logger

from core.exceptions import ConfigurationException

from .base import Worker, get_worker_registry


WorkerConstructor = Callable[[Dict[str, Any]], Worker]


class WorkerFactory:
    """
    Worker 工厂

    使用显式的 类型 ID -> 构造函数 表，默认从自动注册表复制
    """

    def __init__(self, registry: Optional[Dict[str, WorkerConstructor]] = None):
        """
        Args:
            registry: 类型 ID 到构造函数的映射（可选，用于依赖注入）
        """
        self._registry: Dict[str, WorkerConstructor] = (
            dict(registry) if registry is not None else get_worker_registry()
        )

    def register(self, type_identifier: str, constructor: WorkerConstructor) -> None:
        self._registry[type_identifier] = constructor

    def is_registered(self, type_identifier: str) -> bool:
        return type_identifier in self._registry

    def create_worker(
        self, type_identifier: str, parameters: Optional[Dict[str, Any]] = None
    ) -> Worker:
        """
        构造 Worker

        Args:
            type_identifier: Worker 类型 ID
            parameters: Worker 参数

        Returns:
            Worker 实例

        Raises:
            ConfigurationException: 类型 ID 未注册
        """
        constructor = self._registry.get(type_identifier)
        if constructor is None:
            raise ConfigurationException(type_identifier, ConfigurationException.TYPE_WORKER)

        worker = constructor(dict(parameters or {}))
        logger.debug(f"Created worker {type_identifier}: {worker.__class__.__name__}")
        return worker
