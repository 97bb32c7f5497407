"""
Job Factory - 根据 job.types 配置构造作业
"""

from typing import Any, Dict, Optional

from pydantic import ValidationError

from core.exceptions import ConfigurationException
from core.schemas import JobTypeSpec
from jobs.middleware import JobMiddlewareManager
from workers import WorkerFactory

from .base import DefaultJob, get_job_registry


class JobFactory:
    """
    作业工厂

    job.types.<id>.class 可以是作业类本身，也可以是已注册的作业类型 ID
    """

    def __init__(
        self,
        config: Dict[str, Any],
        worker_factory: Optional[WorkerFactory] = None,
        registry: Optional[Dict[str, type]] = None,
        middleware_manager: Optional[JobMiddlewareManager] = None,
    ):
        """
        Args:
            config: 作业配置（包含 types 节点）
            worker_factory: Worker 工厂（可选）
            registry: 作业类型 ID 到作业类的映射（可选，默认使用自动注册表）
            middleware_manager: 传给作业的中间件管理器（可选）
        """
        self.config = config
        self.worker_factory = worker_factory or WorkerFactory()
        self._registry = dict(registry) if registry is not None else get_job_registry()
        self.middleware_manager = middleware_manager

    def _resolve_class(self, type_identifier: str) -> type:
        entry = (self.config.get("types") or {}).get(type_identifier)
        if not entry:
            raise ConfigurationException(type_identifier)

        try:
            spec = JobTypeSpec.model_validate(entry)
        except ValidationError as e:
            raise ConfigurationException(type_identifier) from e

        job_class = spec.class_
        if isinstance(job_class, str):
            job_class = self._registry.get(job_class)

        if not (isinstance(job_class, type) and issubclass(job_class, DefaultJob)):
            raise ConfigurationException(type_identifier)

        return job_class

    def create_job(
        self, type_identifier: str, parameters: Optional[Dict[str, Any]] = None
    ) -> DefaultJob:
        """
        构造作业并设置参数

        Raises:
            ConfigurationException: 作业类型未配置或缺少有效的 class
        """
        job_class = self._resolve_class(type_identifier)
        job = job_class(self.config, self.worker_factory, self.middleware_manager)
        job.set_parameters(parameters or {})
        return job
