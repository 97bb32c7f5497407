"""
Simple Job - 按配置顺序执行一组 Worker 的作业

配置结构:
    {
        "types": {
            "simple": {
                "class": SimpleJob,
                "parameters": {
                    "supported": {
                        "<simple_identifier>": {
                            "parameters": {
                                "workers": [{"type": ..., "parameters": {...}}, ...]
                            }
                        }
                    }
                }
            }
        }
    }
"""

from typing import Any, Dict

from loguru import logger
from pydantic import ValidationError

from core.exceptions import ConfigurationException, InvalidJobParameterException
from core.schemas import SimpleJobSpec

from .base import DefaultJob


class SimpleJob(DefaultJob):
    """由 simple_identifier 参数选择 Worker 列表的作业"""

    IDENTIFIER = "simple"
    REQUIRED_PARAMETERS = ("simple_identifier",)

    def build_workers(self) -> None:
        self.build_simple_job_worker()

    def _get_supported(self) -> Dict[str, Any]:
        type_config = (self.config.get("types") or {}).get(self.IDENTIFIER)
        if not type_config or not type_config.get("class"):
            raise ConfigurationException(self.IDENTIFIER)

        supported = (type_config.get("parameters") or {}).get("supported")
        if not supported:
            raise ConfigurationException(self.IDENTIFIER)

        return supported

    def build_simple_job_worker(self) -> None:
        """
        解析 simple_identifier 对应的 Worker 列表并逐个构建

        Raises:
            ConfigurationException: 作业类型、class、supported 或对应条目缺失
            InvalidJobParameterException: 未设置 simple_identifier
        """
        supported = self._get_supported()

        simple_identifier = self.parameters.get("simple_identifier")
        if simple_identifier is None:
            raise InvalidJobParameterException("simple_identifier")

        entry = supported.get(simple_identifier)
        if entry is None:
            raise ConfigurationException(simple_identifier)

        try:
            spec = SimpleJobSpec.model_validate(entry)
        except ValidationError as e:
            raise ConfigurationException(simple_identifier) from e

        for worker_spec in spec.parameters.workers:
            if not worker_spec.type:
                raise ConfigurationException(simple_identifier, ConfigurationException.TYPE_WORKER)
            self.build_worker(worker_spec.type, worker_spec.parameters)

        logger.debug(
            f"Simple job {simple_identifier} resolved {len(self.workers)} worker(s)"
        )
