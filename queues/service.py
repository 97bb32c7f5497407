"""
Queue Service - 队列服务

职责：
- 解析单个队列的配置（与 default 合并）
- 校验队列 ID
- 暴露 queue / dequeue / delete 的错误抑制策略

实际的队列 I/O 由具体后端实现（见 redis_service.py）
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import ValidationError

from core.enums import QueueOperation
from core.exceptions import ConfigurationException, InvalidQueueException, exception_to_dict
from core.schemas import QueueConfig
from core.utils.merge import merge

from .message import Message


DEFAULT_QUEUE = "default"


class Service(ABC):
    """队列服务接口"""

    @abstractmethod
    def get_queue_config(self, queue_identifier: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    def get_queue_worker_config(self, queue_identifier: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    def enqueue(self, message: Message) -> bool:
        pass

    @abstractmethod
    def dequeue(
        self, queue_identifier: str, parameters: Optional[Dict[str, Any]] = None
    ) -> List[Message]:
        pass

    @abstractmethod
    def delete(self, message: Message) -> bool:
        pass

    def requeue_processing(self, queue_identifier: str) -> int:
        """
        将已出队但未确认的消息放回待处理队列

        没有 processing 区的后端无需实现，返回 0
        """
        return 0


class DefaultService(Service):
    """
    带配置解析的队列服务基类

    配置结构:
        {
            "queues": {
                "default": {...},      # 合并基础，不可直接请求
                "<queue_id>": {
                    "worker": {"type": ..., "parameters": {...}},
                    "queue": {"parameters": {...}, "error": {"suppression": bool}},
                    "dequeue": {"parameters": {...}, "error": {"suppression": bool}},
                    "delete": {"enabled": bool, "error": {"suppression": bool}},
                }
            }
        }
    """

    def __init__(self, config: Dict[str, Any]):
        self.config = config

    def _queues(self) -> Dict[str, Any]:
        return self.config.get("queues") or {}

    def is_queue_configured(self, queue_identifier: str) -> bool:
        return queue_identifier in self._queues()

    def validate_queue(self, queue_identifier: str) -> None:
        if queue_identifier == DEFAULT_QUEUE or not self.is_queue_configured(queue_identifier):
            raise InvalidQueueException(queue_identifier)

    def get_queue_config(self, queue_identifier: str) -> Dict[str, Any]:
        """
        获取队列配置

        Args:
            queue_identifier: 队列 ID

        Returns:
            default 与队列自身配置递归合并后的字典
        """
        self.validate_queue(queue_identifier)

        queues = self._queues()
        default = queues.get(DEFAULT_QUEUE) or {}
        requested = queues.get(queue_identifier) or {}

        return merge(default, requested)

    def get_queue_settings(self, queue_identifier: str) -> QueueConfig:
        """获取队列配置的强类型视图"""
        try:
            return QueueConfig.model_validate(self.get_queue_config(queue_identifier))
        except ValidationError as e:
            logger.error(f"Queue {queue_identifier} has an invalid configuration: {e}")
            raise ConfigurationException(
                queue_identifier, ConfigurationException.TYPE_QUEUE
            ) from e

    def get_queue_worker_config(self, queue_identifier: str) -> Dict[str, Any]:
        return self.get_queue_config(queue_identifier).get("worker") or {}

    def _operation_config(
        self, queue_identifier: str, operation: QueueOperation
    ) -> Dict[str, Any]:
        return self.get_queue_config(queue_identifier).get(operation.value) or {}

    def _is_error_suppression(
        self, queue_identifier: str, operation: QueueOperation
    ) -> bool:
        error_config = self._operation_config(queue_identifier, operation).get("error") or {}
        return bool(error_config.get("suppression", False))

    # ========== queue ==========

    def is_queue_queueing_error_suppression(self, queue_identifier: str) -> bool:
        return self._is_error_suppression(queue_identifier, QueueOperation.QUEUE)

    def get_queue_queueing_parameters(self, queue_identifier: str) -> Dict[str, Any]:
        return self._operation_config(queue_identifier, QueueOperation.QUEUE).get("parameters") or {}

    # ========== dequeue ==========

    def is_queue_dequeueing_error_suppression(self, queue_identifier: str) -> bool:
        return self._is_error_suppression(queue_identifier, QueueOperation.DEQUEUE)

    def get_queue_dequeueing_parameters(
        self, queue_identifier: str, parameters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """配置中的 dequeue 参数，调用方传入的参数优先"""
        configured = (
            self._operation_config(queue_identifier, QueueOperation.DEQUEUE).get("parameters")
            or {}
        )
        return merge(configured, parameters or {})

    # ========== delete ==========

    def is_queue_deleting_error_suppression(self, queue_identifier: str) -> bool:
        return self._is_error_suppression(queue_identifier, QueueOperation.DELETE)

    def is_queue_delete_enabled(self, queue_identifier: str) -> bool:
        return bool(
            self._operation_config(queue_identifier, QueueOperation.DELETE).get("enabled", False)
        )

    @staticmethod
    def throwable_to_dict(exc: BaseException) -> Dict[str, Any]:
        return exception_to_dict(exc)
