"""
Queue Job - 绑定队列消息的作业

Worker 在构造时从队列配置解析；处理结束后根据结果和
delete.enabled 决定是否删除消息
"""

from typing import Optional

from loguru import logger

from core.exceptions import ConfigurationException
from jobs.middleware import JobMiddlewareManager
from queues.message import Message
from queues.service import Service
from workers import WorkerFactory

from .base import DefaultJob


class QueueJob(DefaultJob):
    """
    队列作业

    确认约定：只有 successful 为 True 且队列开启 delete.enabled 时才删除消息，
    失败的作业从不触发删除
    """

    IDENTIFIER = "queue"
    AUTO_REGISTER = False

    def __init__(
        self,
        service: Service,
        message: Message,
        worker_factory: WorkerFactory,
        middleware_manager: Optional[JobMiddlewareManager] = None,
    ):
        super().__init__({}, worker_factory, middleware_manager)

        self.service = service
        self.message = message
        self.context["message"] = message

        self.build_queue_job_worker()

    def build_queue_job_worker(self) -> None:
        """
        Raises:
            ConfigurationException: 队列的 worker 配置缺少 type
        """
        queue_identifier = self.message.queue_identifier
        worker_config = self.service.get_queue_worker_config(queue_identifier)

        if not worker_config.get("type"):
            raise ConfigurationException(queue_identifier, ConfigurationException.TYPE_WORKER)

        self.build_worker(worker_config["type"], worker_config.get("parameters") or {})
        self._workers_built = True

    def process(self) -> None:
        super().process()
        self.remove_from_queue()

    def remove_from_queue(self) -> None:
        queue_identifier = self.message.queue_identifier
        queue_config = self.service.get_queue_config(queue_identifier)
        delete_enabled = bool((queue_config.get("delete") or {}).get("enabled", False))

        if self.successful is True and delete_enabled:
            self.service.delete(self.message)
            logger.debug(f"Message {self.message.message_identifier} removed from {queue_identifier}")
        else:
            logger.debug(
                f"Message {self.message.message_identifier} left in {queue_identifier} "
                f"(successful={self.successful}, delete_enabled={delete_enabled})"
            )
