"""
Queue Consumer - 出队 -> QueueJob -> 处理 -> 确认

每条消息使用独立的 QueueJob 实例，作业之间不共享可变状态
"""

import threading
from typing import Any, Dict, List, Optional

from loguru import logger

from core.exceptions import ConfigurationException
from jobs.middleware import JobMiddlewareManager
from jobs.queue_job import QueueJob
from jobs.runner import JobResult, execute_job
from workers import WorkerFactory

from .service import Service


class QueueConsumer:
    """
    队列消费者

    - 单条消息的失败不会影响同批次的其他消息，消息保留在队列中等待重新投递
    - 队列的 Worker 绑定配置错误（ConfigurationException）直接向上抛出
    """

    def __init__(
        self,
        service: Service,
        worker_factory: Optional[WorkerFactory] = None,
        middleware_manager: Optional[JobMiddlewareManager] = None,
    ):
        self.service = service
        self.worker_factory = worker_factory or WorkerFactory()
        self.middleware_manager = middleware_manager

    def consume(
        self, queue_identifier: str, parameters: Optional[Dict[str, Any]] = None
    ) -> List[JobResult]:
        """
        消费一批消息

        Args:
            queue_identifier: 队列 ID
            parameters: 出队参数（覆盖配置中的 dequeue.parameters）

        Returns:
            每条成功建立作业的消息对应一个 JobResult
        """
        messages = self.service.dequeue(queue_identifier, parameters)
        results: List[JobResult] = []

        for message in messages:
            try:
                job = QueueJob(
                    self.service, message, self.worker_factory, self.middleware_manager
                )
                results.append(execute_job(job))
            except ConfigurationException:
                raise
            except Exception as e:
                logger.opt(exception=e).error(
                    f"Failed to process message {message.message_identifier} "
                    f"from {queue_identifier}: {e}"
                )

        return results

    def run(
        self,
        queue_identifiers: List[str],
        stop_event: threading.Event,
        poll_interval: float = 1.0,
        once: bool = False,
        requeue: bool = False,
    ) -> int:
        """
        循环消费直到 stop_event 被设置

        Args:
            queue_identifiers: 要消费的队列
            stop_event: 停止信号
            poll_interval: 所有队列都为空时的等待间隔（秒）
            once: 只消费一轮
            requeue: 开始前将上次未确认的消息移回待处理队列

        Returns:
            已处理的作业数量
        """
        processed = 0

        if requeue:
            for queue_identifier in queue_identifiers:
                self.service.requeue_processing(queue_identifier)

        while not stop_event.is_set():
            batch = 0
            for queue_identifier in queue_identifiers:
                results = self.consume(queue_identifier)
                batch += len(results)

            processed += batch

            if once:
                break
            if batch == 0:
                stop_event.wait(poll_interval)

        logger.info(f"Consumer stopped after {processed} job(s)")
        return processed
