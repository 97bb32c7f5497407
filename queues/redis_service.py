"""
Redis Queue Service - 基于 Redis 列表的队列后端

存储结构：
- idle:queue:<id>             待处理消息（LPUSH 入队，右端出队）
- idle:queue:<id>:processing  已出队、等待删除确认的消息

出队使用 LMOVE 将消息原子地移动到 processing 列表，
作业失败时消息保留在 processing 列表中，
requeue_processing() 将其移回待处理队列（消费者启动时调用）
"""

import json
import uuid
from typing import Any, Dict, List, Optional

from loguru import logger
from redis import Redis, RedisError

from core.enums import QueueOperation
from core.exceptions import QueueOperationException
from core.redis_client import redis_manager

from .message import Message
from .service import DefaultService


RECEIPT_ATTRIBUTE = "receipt"


class RedisService(DefaultService):
    """Redis 队列服务"""

    KEY_PREFIX = "idle:queue:"

    def __init__(self, config: Dict[str, Any], redis_client: Optional[Redis] = None):
        """
        Args:
            config: 队列配置（包含 queues 节点）
            redis_client: Redis 客户端（可选，用于依赖注入）
        """
        super().__init__(config)
        self._redis = redis_client

    @property
    def redis(self) -> Redis:
        if self._redis is None:
            self._redis = redis_manager.get_connection()
        return self._redis

    def _get_key(self, queue_identifier: str) -> str:
        return f"{self.KEY_PREFIX}{queue_identifier}"

    def _get_processing_key(self, queue_identifier: str) -> str:
        return f"{self._get_key(queue_identifier)}:processing"

    def _handle_error(
        self,
        operation: QueueOperation,
        queue_identifier: str,
        error: RedisError,
        suppressed: bool,
    ) -> None:
        details = self.throwable_to_dict(error)
        if suppressed:
            logger.warning(
                f"Suppressed {operation.value} error on queue {queue_identifier}: {details}"
            )
            return

        logger.error(f"{operation.value} failed on queue {queue_identifier}: {details}")
        raise QueueOperationException(operation.value, queue_identifier, error) from error

    def enqueue(self, message: Message) -> bool:
        """
        入队

        写入队列并在写入成功后为消息分配 ID，metadata 不会被持久化

        Returns:
            True 如果入队成功；错误被抑制时返回 False，消息 ID 保持未分配
        """
        queue_identifier = message.queue_identifier
        parameters = self.get_queue_queueing_parameters(queue_identifier)

        message_identifier = message.message_identifier or uuid.uuid4().hex

        payload = json.dumps(
            {
                "message_identifier": message_identifier,
                "queue_identifier": queue_identifier,
                "body": message.body,
                "attributes": message.attributes,
            }
        )

        try:
            key = self._get_key(queue_identifier)
            self.redis.lpush(key, payload)
            if parameters.get("expire"):
                self.redis.expire(key, int(parameters["expire"]))
        except RedisError as e:
            self._handle_error(
                QueueOperation.QUEUE,
                queue_identifier,
                e,
                self.is_queue_queueing_error_suppression(queue_identifier),
            )
            return False

        if not message.message_identifier:
            message.message_identifier = message_identifier

        logger.debug(f"Enqueued message {message_identifier} to {queue_identifier}")
        return True

    def dequeue(
        self, queue_identifier: str, parameters: Optional[Dict[str, Any]] = None
    ) -> List[Message]:
        """
        出队

        支持的参数：
        - max_number_of_messages: 单次最多取出的消息数（默认 1）
        - wait_time: 队列为空时阻塞等待的秒数（默认 0，不等待）

        Returns:
            消息列表；错误被抑制时返回空列表
        """
        parameters = self.get_queue_dequeueing_parameters(queue_identifier, parameters)
        max_messages = int(parameters.get("max_number_of_messages", 1))
        wait_time = parameters.get("wait_time", 0)

        key = self._get_key(queue_identifier)
        processing_key = self._get_processing_key(queue_identifier)

        messages: List[Message] = []
        try:
            for _ in range(max_messages):
                raw = self.redis.lmove(key, processing_key, "RIGHT", "LEFT")
                if raw is None and wait_time and not messages:
                    raw = self.redis.blmove(key, processing_key, wait_time, "RIGHT", "LEFT")
                if raw is None:
                    break
                messages.append(self._to_message(raw))
        except RedisError as e:
            self._handle_error(
                QueueOperation.DEQUEUE,
                queue_identifier,
                e,
                self.is_queue_dequeueing_error_suppression(queue_identifier),
            )
            return []

        if messages:
            logger.debug(f"Dequeued {len(messages)} message(s) from {queue_identifier}")
        return messages

    def delete(self, message: Message) -> bool:
        """
        删除（确认）消息

        Returns:
            True 如果消息已从 processing 列表移除
        """
        queue_identifier = message.queue_identifier
        receipt = message.attributes.get(RECEIPT_ATTRIBUTE)
        if receipt is None:
            logger.warning(f"Message {message.message_identifier} has no receipt, skipping delete")
            return False

        try:
            removed = self.redis.lrem(self._get_processing_key(queue_identifier), 1, receipt)
        except RedisError as e:
            self._handle_error(
                QueueOperation.DELETE,
                queue_identifier,
                e,
                self.is_queue_deleting_error_suppression(queue_identifier),
            )
            return False

        logger.debug(f"Deleted message {message.message_identifier} from {queue_identifier}")
        return bool(removed)

    def requeue_processing(self, queue_identifier: str) -> int:
        """
        重新投递

        将 processing 列表中的全部消息移回待处理队列的出队端，
        保持原有出队顺序。只应在没有其他消费者处理该队列时调用

        Returns:
            移回的消息数量；错误被抑制时返回已移回的数量
        """
        key = self._get_key(queue_identifier)
        processing_key = self._get_processing_key(queue_identifier)

        requeued = 0
        try:
            while self.redis.lmove(processing_key, key, "LEFT", "RIGHT") is not None:
                requeued += 1
        except RedisError as e:
            self._handle_error(
                QueueOperation.DEQUEUE,
                queue_identifier,
                e,
                self.is_queue_dequeueing_error_suppression(queue_identifier),
            )

        if requeued:
            logger.info(f"Requeued {requeued} unacknowledged message(s) on {queue_identifier}")
        return requeued

    def _to_message(self, raw: str) -> Message:
        message = Message.from_dict(json.loads(raw))
        message.attributes[RECEIPT_ATTRIBUTE] = raw
        return message
