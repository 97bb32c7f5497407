"""
Queues - 队列消息与队列服务

消费驱动（consumer）依赖 jobs 包，不在此处导出，以避免循环导入
"""

from .message import Message
from .service import DEFAULT_QUEUE, DefaultService, Service
from .redis_service import RedisService

__all__ = [
    "Message",
    "Service",
    "DefaultService",
    "RedisService",
    "DEFAULT_QUEUE",
]
