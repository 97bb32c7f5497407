"""
Redis 连接管理器
"""

from typing import Optional

from redis import Redis, ConnectionPool
from loguru import logger

from .config import Settings, get_settings
from .utils.singleton import singleton
from .exceptions import RedisNotInitializedException


@singleton
class RedisManager:
    """
    单例Redis连接管理器
    队列消息以 JSON 字符串保存，因此连接使用 decode_responses=True
    """

    def __init__(self):
        self._pool: Optional[ConnectionPool] = None
        self._redis: Optional[Redis] = None

    def init(self, settings: Optional[Settings] = None) -> None:
        """初始化Redis连接池"""
        if self._pool is not None:
            logger.warning("RedisManager already initialized")
            return

        settings = settings or get_settings()

        self._pool = ConnectionPool(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            db=settings.REDIS_DB,
            password=settings.REDIS_PASSWORD,
            max_connections=20,
            decode_responses=True,
        )
        self._redis = Redis(connection_pool=self._pool)

        logger.info(
            f"Redis manager initialized ({settings.REDIS_HOST}:{settings.REDIS_PORT}/{settings.REDIS_DB})"
        )

    def close(self) -> None:
        """关闭Redis连接"""
        if self._redis:
            self._redis.close()

        if self._pool:
            self._pool.disconnect()

        self._redis = None
        self._pool = None
        logger.info("Redis connection closed")

    def get_connection(self) -> Redis:
        """
        获取Redis连接

        返回:
            Redis客户端实例
        """
        if self._redis is None:
            raise RedisNotInitializedException()
        return self._redis

    def ping(self) -> bool:
        """
        检查Redis是否可用

        返回:
            如果Redis响应ping则为True
        """
        try:
            return self._redis.ping() if self._redis else False
        except Exception as e:
            logger.error(f"Redis ping failed: {e}")
            return False


# 全局实例
redis_manager = RedisManager()
