"""
Queue Consumer Service - 主入口

从 Redis 队列出队消息，为每条消息执行 QueueJob
"""

import argparse
import signal
import sys
import threading

from loguru import logger

from core.config import get_settings, load_idle_config
from core.redis_client import redis_manager
from core.utils.logger import setup_logger
from workers import WorkerFactory

from queues.consumer import QueueConsumer
from queues.redis_service import RedisService


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Idle queue consumer")
    parser.add_argument(
        "-q", "--queue", dest="queues", action="append", required=True,
        help="Queue identifier to consume (repeatable)",
    )
    parser.add_argument("-c", "--config", default=None, help="Idle config file (JSON)")
    parser.add_argument("--once", action="store_true", help="Consume a single round and exit")
    return parser.parse_args(argv)


def main(argv=None):
    """消费服务主入口"""
    args = parse_args(argv)

    settings = get_settings()
    setup_logger(settings.LOG_LEVEL, settings.LOG_FILE)

    logger.info("=" * 70)
    logger.info("📬 Idle Queue Consumer")
    logger.info("=" * 70)

    try:
        config = load_idle_config(args.config)
    except (OSError, ValueError) as e:
        logger.error(f"✗ Failed to load config: {e}")
        sys.exit(1)

    try:
        redis_manager.init(settings)
        if not redis_manager.ping():
            raise ConnectionError("Redis not available")
        logger.info("✓ Redis connected")
    except Exception as e:
        logger.error(f"✗ Redis connection failed: {e}")
        sys.exit(1)

    service = RedisService(config)
    for queue_identifier in args.queues:
        # 启动前校验队列配置，避免在出队之后才发现
        service.get_queue_settings(queue_identifier)

    consumer = QueueConsumer(service, WorkerFactory())

    logger.info("-" * 70)
    logger.info(f"Queues: {', '.join(args.queues)}")
    logger.info(f"Poll interval: {settings.CONSUMER_POLL_INTERVAL}s")
    logger.info(f"Requeue on start: {settings.CONSUMER_REQUEUE_ON_START}")
    logger.info("-" * 70)

    stop_event = threading.Event()

    def signal_handler(signum, frame):
        logger.info(f"🛑 Received signal {signum}, shutting down...")
        stop_event.set()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    try:
        consumer.run(
            args.queues,
            stop_event,
            poll_interval=settings.CONSUMER_POLL_INTERVAL,
            once=args.once,
            requeue=settings.CONSUMER_REQUEUE_ON_START,
        )
    finally:
        redis_manager.close()
        logger.info("=" * 70)
        logger.info("✅ Consumer stopped")
        logger.info("=" * 70)


if __name__ == "__main__":
    main()
