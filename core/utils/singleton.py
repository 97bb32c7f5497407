"""
线程安全的单例装饰器
"""

import threading
from functools import wraps
from typing import Any, Callable, Dict, TypeVar

T = TypeVar("T")


def singleton(cls: type[T]) -> Callable[..., T]:
    """
    单例装饰器，双重检查加锁

    被装饰后的工厂函数带有 clear()，用于在测试中丢弃已创建的实例

    用法示例:
        @singleton
        class RedisManager:
            pass
    """
    instances: Dict[type, Any] = {}
    lock = threading.Lock()

    @wraps(cls)
    def get_instance(*args: Any, **kwargs: Any) -> T:
        if cls not in instances:
            with lock:
                if cls not in instances:
                    instances[cls] = cls(*args, **kwargs)
        return instances[cls]

    def clear() -> None:
        with lock:
            instances.pop(cls, None)

    get_instance.clear = clear
    return get_instance
