"""
Job Middleware Base - 作业中间件基类

定义中间件接口和自动注册机制
"""

from abc import ABC
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from jobs.base import Job


# 全局中间件注册表
_middleware_registry: dict = {}


class MiddlewareMetadata:
    """中间件元数据"""

    def __init__(
        self,
        name: str,
        description: str = "",
        priority: int = 0,
        enabled_by_default: bool = True,
    ):
        """
        Args:
            name: 中间件名称
            description: 描述
            priority: 优先级（数字越大越先执行）
            enabled_by_default: 默认是否启用
        """
        self.name = name
        self.description = description
        self.priority = priority
        self.enabled_by_default = enabled_by_default


def middleware_metadata(
    name: str,
    description: str = "",
    priority: int = 0,
    enabled_by_default: bool = True,
):
    """
    中间件元数据装饰器

    Usage:
        @middleware_metadata(name="TrackerMiddleware", priority=10)
        class TrackerMiddleware(BaseJobMiddleware):
            ...
    """
    def decorator(cls):
        cls._metadata = MiddlewareMetadata(
            name=name,
            description=description,
            priority=priority,
            enabled_by_default=enabled_by_default,
        )
        return cls
    return decorator


class BaseJobMiddleware(ABC):
    """
    作业中间件基类

    子类定义时自动注册（类体中设置 AUTO_REGISTER = False 可跳过，
    只能通过 JobMiddlewareManager 显式使用）；钩子方法均为可选实现，
    钩子抛出的异常会向上传播
    """

    AUTO_REGISTER: bool = True

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        if not cls.__dict__.get("AUTO_REGISTER", True):
            return

        if not getattr(cls, "__abstractmethods__", None):
            registry_key = getattr(cls, "_registry_key", None) or cls.__name__
            _middleware_registry[registry_key] = cls

            if "_metadata" not in cls.__dict__:
                cls._metadata = MiddlewareMetadata(
                    name=registry_key,
                    description=f"{registry_key} middleware",
                )

            logger.debug(f"Auto-registered job middleware: {registry_key}")

    def __init__(self, enabled: bool = None):
        """
        Args:
            enabled: 是否启用（None 时使用元数据的 enabled_by_default）
        """
        metadata = self._get_metadata()
        self.enabled = enabled if enabled is not None else metadata.enabled_by_default

    def _get_metadata(self) -> MiddlewareMetadata:
        return getattr(self.__class__, "_metadata", MiddlewareMetadata(
            name=self.__class__.__name__,
        ))

    @property
    def name(self) -> str:
        return self._get_metadata().name

    @property
    def priority(self) -> int:
        return self._get_metadata().priority

    # ========================================================================
    # 钩子方法
    # ========================================================================

    def before_process(self, job: "Job") -> None:
        pass

    def after_process(self, job: "Job") -> None:
        pass

    def on_stage(self, stage: str, job: "Job") -> None:
        pass

    def on_error(self, job: "Job", error: Exception) -> None:
        pass


def get_middleware_registry():
    """获取中间件注册表（用于测试和调试）"""
    return _middleware_registry.copy()
