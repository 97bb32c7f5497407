"""
Job Middleware Manager - 中间件管理器
"""

from typing import TYPE_CHECKING, List, Optional

from loguru import logger

from .base import BaseJobMiddleware, get_middleware_registry

if TYPE_CHECKING:
    from jobs.base import Job


class JobMiddlewareManager:
    """
    中间件管理器

    按优先级降序执行，after_process 逆序执行
    """

    def __init__(self, middlewares: Optional[List[BaseJobMiddleware]] = None):
        self.middlewares: List[BaseJobMiddleware] = []
        self._sorted_cache: Optional[List[BaseJobMiddleware]] = None
        for middleware in middlewares or []:
            self.register(middleware)

    def register(self, middleware: BaseJobMiddleware):
        if middleware.enabled:
            self.middlewares.append(middleware)
            self._sorted_cache = None
            logger.debug(f"Registered job middleware: {middleware.name}")

    def register_all_from_registry(self, enabled_only: bool = True):
        """
        从注册表注册所有中间件

        Args:
            enabled_only: 是否只注册默认启用的中间件
        """
        for middleware_class in get_middleware_registry().values():
            middleware = middleware_class()
            if not enabled_only or middleware.enabled:
                self.register(middleware)

    def _get_sorted_middlewares(self) -> List[BaseJobMiddleware]:
        if self._sorted_cache is None:
            self._sorted_cache = sorted(
                self.middlewares, key=lambda m: m.priority, reverse=True
            )
        return self._sorted_cache

    def execute_before(self, job: "Job") -> None:
        for middleware in self._get_sorted_middlewares():
            middleware.before_process(job)

    def execute_after(self, job: "Job") -> None:
        for middleware in reversed(self._get_sorted_middlewares()):
            middleware.after_process(job)

    def execute_on_stage(self, stage: str, job: "Job") -> None:
        for middleware in self._get_sorted_middlewares():
            middleware.on_stage(stage, job)

    def execute_on_error(self, job: "Job", error: Exception) -> None:
        for middleware in self._get_sorted_middlewares():
            middleware.on_error(job, error)


_default_manager: Optional[JobMiddlewareManager] = None


def create_default_manager() -> JobMiddlewareManager:
    """创建包含所有默认启用中间件的管理器"""
    manager = JobMiddlewareManager()
    manager.register_all_from_registry(enabled_only=True)
    logger.debug(f"Created job middleware manager with {len(manager.middlewares)} middlewares")
    return manager


def get_default_manager() -> JobMiddlewareManager:
    """获取共享的默认管理器（懒加载）"""
    global _default_manager
    if _default_manager is None:
        _default_manager = create_default_manager()
    return _default_manager
