"""
Worker Base - Worker 接口与基类

定义 Worker 能力接口和自动注册机制
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from jobs.base import Job


# 全局 Worker 注册表：类型 ID -> Worker 类
_worker_registry: Dict[str, type] = {}


class Worker(ABC):
    """
    Worker 接口

    执行一项独立的工作，并报告成功与否、错误和追踪数据
    """

    @abstractmethod
    def work(self) -> bool:
        pass

    @abstractmethod
    def get_errors(self) -> List[str]:
        pass

    @abstractmethod
    def get_tracker_data(self) -> Dict[str, Any]:
        pass

    def set_job(self, job: "Job") -> None:
        """由作业在调用 work() 之前注入"""
        pass


class DefaultWorker(Worker):
    """
    Worker 基类

    特性：
    - 定义了 IDENTIFIER 的具体子类会自动注册（__init_subclass__）
    - 统一保存参数、错误和追踪数据
    """

    IDENTIFIER: Optional[str] = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        identifier = cls.__dict__.get("IDENTIFIER")
        if identifier and not getattr(cls, "__abstractmethods__", None):
            _worker_registry[identifier] = cls
            logger.debug(f"Auto-registered worker: {identifier} -> {cls.__name__}")

    def __init__(self, parameters: Optional[Dict[str, Any]] = None):
        self.parameters: Dict[str, Any] = dict(parameters or {})
        self.errors: List[str] = []
        self.tracker_data: Dict[str, Any] = {}
        self.job: Optional["Job"] = None

    def set_job(self, job: "Job") -> None:
        self.job = job

    def get_errors(self) -> List[str]:
        return list(self.errors)

    def get_tracker_data(self) -> Dict[str, Any]:
        return dict(self.tracker_data)

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_tracker_data(self, key: str, value: Any) -> None:
        self.tracker_data[key] = value


def get_worker_registry() -> Dict[str, type]:
    """获取 Worker 注册表副本"""
    return _worker_registry.copy()
