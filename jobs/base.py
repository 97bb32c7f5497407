"""
Job - 作业状态机

负责作业的完整生命周期：参数接收、配置校验、Worker 调用、
结果 / 耗时 / 错误汇总，以及追踪数据导出

状态流转：
    CREATED -> PARAMETERS_SET -> CONFIG_VALIDATED -> PROCESSING -> FINISHED

validate_parameters() 与 validate_config() 可按任意顺序调用或省略，
process() 会在开始前校验参数，并在需要时构建 Worker
"""

import json
import time
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Tuple

from loguru import logger

from core.enums import JobStage, JobState
from core.exceptions import InvalidJobParameterException, JobStateException
from jobs.middleware import JobMiddlewareManager, get_default_manager
from workers import Worker, WorkerFactory


TRACKER_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# 全局作业注册表：类型 ID -> 作业类
_job_registry: Dict[str, type] = {}


class Job(ABC):
    """作业接口"""

    @abstractmethod
    def set_parameters(self, parameters: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    def validate_parameters(self) -> None:
        pass

    @abstractmethod
    def validate_config(self) -> None:
        pass

    @abstractmethod
    def process(self) -> None:
        pass

    @abstractmethod
    def get_tracker_data(self) -> Dict[str, Any]:
        pass


class DefaultJob(Job):
    """
    作业基类

    successful 在处理前为 None，处理后为所有已调用 Worker 结果的逻辑与；
    finished 在 process() 结束时置为 True（无论成功、失败或异常）
    """

    IDENTIFIER: str = ""
    REQUIRED_PARAMETERS: Tuple[str, ...] = ()
    AUTO_REGISTER: bool = True

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        identifier = cls.__dict__.get("IDENTIFIER")
        if identifier and cls.__dict__.get("AUTO_REGISTER", True):
            _job_registry[identifier] = cls
            logger.debug(f"Auto-registered job: {identifier} -> {cls.__name__}")

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        worker_factory: Optional[WorkerFactory] = None,
        middleware_manager: Optional[JobMiddlewareManager] = None,
    ):
        """
        Args:
            config: 作业配置（包含 types 节点）
            worker_factory: Worker 工厂（可选，用于依赖注入）
            middleware_manager: 中间件管理器（可选，默认使用共享管理器）
        """
        self.config: Dict[str, Any] = config or {}
        self.worker_factory = worker_factory or WorkerFactory()
        self.middleware_manager = middleware_manager or get_default_manager()

        self.job_id = uuid.uuid4()
        self.state = JobState.CREATED
        self.start_date: Optional[datetime] = None
        self.duration: float = 0.0
        self.parameters: Dict[str, Any] = {}
        self.context: Dict[str, Any] = {}
        self.output: Dict[str, Any] = {}
        self.errors: List[str] = []
        self.successful: Optional[bool] = None
        self.finished = False

        self.workers: List[Worker] = []
        self._workers_built = False

    def get_type_identifier(self) -> str:
        return self.IDENTIFIER

    # ========================================================================
    # 参数与配置
    # ========================================================================

    def set_parameters(self, parameters: Dict[str, Any]) -> None:
        """替换参数，校验延迟到 validate_parameters() / process()"""
        if self.state in (JobState.PROCESSING, JobState.FINISHED):
            raise JobStateException(
                str(self.job_id), self.state.value, JobState.PARAMETERS_SET.value
            )

        self.parameters = dict(parameters)
        if self.state == JobState.CREATED:
            self.state = JobState.PARAMETERS_SET

    def validate_parameters(self) -> None:
        for key in self.REQUIRED_PARAMETERS:
            if key not in self.parameters:
                raise InvalidJobParameterException(key)

    def validate_config(self) -> None:
        self._ensure_workers()
        if self.state in (JobState.CREATED, JobState.PARAMETERS_SET):
            self.state = JobState.CONFIG_VALIDATED

    def build_workers(self) -> None:
        """根据配置构建 Worker，由子类实现"""
        pass

    def build_worker(self, type_identifier: str, parameters: Optional[Dict[str, Any]] = None) -> Worker:
        worker = self.worker_factory.create_worker(type_identifier, parameters or {})
        self.workers.append(worker)
        return worker

    def _ensure_workers(self) -> None:
        if not self._workers_built:
            self.build_workers()
            self._workers_built = True

    # ========================================================================
    # 上下文与输出
    # ========================================================================

    def set_context(self, context: Dict[str, Any]) -> None:
        self.context = dict(context)

    def add_context(self, key: str, value: Any) -> None:
        self.context[key] = value

    def get_context_entry(self, key: str, default: Any = None) -> Any:
        return self.context.get(key, default)

    def set_output(self, output: Dict[str, Any]) -> None:
        self.output = dict(output)

    def add_output(self, key: str, value: Any) -> None:
        self.output[key] = value

    def get_errors(self) -> List[str]:
        return list(self.errors)

    def is_successful(self) -> bool:
        return bool(self.successful)

    def is_finished(self) -> bool:
        return self.finished

    # ========================================================================
    # 处理
    # ========================================================================

    def process(self) -> None:
        """
        处理作业

        Worker 或 before_process 钩子抛出的异常会被记录为
        "Encountered an error: <message>"，在错误、耗时和 finished 记录完成后
        原样重新抛出；此时 FAILED / FINISHED 阶段钩子与 after_process
        抛出的异常只记录日志，不会替换原异常

        Raises:
            JobStateException: 作业已经处理过
            InvalidJobParameterException: 缺少必需参数
            ConfigurationException: Worker 无法从配置解析
        """
        if self.state in (JobState.PROCESSING, JobState.FINISHED):
            raise JobStateException(
                str(self.job_id), self.state.value, JobState.PROCESSING.value
            )

        self.validate_parameters()
        self._ensure_workers()

        self.state = JobState.PROCESSING
        self.start_date = datetime.now()
        start = time.monotonic()
        self.successful = True
        failure: Optional[Exception] = None

        try:
            self.middleware_manager.execute_before(self)
            self._on_stage(JobStage.STARTED)

            for worker in self.workers:
                self._run_worker(worker)

        except Exception as e:
            failure = e
            self.errors.append(f"Encountered an error: {e}")
            self.successful = False
            self._run_hooks(
                failure,
                partial(self._on_stage, JobStage.FAILED),
                partial(self.middleware_manager.execute_on_error, self, e),
            )
            raise

        finally:
            self.duration = time.monotonic() - start
            self.finished = True
            self.state = JobState.FINISHED
            self._run_hooks(
                failure,
                partial(self._on_stage, JobStage.FINISHED),
                partial(self.middleware_manager.execute_after, self),
            )

    def _run_hooks(self, failure: Optional[Exception], *hooks: Callable[[], None]) -> None:
        """依次执行中间件钩子；failure 不为空时钩子异常只记录日志"""
        for hook in hooks:
            if failure is None:
                hook()
                continue

            try:
                hook()
            except Exception as hook_error:
                logger.opt(exception=hook_error).error(
                    f"Job {self.job_id} middleware hook failed while handling "
                    f"{failure!r}: {hook_error}"
                )

    def _run_worker(self, worker: Worker) -> None:
        worker.set_job(self)
        self._on_stage(JobStage.WORKER_STARTED)

        worker_errors: List[str] = []
        try:
            result = worker.work()
        finally:
            worker_errors = list(worker.get_errors())
            self.errors.extend(worker_errors)

        self.successful = bool(self.successful and result and not worker_errors)
        self._on_stage(JobStage.WORKER_FINISHED)

    def _on_stage(self, stage: JobStage) -> None:
        self.middleware_manager.execute_on_stage(stage.value, self)

    # ========================================================================
    # 导出
    # ========================================================================

    def get_tracker_data(self) -> Dict[str, Any]:
        """
        导出追踪数据

        Returns:
            作业核心字段与各 Worker 追踪数据合并后的字典，
            Worker 数据在后合并，同名键以 Worker 为准
        """
        data: Dict[str, Any] = {
            "id": str(self.job_id),
            "start": self.start_date.strftime(TRACKER_DATE_FORMAT) if self.start_date else None,
            "duration": self.duration,
            "successful": self.successful,
            "finished": self.finished,
            "errors": list(self.errors),
            "parameters": json.dumps(self.parameters, default=str),
        }

        for worker in self.workers:
            data.update(worker.get_tracker_data())

        return data


def get_job_registry() -> Dict[str, type]:
    """获取作业注册表副本"""
    return _job_registry.copy()
