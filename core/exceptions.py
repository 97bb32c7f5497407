"""
作业执行框架的自定义异常
"""
from typing import Any, Dict


class IdleException(Exception):
    """Idle Conductor 基础异常类"""
    pass


# ========== 配置异常 ==========

class ConfigurationException(IdleException):
    """
    配置缺失或无法解析

    作业类型、Worker 类型或队列的 Worker 绑定无法从配置中解析时抛出
    """

    TYPE_JOB = "job"
    TYPE_WORKER = "worker"
    TYPE_QUEUE = "queue"

    def __init__(self, identifier: str, kind: str = TYPE_JOB):
        self.identifier = identifier
        self.kind = kind
        super().__init__(
            f"{kind.capitalize()} {identifier} is missing a proper configuration."
        )


# ========== 作业异常 ==========

class InvalidJobParameterException(IdleException):
    """作业缺少必需参数"""
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Job is missing the required parameter '{key}'.")


class JobStateException(IdleException):
    """作业状态转换异常"""
    def __init__(self, job_id: str, current_state: str, target_state: str):
        self.job_id = job_id
        self.current_state = current_state
        self.target_state = target_state
        super().__init__(
            f"Job {job_id} cannot transition from {current_state} to {target_state}"
        )


# ========== 队列异常 ==========

class InvalidQueueException(IdleException, ValueError):
    """请求了 default 或未配置的队列"""
    def __init__(self, queue_identifier: str):
        self.queue_identifier = queue_identifier
        super().__init__("Invalid queue specified.")


class MessageIdentifierException(IdleException):
    """消息 ID 只能被赋值一次"""
    def __init__(self, current: str):
        self.current = current
        super().__init__(f"Message identifier already assigned: {current}")


class QueueOperationException(IdleException):
    """队列后端 I/O 失败（未被抑制）"""
    def __init__(self, operation: str, queue_identifier: str, detail: Any = None):
        self.operation = operation
        self.queue_identifier = queue_identifier
        message = f"Queue operation '{operation}' failed for queue {queue_identifier}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


# ========== Redis异常 ==========

class RedisException(IdleException):
    """Redis相关异常基类"""
    pass


class RedisNotInitializedException(RedisException):
    """Redis未初始化异常"""
    def __init__(self):
        super().__init__(
            "RedisManager not initialized. Call init() first."
        )


def exception_to_dict(exc: BaseException) -> Dict[str, Any]:
    """
    将异常转换为可记录的字典

    Args:
        exc: 异常对象

    Returns:
        包含异常类型、消息和位置的字典
    """
    tb = exc.__traceback__
    while tb is not None and tb.tb_next is not None:
        tb = tb.tb_next

    return {
        "type": exc.__class__.__name__,
        "message": str(exc),
        "file": tb.tb_frame.f_code.co_filename if tb else None,
        "line": tb.tb_lineno if tb else None,
    }
