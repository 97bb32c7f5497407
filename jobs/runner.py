"""
Job Runner - 以结果对象的形式执行作业

process() 会在记录完成后重新抛出 Worker 异常；
execute_job() 把这类异常收进 JobResult，调用方检查返回值即可
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from loguru import logger

from .base import DefaultJob


@dataclass
class JobResult:
    """作业执行结果"""

    job_id: str
    successful: Optional[bool]
    finished: bool
    duration: float
    errors: List[str] = field(default_factory=list)
    tracker_data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.successful is True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "job_id": self.job_id,
            "successful": self.successful,
            "finished": self.finished,
            "duration": self.duration,
            "errors": list(self.errors),
            "error": str(self.error) if self.error else None,
        }


def execute_job(job: DefaultJob) -> JobResult:
    """
    执行作业并返回结果

    作业开始处理之前的异常（参数、配置错误）直接向上传播；
    处理过程中的异常记录在 JobResult.error 中

    Args:
        job: 作业实例

    Returns:
        JobResult
    """
    error: Optional[Exception] = None

    try:
        job.process()
    except Exception as e:
        if not job.finished:
            raise
        logger.warning(f"Job {job.job_id} raised {e.__class__.__name__}: {e}")
        error = e

    return JobResult(
        job_id=str(job.job_id),
        successful=job.successful,
        finished=job.finished,
        duration=job.duration,
        errors=job.get_errors(),
        tracker_data=job.get_tracker_data(),
        error=error,
    )
