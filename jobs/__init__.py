"""
Jobs - 作业状态机

- DefaultJob: 生命周期、Worker 调用、结果汇总
- SimpleJob: 按 simple_identifier 顺序执行一组 Worker
- QueueJob: 绑定队列消息，按结果决定是否删除消息
"""

from .base import DefaultJob, Job, get_job_registry
from .simple_job import SimpleJob
from .queue_job import QueueJob
from .factory import JobFactory
from .runner import JobResult, execute_job

__all__ = [
    "Job",
    "DefaultJob",
    "SimpleJob",
    "QueueJob",
    "JobFactory",
    "JobResult",
    "execute_job",
    "get_job_registry",
]
