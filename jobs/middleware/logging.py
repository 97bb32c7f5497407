"""
Logging Middleware - 日志记录中间件
"""

from loguru import logger

from .base import BaseJobMiddleware, middleware_metadata


@middleware_metadata(
    name="LoggingMiddleware",
    description="Logs job lifecycle stages and errors",
    priority=100,
)
class LoggingMiddleware(BaseJobMiddleware):
    """日志记录中间件"""

    def before_process(self, job) -> None:
        logger.info(f"🚀 Processing job {job.job_id} ({job.get_type_identifier()})")

    def on_stage(self, stage: str, job) -> None:
        logger.debug(f"Job {job.job_id} entered stage: {stage}")

    def on_error(self, job, error: Exception) -> None:
        logger.error(f"Job {job.job_id} error: {error.__class__.__name__}: {error}")

    def after_process(self, job) -> None:
        status = "✅ succeeded" if job.successful else "❌ failed"
        logger.info(f"Job {job.job_id} {status} (elapsed: {job.duration:.2f}s)")
