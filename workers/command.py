"""
Command Worker - 执行 shell 命令的 Worker
"""

import subprocess
import time

from loguru import logger

from .base import DefaultWorker


class CommandWorker(DefaultWorker):
    """
    运行 parameters["command"]，退出码为 0 视为成功

    参数：
    - command: 要执行的命令（必需）
    - timeout: 超时秒数（可选）
    - cwd: 工作目录（可选）
    """

    IDENTIFIER = "command"

    def work(self) -> bool:
        command = self.parameters.get("command")
        if not command:
            self.add_error("No command configured for command worker.")
            return False

        timeout = self.parameters.get("timeout")
        start = time.monotonic()

        try:
            completed = subprocess.run(
                command,
                shell=True,
                cwd=self.parameters.get("cwd"),
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"Command timed out after {timeout}s: {command}")
            self.add_error(f"Command timed out after {timeout}s.")
            self.add_tracker_data("command_exit_code", None)
            return False
        finally:
            self.add_tracker_data("command_duration", time.monotonic() - start)

        self.add_tracker_data("command_exit_code", completed.returncode)

        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            self.add_error(
                f"Command exited with code {completed.returncode}"
                + (f": {stderr[-500:]}" if stderr else ".")
            )
            return False

        logger.debug(f"Command finished: {command}")
        return True
