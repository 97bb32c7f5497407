"""
作业执行框架的枚举类型定义
"""

from enum import Enum


class JobState(str, Enum):
    """作业生命周期状态枚举"""

    CREATED = "CREATED"  # 已创建
    PARAMETERS_SET = "PARAMETERS_SET"  # 参数已设置
    CONFIG_VALIDATED = "CONFIG_VALIDATED"  # 配置已校验
    PROCESSING = "PROCESSING"  # 正在处理
    FINISHED = "FINISHED"  # 已结束（成功或失败）


class JobStage(str, Enum):
    """中间件可观察的处理阶段"""

    STARTED = "started"
    WORKER_STARTED = "worker_started"
    WORKER_FINISHED = "worker_finished"
    FAILED = "failed"
    FINISHED = "finished"


class QueueOperation(str, Enum):
    """队列操作类型，对应配置中的 queue / dequeue / delete 节点"""

    QUEUE = "queue"
    DEQUEUE = "dequeue"
    DELETE = "delete"
