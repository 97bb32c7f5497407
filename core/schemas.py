"""
配置的强类型视图

配置以嵌套字典的形式传入，这里的模型在解析时一次性校验结构，
各处读取时不再逐层使用默认值
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WorkerSpec(BaseModel):
    """Worker 定义：类型 + 参数"""

    model_config = ConfigDict(extra="forbid")

    type: str = ""
    parameters: Dict[str, Any] = Field(default_factory=dict)


class ErrorConfig(BaseModel):
    """错误抑制配置"""

    model_config = ConfigDict(extra="forbid")

    suppression: bool = False


class OperationConfig(BaseModel):
    """queue / dequeue 操作配置"""

    model_config = ConfigDict(extra="forbid")

    parameters: Dict[str, Any] = Field(default_factory=dict)
    error: ErrorConfig = Field(default_factory=ErrorConfig)


class DeleteConfig(OperationConfig):
    """delete 操作配置"""

    enabled: bool = False


class QueueConfig(BaseModel):
    """单个队列合并后的配置"""

    model_config = ConfigDict(extra="allow")

    worker: WorkerSpec = Field(default_factory=WorkerSpec)
    queue: OperationConfig = Field(default_factory=OperationConfig)
    dequeue: OperationConfig = Field(default_factory=OperationConfig)
    delete: DeleteConfig = Field(default_factory=DeleteConfig)


class SimpleJobParameters(BaseModel):
    """SimpleJob 支持项的参数"""

    model_config = ConfigDict(extra="allow")

    workers: List[WorkerSpec] = Field(default_factory=list)


class SimpleJobSpec(BaseModel):
    """types.simple.parameters.supported.<id>"""

    model_config = ConfigDict(extra="allow")

    parameters: SimpleJobParameters = Field(default_factory=SimpleJobParameters)


class JobTypeSpec(BaseModel):
    """job.types.<id>"""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    class_: Optional[Any] = Field(default=None, alias="class")
    parameters: Dict[str, Any] = Field(default_factory=dict)
