"""
Queue Message - 队列消息

一条排队工作的信封：消息 ID、所属队列、消息体、后端属性和临时元数据
"""

from typing import Any, Dict, Optional

from core.exceptions import MessageIdentifierException


class Message:
    """
    队列消息

    - queue_identifier 在构造时确定，之后不可修改
    - message_identifier 可以为空，由后端入队时赋值，且只能赋值一次
    - metadata 为临时数据，不会被队列持久化
    """

    def __init__(
        self,
        queue_identifier: str,
        body: str,
        attributes: Optional[Dict[str, Any]] = None,
        message_identifier: str = "",
        metadata: Optional[Dict[str, Any]] = None,
    ):
        if not queue_identifier:
            raise ValueError("queue_identifier cannot be empty")

        self._queue_identifier = queue_identifier
        self._message_identifier = message_identifier
        self.body = body
        self.attributes: Dict[str, Any] = dict(attributes or {})
        self.metadata: Dict[str, Any] = dict(metadata or {})

    @property
    def queue_identifier(self) -> str:
        return self._queue_identifier

    @property
    def message_identifier(self) -> str:
        return self._message_identifier

    @message_identifier.setter
    def message_identifier(self, value: str) -> None:
        if self._message_identifier:
            raise MessageIdentifierException(self._message_identifier)
        self._message_identifier = value

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            "message_identifier": self.message_identifier,
            "queue_identifier": self.queue_identifier,
            "body": self.body,
            "attributes": dict(self.attributes),
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        """从 to_dict() 的结构还原消息"""
        return cls(
            queue_identifier=data["queue_identifier"],
            body=data.get("body", ""),
            attributes=data.get("attributes"),
            message_identifier=data.get("message_identifier", ""),
            metadata=data.get("metadata"),
        )

    def __repr__(self) -> str:
        return (
            f"Message(queue={self.queue_identifier!r}, "
            f"id={self.message_identifier!r})"
        )
