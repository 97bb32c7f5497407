"""
Test doubles shared across the test suite.
"""

from typing import Any, Dict, List, Optional

from queues.message import Message
from queues.service import DefaultService
from workers import DefaultWorker


class FooWorker(DefaultWorker):
    """Worker that succeeds unless configured otherwise."""

    IDENTIFIER = "foo"

    def __init__(self, parameters: Optional[Dict[str, Any]] = None):
        super().__init__(parameters)
        self.calls = 0

    def work(self) -> bool:
        self.calls += 1
        for error in self.parameters.get("errors", []):
            self.add_error(error)
        self.add_tracker_data("foo_calls", self.calls)
        return self.parameters.get("result", True)


class ExplodingWorker(DefaultWorker):
    """Worker whose work() raises."""

    def __init__(self, parameters: Optional[Dict[str, Any]] = None):
        super().__init__(parameters)
        self.error = self.parameters.get("error", RuntimeError("boom"))

    def work(self) -> bool:
        raise self.error


class InMemoryService(DefaultService):
    """DefaultService with list-backed I/O that records deletes."""

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.messages: Dict[str, List[Message]] = {}
        self.deleted: List[Message] = []

    def enqueue(self, message: Message) -> bool:
        self.messages.setdefault(message.queue_identifier, []).append(message)
        return True

    def dequeue(self, queue_identifier, parameters=None):
        parameters = self.get_queue_dequeueing_parameters(queue_identifier, parameters)
        limit = int(parameters.get("max_number_of_messages", 1))
        pending = self.messages.get(queue_identifier, [])
        taken, self.messages[queue_identifier] = pending[:limit], pending[limit:]
        return taken

    def delete(self, message: Message) -> bool:
        self.deleted.append(message)
        return True


