"""
Tests for DefaultService (queues/service.py).
"""

import pytest

from core.exceptions import ConfigurationException, InvalidQueueException

from tests.helpers import InMemoryService


@pytest.fixture
def suppression_service() -> InMemoryService:
    return InMemoryService(
        {
            "queues": {
                "default": {
                    "queue": {"error": {"suppression": True}, "parameters": {"expire": 60}},
                    "dequeue": {"parameters": {"max_number_of_messages": 5, "wait_time": 1}},
                },
                "quiet": {
                    "dequeue": {"error": {"suppression": True}},
                    "delete": {"error": {"suppression": True}},
                },
                "loud": {
                    "queue": {"error": {"suppression": False}},
                },
            },
        }
    )


class TestQueueConfig:
    """Test DefaultService.get_queue_config."""

    def test_default_queue_is_not_requestable(self, service):
        with pytest.raises(InvalidQueueException, match="Invalid queue specified."):
            service.get_queue_config("default")

    def test_unconfigured_queue_is_invalid(self, service):
        with pytest.raises(ValueError):
            service.get_queue_config("nope")

    def test_merges_default_per_key(self):
        service = InMemoryService({"queues": {"default": {"a": 1, "b": 2}, "X": {"b": 3}}})

        assert service.get_queue_config("X") == {"a": 1, "b": 3}

    def test_merges_nested_keys(self, service):
        config = service.get_queue_config("keep")

        assert config["delete"] == {"enabled": False, "error": {"suppression": False}}
        assert config["dequeue"] == {"parameters": {"max_number_of_messages": 1}}

    def test_does_not_mutate_config(self, service, queue_config):
        service.get_queue_config("keep")["delete"]["enabled"] = "changed"

        assert queue_config["queues"]["default"]["delete"]["enabled"] is True

    def test_queue_without_default(self):
        service = InMemoryService({"queues": {"X": {"worker": {"type": "foo"}}}})

        assert service.get_queue_worker_config("X") == {"type": "foo"}

    def test_worker_config_defaults_to_empty(self):
        service = InMemoryService({"queues": {"X": {}}})

        assert service.get_queue_worker_config("X") == {}


class TestQueueSettings:
    """Test the typed configuration view."""

    def test_typed_view(self, service):
        settings = service.get_queue_settings("orders")

        assert settings.worker.type == "foo"
        assert settings.delete.enabled is True
        assert settings.dequeue.parameters == {"max_number_of_messages": 1}
        assert settings.queue.error.suppression is False

    def test_invalid_structure_raises_configuration(self):
        service = InMemoryService({"queues": {"X": {"delete": {"enabled": True, "bogus": 1}}}})

        with pytest.raises(ConfigurationException, match="Queue X"):
            service.get_queue_settings("X")


class TestErrorSuppression:
    """Test the per-operation error suppression flags."""

    def test_defaults_to_false(self, service):
        assert service.is_queue_queueing_error_suppression("orders") is False
        assert service.is_queue_dequeueing_error_suppression("orders") is False
        assert service.is_queue_deleting_error_suppression("orders") is False

    def test_reads_flags(self, suppression_service):
        assert suppression_service.is_queue_queueing_error_suppression("quiet") is True
        assert suppression_service.is_queue_dequeueing_error_suppression("quiet") is True
        assert suppression_service.is_queue_deleting_error_suppression("quiet") is True

    def test_queue_overrides_default_flag(self, suppression_service):
        assert suppression_service.is_queue_queueing_error_suppression("loud") is False

    def test_invalid_queue_propagates(self, suppression_service):
        with pytest.raises(InvalidQueueException):
            suppression_service.is_queue_deleting_error_suppression("default")


class TestOperationParameters:
    """Test queue / dequeue parameter accessors."""

    def test_queueing_parameters(self, suppression_service):
        assert suppression_service.get_queue_queueing_parameters("quiet") == {"expire": 60}

    def test_dequeueing_parameters_merge_call_site(self, suppression_service):
        parameters = suppression_service.get_queue_dequeueing_parameters(
            "quiet", {"max_number_of_messages": 2}
        )

        assert parameters == {"max_number_of_messages": 2, "wait_time": 1}

    def test_delete_enabled(self, service):
        assert service.is_queue_delete_enabled("orders") is True
        assert service.is_queue_delete_enabled("keep") is False

    def test_throwable_to_dict(self, service):
        try:
            raise RuntimeError("broken pipe")
        except RuntimeError as e:
            details = service.throwable_to_dict(e)

        assert details["type"] == "RuntimeError"
        assert details["message"] == "broken pipe"
        assert details["line"] is not None
