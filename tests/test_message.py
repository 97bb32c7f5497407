"""
Tests for Message (queues/message.py).
"""

import pytest

from core.exceptions import MessageIdentifierException
from queues.message import Message


def test_to_dict():
    message = Message("orders", "body", {"receipt": "r"}, "m1", {"decoded": {"id": 1}})

    assert message.to_dict() == {
        "message_identifier": "m1",
        "queue_identifier": "orders",
        "body": "body",
        "attributes": {"receipt": "r"},
        "metadata": {"decoded": {"id": 1}},
    }


def test_from_dict_restores_message():
    message = Message.from_dict(
        {"message_identifier": "m1", "queue_identifier": "orders", "body": "b"}
    )

    assert message.queue_identifier == "orders"
    assert message.message_identifier == "m1"
    assert message.attributes == {}
    assert message.metadata == {}


def test_identifier_can_be_assigned_once():
    message = Message("orders", "body")
    assert message.message_identifier == ""

    message.message_identifier = "m1"
    assert message.message_identifier == "m1"

    with pytest.raises(MessageIdentifierException):
        message.message_identifier = "m2"


def test_queue_identifier_is_read_only():
    message = Message("orders", "body")

    with pytest.raises(AttributeError):
        message.queue_identifier = "other"


def test_queue_identifier_required():
    with pytest.raises(ValueError):
        Message("", "body")
