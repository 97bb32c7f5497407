"""
Tests for the consumer entry point (queues/main.py).
"""

import json
from unittest.mock import patch

import pytest

from queues import main as consumer_main


def test_parse_args():
    args = consumer_main.parse_args(["-q", "orders", "--queue", "emails", "--once"])

    assert args.queues == ["orders", "emails"]
    assert args.once is True
    assert args.config is None


def test_queue_is_required():
    with pytest.raises(SystemExit):
        consumer_main.parse_args([])


def test_missing_config_exits(tmp_path):
    with pytest.raises(SystemExit) as excinfo, patch.object(consumer_main.signal, "signal"):
        consumer_main.main(["-q", "orders", "-c", str(tmp_path / "missing.json")])

    assert excinfo.value.code == 1


def test_runs_one_round(tmp_path):
    path = tmp_path / "idle.json"
    path.write_text(json.dumps({"queues": {"orders": {"worker": {"type": "command"}}}}))

    with patch.object(consumer_main, "redis_manager") as manager, patch.object(
        consumer_main.QueueConsumer, "run", return_value=0
    ) as run, patch.object(consumer_main.signal, "signal"):
        manager.ping.return_value = True

        consumer_main.main(["-q", "orders", "-c", str(path), "--once"])

    run.assert_called_once()
    assert run.call_args.args[0] == ["orders"]
    assert run.call_args.kwargs["once"] is True
    assert "requeue" in run.call_args.kwargs
    manager.close.assert_called_once()
