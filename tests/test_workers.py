"""
Tests for WorkerFactory and the built-in workers (workers/).
"""

import sys

import pytest

from core.exceptions import ConfigurationException
from workers import CommandWorker, WorkerFactory, get_worker_registry

from tests.helpers import FooWorker


class TestWorkerFactory:
    def test_creates_registered_worker(self, worker_factory):
        worker = worker_factory.create_worker("foo", {"result": False})

        assert isinstance(worker, FooWorker)
        assert worker.parameters == {"result": False}

    def test_unknown_type_raises_configuration(self, worker_factory):
        with pytest.raises(ConfigurationException, match="Worker nope") as excinfo:
            worker_factory.create_worker("nope", {})

        assert excinfo.value.identifier == "nope"

    def test_register_constructor_function(self):
        factory = WorkerFactory({})
        factory.register("custom", lambda parameters: FooWorker({"result": parameters["ok"]}))

        worker = factory.create_worker("custom", {"ok": False})

        assert factory.is_registered("custom")
        assert worker.work() is False

    def test_default_registry_includes_auto_registered_workers(self):
        registry = get_worker_registry()

        assert registry["command"] is CommandWorker
        assert registry["foo"] is FooWorker
        assert WorkerFactory().is_registered("command")

    def test_parameters_are_copied(self, worker_factory):
        parameters = {"result": True}
        worker = worker_factory.create_worker("foo", parameters)
        worker.parameters["result"] = False

        assert parameters == {"result": True}


class TestCommandWorker:
    def test_zero_exit_code_succeeds(self):
        worker = CommandWorker({"command": f'"{sys.executable}" -c "pass"'})

        assert worker.work() is True
        assert worker.get_errors() == []
        assert worker.get_tracker_data()["command_exit_code"] == 0
        assert worker.get_tracker_data()["command_duration"] >= 0

    def test_non_zero_exit_code_fails(self):
        worker = CommandWorker(
            {"command": f'"{sys.executable}" -c "import sys; sys.stderr.write(\'bad\'); sys.exit(3)"'}
        )

        assert worker.work() is False
        assert worker.get_tracker_data()["command_exit_code"] == 3
        assert worker.get_errors() == ["Command exited with code 3: bad"]

    def test_missing_command_fails(self):
        worker = CommandWorker({})

        assert worker.work() is False
        assert worker.get_errors() == ["No command configured for command worker."]

    def test_timeout_fails(self):
        worker = CommandWorker(
            {"command": f'"{sys.executable}" -c "import time; time.sleep(2)"', "timeout": 0.2}
        )

        assert worker.work() is False
        assert worker.get_tracker_data()["command_exit_code"] is None
        assert "timed out" in worker.get_errors()[0]
