"""
Pytest fixtures and configuration for the test suite.
"""

import sys
from pathlib import Path
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest

# Add project root to path so tests can import the top-level packages
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from jobs.middleware import JobMiddlewareManager  # noqa: E402
from jobs.simple_job import SimpleJob  # noqa: E402
from workers import WorkerFactory  # noqa: E402
from tests.helpers import FooWorker, InMemoryService  # noqa: E402


@pytest.fixture
def job_config() -> Dict[str, Any]:
    return {
        "types": {
            SimpleJob.IDENTIFIER: {
                "class": SimpleJob,
                "parameters": {
                    "supported": {
                        "foo_job": {
                            "parameters": {
                                "workers": [
                                    {"type": FooWorker.IDENTIFIER, "parameters": {}},
                                ],
                            },
                        },
                        "empty_job": {
                            "parameters": {"workers": []},
                        },
                    },
                },
            },
        },
    }


@pytest.fixture
def queue_config() -> Dict[str, Any]:
    return {
        "queues": {
            "default": {
                "delete": {"enabled": True, "error": {"suppression": False}},
                "dequeue": {"parameters": {"max_number_of_messages": 1}},
            },
            "orders": {
                "worker": {"type": FooWorker.IDENTIFIER, "parameters": {}},
            },
            "keep": {
                "worker": {"type": FooWorker.IDENTIFIER, "parameters": {}},
                "delete": {"enabled": False},
            },
            "broken": {
                "worker": {"parameters": {"x": 1}},
            },
        },
    }


@pytest.fixture
def worker_factory() -> WorkerFactory:
    return WorkerFactory({FooWorker.IDENTIFIER: FooWorker})


@pytest.fixture
def mock_factory() -> MagicMock:
    return MagicMock(spec=WorkerFactory)


@pytest.fixture
def middleware_manager() -> JobMiddlewareManager:
    return JobMiddlewareManager()


@pytest.fixture
def service(queue_config) -> InMemoryService:
    return InMemoryService(queue_config)
