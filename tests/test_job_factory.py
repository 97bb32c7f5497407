"""
Tests for JobFactory (jobs/factory.py).
"""

import pytest

from core.exceptions import ConfigurationException
from jobs import JobFactory, QueueJob, SimpleJob, get_job_registry


def test_creates_job_from_class(job_config, worker_factory):
    factory = JobFactory(job_config, worker_factory)

    job = factory.create_job("simple", {"simple_identifier": "foo_job"})
    job.process()

    assert isinstance(job, SimpleJob)
    assert job.successful is True


def test_creates_job_from_registered_identifier(job_config, worker_factory):
    job_config["types"]["simple"]["class"] = "simple"
    factory = JobFactory(job_config, worker_factory)

    assert isinstance(factory.create_job("simple"), SimpleJob)


def test_unknown_type_raises(job_config, worker_factory):
    factory = JobFactory(job_config, worker_factory)

    with pytest.raises(ConfigurationException, match="Job other"):
        factory.create_job("other")


def test_missing_class_raises(worker_factory):
    factory = JobFactory({"types": {"simple": {"parameters": {}}}}, worker_factory)

    with pytest.raises(ConfigurationException):
        factory.create_job("simple")


def test_non_job_class_raises(worker_factory):
    factory = JobFactory({"types": {"simple": {"class": dict}}}, worker_factory)

    with pytest.raises(ConfigurationException):
        factory.create_job("simple")


def test_queue_job_is_not_factory_registered():
    registry = get_job_registry()

    assert registry["simple"] is SimpleJob
    assert QueueJob not in registry.values()
