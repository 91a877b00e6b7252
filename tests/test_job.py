import sys
import types

import pytest

from streamboot.exceptions import JobResolutionError
from streamboot.hooks import LifecycleHooks
from streamboot.job import StreamingJob, load_job


@pytest.fixture
def job_module(monkeypatch, runtime_factory):
    module = types.ModuleType('streamboot_jobs_for_test')
    module.instance = StreamingJob(runtime_factory())
    module.build = lambda: StreamingJob(runtime_factory(), LifecycleHooks())
    module.not_a_job = 42
    module.wrong_factory = lambda: 'nope'
    monkeypatch.setitem(sys.modules, 'streamboot_jobs_for_test', module)
    return module


def test_instance_by_colon(job_module):
    assert load_job('streamboot_jobs_for_test:instance') is job_module.instance


def test_instance_by_dotted_path(job_module):
    assert load_job('streamboot_jobs_for_test.instance') is job_module.instance


def test_factory_is_called(job_module):
    assert isinstance(load_job('streamboot_jobs_for_test:build'), StreamingJob)


@pytest.mark.parametrize('main_class', [
    'streamboot_jobs_for_test:not_a_job',
    'streamboot_jobs_for_test:wrong_factory',
    'streamboot_jobs_for_test:missing',
    'streamboot_no_such_module:job',
    'nodots',
])
def test_unresolvable_targets(job_module, main_class):
    with pytest.raises(JobResolutionError) as exc_info:
        load_job(main_class)
    assert exc_info.value.phase == 'job'


def test_default_hooks_are_noops(runtime_factory):
    hooks = StreamingJob(runtime_factory()).hooks
    assert hooks.configure({}) is None
    assert hooks.handle(object()) is None
