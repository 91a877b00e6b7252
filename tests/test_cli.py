import pytest

from streamboot.__main__ import main
from streamboot.config.loader import LocalConfigLoader
from streamboot.config.remote import RemoteConfigFetcher
from streamboot.job import StreamingJob


@pytest.fixture
def run_main(settings_for, store_opener, heartbeat_factory):
    def run(argv, config_path=None, job=None):
        settings = settings_for(config_path)
        return main(
            argv,
            settings=settings,
            job=job,
            fetcher=RemoteConfigFetcher(settings, store_opener),
            heartbeat_factory=heartbeat_factory,
        )
    return run


def test_normal_run_exits_zero(run_main, properties_config, runtime_factory, events):
    assert run_main(['--checkpointPath', '/ck'], properties_config, StreamingJob(runtime_factory())) == 0
    assert 'await_termination' in events


def test_unrecognized_argument_prints_usage_and_loads_nothing(run_main, properties_config,
                                                              runtime_factory, events, capsys, monkeypatch):
    def fail_load(self, path):
        raise AssertionError('configuration must not be loaded')

    monkeypatch.setattr(LocalConfigLoader, 'load', fail_load)
    assert run_main(['--bogus', 'x'], properties_config, StreamingJob(runtime_factory())) == 1

    err = capsys.readouterr().err
    assert 'Unrecognized options: --bogus x' in err
    assert 'Usage: streamboot [options]' in err
    assert events == []


def test_missing_config_path_exits_one(run_main, capsys):
    assert run_main([]) == 1
    assert 'STREAMBOOT_DEPLOY_CONF' in capsys.readouterr().err


def test_unsupported_extension_exits_one(run_main, write_config, runtime_factory, events, capsys):
    path = write_config('job.conf', 'spark.app.main=jobs.demo:job\n')
    assert run_main([], path, StreamingJob(runtime_factory())) == 1
    assert "Unsupported config format 'conf'" in capsys.readouterr().err
    assert events == []


def test_missing_main_class_exits_one(run_main, write_config, runtime_factory, events, capsys):
    path = write_config('job.yml', 'spark:\n  app:\n    name: demo\n')
    assert run_main([], path, StreamingJob(runtime_factory())) == 1
    assert 'spark.app.main' in capsys.readouterr().err
    assert events == []


def test_failed_restore_without_create_on_error_exits_one(run_main, properties_config,
                                                          runtime_factory, events, capsys):
    job = StreamingJob(runtime_factory('error'))
    assert run_main(['--checkpointPath', '/ck', '--createOnError', 'false'], properties_config, job) == 1

    err = capsys.readouterr().err
    assert 'Failed to restore from checkpoint /ck' in err
    assert 'create_context' not in events
    assert 'start' not in events
