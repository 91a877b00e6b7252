# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from streamboot.exceptions import CoordinationUnavailableError
from streamboot.settings import BootstrapSettings


class RecordingContext:
    """Execution context double that appends every call to a shared event log."""

    def __init__(self, events: List[str], name: str = 'ctx'):
        self.events = events
        self.name = name
        self.started = False
        self.checkpoint_dirs: List[str] = []

    def start(self) -> None:
        self.started = True
        self.events.append('start')

    def await_termination(self) -> None:
        self.events.append('await_termination')

    def stop(self) -> None:
        self.events.append('stop')

    def checkpoint(self, directory: str) -> None:
        self.checkpoint_dirs.append(directory)
        self.events.append(f'checkpoint:{directory}')


class RecordingRuntime:
    """
    Streaming runtime double.

    restore: 'none' (no checkpoint data), 'ok' (restores a context) or
    'error' (the checkpoint exists but is unreadable).
    """

    def __init__(self, events: List[str], restore: str = 'none'):
        self.events = events
        self.restore = restore
        self.created_with = []
        self.load_calls: List[str] = []

    def create_context(self, config):
        self.events.append('create_context')
        self.created_with.append(config)
        return RecordingContext(self.events, name='fresh')

    def load_checkpoint(self, path: str):
        self.load_calls.append(path)
        self.events.append(f'load_checkpoint:{path}')
        if self.restore == 'ok':
            return RecordingContext(self.events, name='restored')
        if self.restore == 'error':
            raise IOError(f'corrupt checkpoint at {path}')
        return None


class RecordingHeartbeat:

    def __init__(self, events: List[str]):
        self.events = events

    def start(self) -> None:
        self.events.append('heartbeat.start')

    def stop(self) -> None:
        self.events.append('heartbeat.stop')


class FakeStore:
    """In-memory coordination store; `fail` makes every call raise unavailable."""

    def __init__(self, nodes: Optional[Dict[str, str]] = None, fail: bool = False):
        self.nodes = dict(nodes or {})
        self.fail = fail
        self.closed = False
        self.reads: List[str] = []

    def get(self, path: str) -> Optional[str]:
        self.reads.append(path)
        if self.fail:
            raise CoordinationUnavailableError('connection refused')
        return self.nodes.get(path)

    def put(self, path: str, value: str) -> None:
        if self.fail:
            raise CoordinationUnavailableError('connection refused')
        self.nodes[path] = value

    def delete(self, path: str) -> None:
        if self.fail:
            raise CoordinationUnavailableError('connection refused')
        self.nodes.pop(path, None)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def events() -> List[str]:
    return []


@pytest.fixture
def runtime_factory(events):
    def make(restore: str = 'none') -> RecordingRuntime:
        return RecordingRuntime(events, restore=restore)
    return make


@pytest.fixture
def heartbeat_factory(events):
    def factory(context, bootstrap):
        return RecordingHeartbeat(events)
    return factory


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def store_opener(fake_store):
    opened = []

    def opener(endpoint: str, timeout: float) -> FakeStore:
        opened.append((endpoint, timeout))
        return fake_store

    opener.opened = opened
    return opener


@pytest.fixture
def write_config(tmp_path: Path):
    def write(name: str, text: str) -> str:
        path = tmp_path / name
        path.write_text(text, encoding='utf-8')
        return str(path)
    return write


@pytest.fixture
def properties_config(write_config) -> str:
    return write_config('job.properties', (
        '# demo job\n'
        'spark.app.main=jobs.demo:job\n'
        'spark.app.name=demo-job\n'
        'spark.app.conf.version=3\n'
        'spark.monitor.zookeeper=zk1:2181\n'
        'spark.batch.duration=5\n'
    ))


@pytest.fixture
def settings_for():
    def make(config_path: Optional[str] = None, **overrides) -> BootstrapSettings:
        return BootstrapSettings.from_env({}, config_path=config_path, **overrides)
    return make
