import logging

import pytest

from streamboot.config.models import ConfigSource
from streamboot.config.remote import RemoteConfigFetcher
from streamboot.exceptions import CoordinationTimeoutError

IDENTITY = 'b1946ac92492d2347c6235b4d2611184'
NODE = f'/streamx/spark/conf/{IDENTITY}'


@pytest.fixture
def fetcher(settings_for, store_opener):
    return RemoteConfigFetcher(settings_for(remote_timeout_seconds=2.5), store_opener)


def test_path_is_prefix_plus_identity(settings_for):
    fetcher = RemoteConfigFetcher(settings_for(conf_path_prefix='custom/conf/'))
    assert fetcher.config_path(IDENTITY) == f'/custom/conf/{IDENTITY}'


@pytest.mark.parametrize('endpoint', [None, '', '   '])
def test_no_endpoint_never_opens_store(fetcher, store_opener, endpoint):
    assert fetcher.fetch(IDENTITY, endpoint) is None
    assert store_opener.opened == []


def test_missing_node_is_absent(fetcher, store_opener, fake_store):
    assert fetcher.fetch(IDENTITY, 'zk1:2181') is None
    assert store_opener.opened == [('zk1:2181', 2.5)]
    assert fake_store.reads == [NODE]
    assert fake_store.closed


def test_properties_blob(fetcher, fake_store):
    fake_store.nodes[NODE] = 'spark.app.main=jobs.demo:job\nspark.app.conf.version=8\n'
    remote = fetcher.fetch(IDENTITY, 'zk1:2181')

    assert remote.version == 8
    assert remote.source is ConfigSource.REMOTE
    assert remote.data['spark.app.main'] == 'jobs.demo:job'
    assert fake_store.closed


def test_yaml_blob(fetcher, fake_store):
    fake_store.nodes[NODE] = 'spark:\n  app:\n    main: jobs.demo:job\n    conf:\n      version: 11\n'
    remote = fetcher.fetch(IDENTITY, 'zk1:2181')

    assert remote.version == 11
    assert remote.data['spark.app.conf.version'] == '11'


def test_unreachable_store_degrades_to_absent(fetcher, fake_store, caplog):
    fake_store.fail = True
    with caplog.at_level(logging.WARNING, logger='streamboot.config.remote'):
        assert fetcher.fetch(IDENTITY, 'zk1:2181') is None
    assert 'unreachable' in caplog.text
    assert fake_store.closed


def test_timeout_degrades_to_absent(settings_for, caplog):
    class SlowStore:
        closed = False

        def get(self, path):
            raise CoordinationTimeoutError('no answer within 2.5s')

        def close(self):
            self.closed = True

    store = SlowStore()
    fetcher = RemoteConfigFetcher(settings_for(), lambda endpoint, timeout: store)
    with caplog.at_level(logging.WARNING, logger='streamboot.config.remote'):
        assert fetcher.fetch(IDENTITY, 'zk1:2181') is None
    assert 'timed out' in caplog.text
    assert store.closed


@pytest.mark.parametrize('blob', [
    'spark:\n  app: [unclosed\n',
    '- just\n- a list\n',
    'spark.app.main=jobs.demo:job\n',
    'spark.app.conf.version=latest\n',
])
def test_malformed_blob_degrades_to_absent(fetcher, fake_store, caplog, blob):
    fake_store.nodes[NODE] = blob
    with caplog.at_level(logging.WARNING, logger='streamboot.config.remote'):
        assert fetcher.fetch(IDENTITY, 'zk1:2181') is None
    assert 'Malformed remote configuration' in caplog.text


@pytest.mark.parametrize('endpoint', ['zk1:notaport', 'http://gw:notaport'])
def test_malformed_endpoint_degrades_to_absent(settings_for, caplog, endpoint):
    fetcher = RemoteConfigFetcher(settings_for())
    with caplog.at_level(logging.WARNING, logger='streamboot.config.remote'):
        assert fetcher.fetch(IDENTITY, endpoint) is None
    assert 'Invalid coordination endpoint' in caplog.text
