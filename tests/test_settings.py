import pytest

from streamboot.exceptions import ConfigurationError
from streamboot.settings import BootstrapSettings


def test_defaults():
    settings = BootstrapSettings.from_env({})

    assert settings.config_path is None
    assert not settings.is_debug
    assert settings.remote_timeout_seconds == 10.0
    assert settings.conf_path_prefix == '/streamx/spark/conf'
    assert settings.heartbeat_path_prefix == '/streamx/spark/heartbeat'
    assert settings.debug_master == 'local[*]'


def test_environment_mapping():
    settings = BootstrapSettings.from_env({
        'STREAMBOOT_DEPLOY_CONF': '/opt/job/job.properties',
        'STREAMBOOT_DEBUG_CONF': '/home/dev/debug.yml',
        'STREAMBOOT_REMOTE_TIMEOUT': '2.5',
        'STREAMBOOT_CONF_PREFIX': 'teams/conf/',
        'STREAMBOOT_HEARTBEAT_INTERVAL': '5',
        'UNRELATED': 'ignored',
    })

    assert settings.config_path == '/opt/job/job.properties'
    assert settings.debug_config_path == '/home/dev/debug.yml'
    assert settings.is_debug
    assert settings.remote_timeout_seconds == 2.5
    assert settings.conf_path_prefix == '/teams/conf'
    assert settings.heartbeat_interval_seconds == 5.0


def test_overrides_win_over_environment():
    settings = BootstrapSettings.from_env({'STREAMBOOT_DEPLOY_CONF': '/a.properties'}, config_path='/b.yml')
    assert settings.config_path == '/b.yml'


def test_blank_debug_path_is_not_debug():
    assert not BootstrapSettings.from_env({'STREAMBOOT_DEBUG_CONF': '   '}).is_debug


@pytest.mark.parametrize('environ', [
    {'STREAMBOOT_REMOTE_TIMEOUT': '0'},
    {'STREAMBOOT_REMOTE_TIMEOUT': 'soon'},
    {'STREAMBOOT_REMOTE_TIMEOUT': '3600'},
    {'STREAMBOOT_HEARTBEAT_INTERVAL': '-1'},
])
def test_invalid_values_raise_configuration_error(environ):
    with pytest.raises(ConfigurationError) as exc_info:
        BootstrapSettings.from_env(environ)
    assert exc_info.value.phase == 'settings'


def test_unknown_override_is_rejected():
    with pytest.raises(ConfigurationError):
        BootstrapSettings.from_env({}, log_everything=True)


def test_settings_are_immutable():
    settings = BootstrapSettings.from_env({})
    with pytest.raises(Exception):
        settings.config_path = '/x.properties'
