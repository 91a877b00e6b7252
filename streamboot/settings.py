from __future__ import annotations
import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from streamboot.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_DEPLOY_CONF = 'STREAMBOOT_DEPLOY_CONF'
ENV_DEBUG_CONF = 'STREAMBOOT_DEBUG_CONF'
ENV_REMOTE_TIMEOUT = 'STREAMBOOT_REMOTE_TIMEOUT'
ENV_CONF_PREFIX = 'STREAMBOOT_CONF_PREFIX'
ENV_HEARTBEAT_PREFIX = 'STREAMBOOT_HEARTBEAT_PREFIX'
ENV_HEARTBEAT_INTERVAL = 'STREAMBOOT_HEARTBEAT_INTERVAL'
ENV_LOG_LEVEL = 'STREAMBOOT_LOG_LEVEL'

_ENV_FIELDS = {
    ENV_DEPLOY_CONF: 'config_path',
    ENV_DEBUG_CONF: 'debug_config_path',
    ENV_REMOTE_TIMEOUT: 'remote_timeout_seconds',
    ENV_CONF_PREFIX: 'conf_path_prefix',
    ENV_HEARTBEAT_PREFIX: 'heartbeat_path_prefix',
    ENV_HEARTBEAT_INTERVAL: 'heartbeat_interval_seconds',
}


class BootstrapSettings(BaseModel):
    model_config = ConfigDict(extra='forbid', frozen=True)

    config_path: Optional[str] = Field(default=None, description='Deployed job config file (properties or yml)')
    debug_config_path: Optional[str] = Field(default=None, description='Local debug override; disables the remote fetch')
    remote_timeout_seconds: float = Field(default=10.0, gt=0.0, le=300.0, description='Upper bound on the coordination-store lookup')
    conf_path_prefix: str = Field(default='/streamx/spark/conf', description='Store path prefix for centrally managed configs')
    heartbeat_path_prefix: str = Field(default='/streamx/spark/heartbeat', description='Store path prefix for heartbeat nodes')
    heartbeat_interval_seconds: float = Field(default=30.0, gt=0.0, description='Seconds between heartbeat publications')
    debug_master: str = Field(default='local[*]', description='Execution topology forced in debug mode')
    debug_rate_key: str = Field(default='spark.streaming.kafka.maxRatePerPartition', description='Rate-limit key clamped in debug mode')
    debug_rate_value: str = Field(default='10', description='Value the rate-limit key is clamped to')

    @field_validator('config_path', 'debug_config_path')
    @classmethod
    def _blank_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator('conf_path_prefix', 'heartbeat_path_prefix')
    @classmethod
    def _normalize_prefix(cls, v: str) -> str:
        v = v.strip().rstrip('/')
        if not v.startswith('/'):
            v = '/' + v
        return v

    @property
    def is_debug(self) -> bool:
        return self.debug_config_path is not None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> 'BootstrapSettings':
        """Build settings from STREAMBOOT_* environment variables; keyword overrides win."""
        environ = os.environ if environ is None else environ
        values = {field: environ[name] for name, field in _ENV_FIELDS.items() if name in environ}
        values.update(overrides)
        try:
            settings = cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f'Invalid bootstrap settings: {e}', phase='settings') from e
        logger.debug(f'Bootstrap settings: {settings.model_dump()}')
        return settings
