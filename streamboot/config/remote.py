from __future__ import annotations
import logging
from typing import Optional

from streamboot.config.formats import parse, sniff_format
from streamboot.config.models import ConfigSource, VersionedConfig
from streamboot.config.reconciler import parse_version
from streamboot.coordination.store import StoreOpener, open_coordination_store
from streamboot.exceptions import (
    ConfigurationError,
    CoordinationTimeoutError,
    CoordinationUnavailableError,
    MalformedRemoteConfigError,
)
from streamboot.settings import BootstrapSettings

logger = logging.getLogger(__name__)


class RemoteConfigFetcher:
    """
    Looks up the centrally managed config for a job identity.

    Every failure degrades to None so the job falls back to its local
    file; unreachable, timed-out and malformed responses are logged
    separately.
    """

    def __init__(self, settings: BootstrapSettings, store_opener: Optional[StoreOpener] = None):
        self.settings = settings
        self._open_store = store_opener or open_coordination_store

    def config_path(self, identity: str) -> str:
        return f'{self.settings.conf_path_prefix}/{identity}'

    def fetch(self, identity: str, endpoint: Optional[str]) -> Optional[VersionedConfig]:
        if not endpoint or not endpoint.strip():
            logger.info('No coordination endpoint configured; using local configuration only')
            return None

        path = self.config_path(identity)
        try:
            blob = self._read(endpoint, path)
            if blob is None:
                logger.info(f'No remote configuration at {path}; using local configuration')
                return None
            remote = self._parse(blob, path)
        except CoordinationTimeoutError as e:
            logger.warning(f'Coordination store timed out, falling back to local configuration: {e}')
            return None
        except CoordinationUnavailableError as e:
            logger.warning(f'Coordination store unreachable, falling back to local configuration: {e}')
            return None
        except MalformedRemoteConfigError as e:
            logger.warning(f'Malformed remote configuration at {path}, falling back to local configuration: {e}')
            return None

        logger.info(f'✓ Remote configuration found at {path} (version {remote.version})')
        return remote

    def _read(self, endpoint: str, path: str) -> Optional[str]:
        store = self._open_store(endpoint, self.settings.remote_timeout_seconds)
        try:
            return store.get(path)
        finally:
            store.close()

    def _parse(self, blob: str, path: str) -> VersionedConfig:
        fmt = sniff_format(blob)
        logger.debug(f'Remote blob at {path} sniffed as {fmt.value}')
        try:
            data = parse(blob, fmt)
            version = parse_version(data, source='remote')
        except ConfigurationError as e:
            raise MalformedRemoteConfigError(str(e)) from e
        return VersionedConfig(version=version, data=data, source=ConfigSource.REMOTE)
