from __future__ import annotations
import logging
import re
from typing import Mapping, Optional

from streamboot.config.models import ConfigSource, LocalConfig, ResolvedConfig, VersionedConfig
from streamboot.constants import (
    CLOUD_VERSION_KEY,
    CONF_VERSION_KEY,
    EFFECTIVE_VERSION_KEY,
    LOCAL_VERSION_KEY,
    WINNING_SOURCE_KEY,
)
from streamboot.exceptions import InvalidVersionError

logger = logging.getLogger(__name__)

_VERSION_PATTERN = re.compile(r'[+-]?[0-9]+')


def parse_version(data: Mapping[str, str], source: str = 'local') -> int:
    raw = data.get(CONF_VERSION_KEY)
    if raw is None or not str(raw).strip():
        raise InvalidVersionError(f'{CONF_VERSION_KEY} must not be empty in {source} config', raw, source)
    text = str(raw).strip()
    if not _VERSION_PATTERN.fullmatch(text):
        raise InvalidVersionError(
            f"{CONF_VERSION_KEY} must be an integer in {source} config, got '{raw}'", raw, source
        )
    return int(text)


class VersionReconciler:
    """
    Chooses between the local file and the centrally managed config.

    The remote config wins when its version is greater than or equal to the
    local one, so republishing the same version centrally forces a refresh.
    The winner's data is taken as a whole; keys are not merged.
    """

    def reconcile(self, local: LocalConfig, remote: Optional[VersionedConfig] = None) -> ResolvedConfig:
        local_version = parse_version(local.data, source='local')
        audit = {LOCAL_VERSION_KEY: str(local_version)}

        if remote is None:
            winner = VersionedConfig(version=local_version, data=local.data, source=ConfigSource.LOCAL)
            remote_version = None
        else:
            remote_version = remote.version
            audit[CLOUD_VERSION_KEY] = str(remote_version)
            if remote.version >= local_version:
                winner = remote
            else:
                logger.warning(
                    f'Remote config version {remote.version} is older than local version {local_version}; '
                    f'ignoring remote config'
                )
                winner = VersionedConfig(version=local_version, data=local.data, source=ConfigSource.LOCAL)

        audit[WINNING_SOURCE_KEY] = winner.source.value
        audit[EFFECTIVE_VERSION_KEY] = str(winner.version)
        data = dict(winner.data)
        data.update(audit)

        logger.info(f'Using {winner.source.value} configuration (version {winner.version})')
        return ResolvedConfig(
            data=data,
            winning_source=winner.source,
            effective_version=winner.version,
            local_version=local_version,
            remote_version=remote_version,
        )
