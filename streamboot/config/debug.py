from __future__ import annotations
import base64
import logging

from streamboot.config.identity import app_name
from streamboot.config.models import ResolvedConfig
from streamboot.constants import (
    APP_NAME_KEY,
    CONF_SOURCE_KEY,
    DEBUG_APP_NAME_PREFIX,
    DEBUG_KEY,
    MASTER_KEY,
)
from streamboot.settings import BootstrapSettings

logger = logging.getLogger(__name__)


def encode_source(raw_text: str) -> str:
    return base64.b64encode(raw_text.encode('utf-8')).decode('ascii')


class DebugModeResolver:
    """
    Applies the local-debug overrides and stamps the audit fields.

    The config-source substitution and the skipped remote fetch happen
    upstream; this only rewrites the already resolved mapping.
    """

    def __init__(self, settings: BootstrapSettings):
        self.settings = settings

    def apply(self, resolved: ResolvedConfig, debug: bool, raw_source: str) -> ResolvedConfig:
        entries = {}
        if debug:
            name = app_name(resolved.data)
            entries[APP_NAME_KEY] = f'{DEBUG_APP_NAME_PREFIX}{name}'
            entries[MASTER_KEY] = self.settings.debug_master
            entries[self.settings.debug_rate_key] = self.settings.debug_rate_value
            logger.info(
                f'Debug mode: master={self.settings.debug_master}, '
                f'{self.settings.debug_rate_key}={self.settings.debug_rate_value}'
            )
        entries[CONF_SOURCE_KEY] = encode_source(raw_source)
        entries[DEBUG_KEY] = 'true' if debug else 'false'
        return resolved.with_entries(entries).with_debug(debug)
