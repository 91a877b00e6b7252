from __future__ import annotations
from typing import Optional

from streamboot.bootstrap_context import BootstrapContext
from streamboot.config.identity import compute_identity, require_main_class
from streamboot.config.loader import LocalConfigLoader
from streamboot.config.reconciler import parse_version
from streamboot.exceptions import ConfigurationError

from .base_phase import BootstrapPhase


class LocalConfigPhase(BootstrapPhase):
    """Chooses the config file (debug override first), loads it and derives the job identity."""

    phase_key = 'local_config'

    def __init__(self, loader: Optional[LocalConfigLoader] = None):
        super().__init__()
        self.loader = loader or LocalConfigLoader()

    def execute(self, context: BootstrapContext) -> BootstrapContext:
        settings = context.settings
        debug = settings.is_debug
        config_path = settings.debug_config_path if debug else settings.config_path
        if not config_path:
            raise ConfigurationError(
                'No configuration file given: set STREAMBOOT_DEPLOY_CONF (or STREAMBOOT_DEBUG_CONF for local debugging)'
            )
        if debug:
            self.logger.info(f'Debug override active, loading {config_path}')

        local = self.loader.load(config_path)
        main_class = require_main_class(local.data)
        local_version = parse_version(local.data, source='local')
        identity = compute_identity(local.data)
        self.logger.info(f'Main class: {main_class}, local conf version: {local_version}, identity: {identity}')
        return context.evolve(config_path=config_path, debug=debug, local=local, identity=identity)
