from __future__ import annotations
from typing import Optional

from streamboot.bootstrap_context import BootstrapContext
from streamboot.config.reconciler import VersionReconciler
from streamboot.config.remote import RemoteConfigFetcher
from streamboot.constants import COORDINATION_ENDPOINT_KEY, IDENTITY_KEY, USER_ARGS_KEY

from .base_phase import BootstrapPhase


class RemoteConfigPhase(BootstrapPhase):
    """Fetches the centrally managed config (never in debug mode) and reconciles it with the local file."""

    phase_key = 'remote_config'

    def __init__(self, fetcher: RemoteConfigFetcher, reconciler: Optional[VersionReconciler] = None):
        super().__init__()
        self.fetcher = fetcher
        self.reconciler = reconciler or VersionReconciler()

    def execute(self, context: BootstrapContext) -> BootstrapContext:
        local = context.local
        if context.debug:
            self.logger.info('Debug mode: skipping remote configuration lookup')
            remote = None
        else:
            remote = self.fetcher.fetch(context.identity, local.data.get(COORDINATION_ENDPOINT_KEY))

        resolved = self.reconciler.reconcile(local, remote)
        resolved = resolved.with_entries({
            IDENTITY_KEY: context.identity,
            USER_ARGS_KEY: '|'.join(context.argv),
        })
        return context.evolve(remote=remote, resolved=resolved)
