from __future__ import annotations

from streamboot.bootstrap_context import BootstrapContext
from streamboot.config.debug import DebugModeResolver

from .base_phase import BootstrapPhase


class DebugModePhase(BootstrapPhase):
    phase_key = 'debug_mode'

    def __init__(self, resolver: DebugModeResolver):
        super().__init__()
        self.resolver = resolver

    def execute(self, context: BootstrapContext) -> BootstrapContext:
        resolved = self.resolver.apply(context.resolved, context.debug, context.local.raw_text)
        return context.evolve(resolved=resolved)
