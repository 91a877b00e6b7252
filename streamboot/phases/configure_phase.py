from __future__ import annotations

from streamboot.bootstrap_context import BootstrapContext
from streamboot.hooks import LifecycleHooks

from .base_phase import BootstrapPhase


class ConfigurePhase(BootstrapPhase):
    """Lets the job's configure hook adjust a copy of the settings, then freezes the result."""

    phase_key = 'configure'

    def __init__(self, hooks: LifecycleHooks):
        super().__init__()
        self.hooks = hooks

    def execute(self, context: BootstrapContext) -> BootstrapContext:
        working = context.resolved.as_dict()
        self.hooks.configure(working)
        changed = sorted(k for k in set(working) | set(context.resolved.data)
                         if working.get(k) != context.resolved.get(k))
        if changed:
            self.logger.debug(f'configure hook changed keys: {changed}')
        return context.evolve(resolved=context.resolved.with_data(working), frozen=True)
