from __future__ import annotations

from streamboot.args import parse_arguments
from streamboot.bootstrap_context import BootstrapContext

from .base_phase import BootstrapPhase


class ArgumentPhase(BootstrapPhase):
    phase_key = 'arguments'

    def execute(self, context: BootstrapContext) -> BootstrapContext:
        directive = parse_arguments(context.argv)
        if directive.restore_requested:
            self.logger.info(
                f'Checkpoint path: {directive.path} (createOnError={str(directive.create_on_error).lower()})'
            )
        return context.evolve(directive=directive)
