"""
Checkpoint recovery.

Decides whether the execution context is restored from a checkpoint or
built fresh, and guarantees the context factory runs at most once.

    NO_CHECKPOINT ──────────────────────────────► FRESH_CREATE
    ATTEMPT_RESTORE ─ restored ─────────────────► RESTORED
                    ├ nothing to restore ───────► FRESH_CREATE
                    ├ error, create_on_error ───► FRESH_CREATE
                    └ error, no create_on_error ► FAILED (raises)
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from streamboot.args import CheckpointDirective
from streamboot.config.models import ResolvedConfig
from streamboot.exceptions import CheckpointRecoveryError, ContextConstructionError
from streamboot.hooks import LifecycleHooks
from streamboot.runtime import ContextFactory, ExecutionContext, StreamingRuntime

logger = logging.getLogger(__name__)


class RecoveryState(Enum):
    NO_CHECKPOINT = 'NO_CHECKPOINT'
    ATTEMPT_RESTORE = 'ATTEMPT_RESTORE'
    RESTORED = 'RESTORED'
    FRESH_CREATE = 'FRESH_CREATE'
    FAILED = 'FAILED'

    def is_terminal(self) -> bool:
        return self in (RecoveryState.RESTORED, RecoveryState.FRESH_CREATE, RecoveryState.FAILED)


@dataclass
class RecoveryOutcome:
    state: RecoveryState
    context: ExecutionContext
    transitions: List[RecoveryState] = field(default_factory=list)
    factory_calls: int = 0

    @property
    def restored(self) -> bool:
        return self.state is RecoveryState.RESTORED


def make_context_factory(runtime: StreamingRuntime, hooks: LifecycleHooks) -> ContextFactory:
    """Fresh construction: the runtime builds the context, then the job's handle hook wires it."""

    def create(config: ResolvedConfig) -> ExecutionContext:
        context = runtime.create_context(config)
        hooks.handle(context)
        return context

    return create


class CheckpointRecoveryOrchestrator:

    def __init__(self, runtime: StreamingRuntime, context_factory: ContextFactory):
        self.runtime = runtime
        self.context_factory = context_factory
        self._factory_calls = 0
        self._transitions: List[RecoveryState] = []

    def _enter(self, state: RecoveryState) -> RecoveryState:
        self._transitions.append(state)
        logger.debug(f'Recovery state -> {state.value}')
        return state

    def _create(self, config: ResolvedConfig) -> ExecutionContext:
        if self._factory_calls:
            raise ContextConstructionError('Execution context has already been constructed for this run',
                                           phase='recovery')
        self._factory_calls += 1
        return self.context_factory(config)

    def recover(self, directive: CheckpointDirective, config: ResolvedConfig) -> RecoveryOutcome:
        if self._transitions:
            raise ContextConstructionError('Checkpoint recovery has already run for this orchestrator',
                                           phase='recovery')

        if not directive.restore_requested:
            self._enter(RecoveryState.NO_CHECKPOINT)
            state = self._enter(RecoveryState.FRESH_CREATE)
            logger.info('No checkpoint path given; creating a fresh execution context')
            context = self._create(config)
            return self._finish(directive, state, context)

        self._enter(RecoveryState.ATTEMPT_RESTORE)
        logger.info(f'Attempting to restore execution context from checkpoint {directive.path}')
        restored: Optional[ExecutionContext] = None
        restore_error: Optional[Exception] = None
        try:
            restored = self.runtime.load_checkpoint(directive.path)
        except Exception as e:
            restore_error = e

        if restored is not None:
            state = self._enter(RecoveryState.RESTORED)
            logger.info(f'✓ Execution context restored from {directive.path}')
            return self._finish(directive, state, restored)

        if restore_error is None:
            logger.info(f'No checkpoint data at {directive.path}; creating a fresh execution context')
        elif directive.create_on_error:
            logger.warning(
                f'Restoring from checkpoint {directive.path} failed; creating a fresh execution context',
                exc_info=restore_error,
            )
        else:
            self._enter(RecoveryState.FAILED)
            logger.error(f'Restoring from checkpoint {directive.path} failed and createOnError=false')
            raise CheckpointRecoveryError(
                f'Failed to restore from checkpoint {directive.path}',
                checkpoint_path=directive.path,
                state=RecoveryState.FAILED,
                transitions=self._transitions,
            ) from restore_error

        state = self._enter(RecoveryState.FRESH_CREATE)
        context = self._create(config)
        return self._finish(directive, state, context)

    def _finish(self, directive: CheckpointDirective, state: RecoveryState,
                context: ExecutionContext) -> RecoveryOutcome:
        if directive.restore_requested:
            context.checkpoint(directive.path)
            logger.debug(f'Checkpoint directory set to {directive.path}')
        return RecoveryOutcome(
            state=state,
            context=context,
            transitions=list(self._transitions),
            factory_calls=self._factory_calls,
        )
