from __future__ import annotations
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from streamboot.bootstrap_context import BootstrapContext
from streamboot.config.debug import DebugModeResolver
from streamboot.config.identity import require_main_class
from streamboot.config.loader import LocalConfigLoader
from streamboot.config.models import ResolvedConfig
from streamboot.config.remote import RemoteConfigFetcher
from streamboot.health.heartbeat import HeartbeatFactory, default_heartbeat_factory
from streamboot.job import StreamingJob, load_job
from streamboot.phases import (
    ArgumentPhase,
    BootstrapPhase,
    ConfigurePhase,
    DebugModePhase,
    LocalConfigPhase,
    PhaseRecord,
    RemoteConfigPhase,
)
from streamboot.recovery import CheckpointRecoveryOrchestrator, RecoveryOutcome, make_context_factory
from streamboot.settings import BootstrapSettings

logger = logging.getLogger(__name__)


@dataclass
class BootstrapRunResult:
    run_id: str
    context: BootstrapContext
    recovery: RecoveryOutcome
    phases: List[PhaseRecord] = field(default_factory=list)

    @property
    def resolved(self) -> ResolvedConfig:
        return self.context.resolved


class BootstrapOrchestrator:
    """
    Sequences the whole launch of a streaming job.

    Resolution runs as phases (arguments, local config, remote config,
    debug mode, configure); then the execution context is recovered or
    created, and the lifecycle hooks run around start and termination.
    """

    def __init__(self, settings: BootstrapSettings, job: Optional[StreamingJob] = None,
                 loader: Optional[LocalConfigLoader] = None,
                 fetcher: Optional[RemoteConfigFetcher] = None,
                 heartbeat_factory: Optional[HeartbeatFactory] = None):
        self.settings = settings
        self.job = job
        self.loader = loader or LocalConfigLoader()
        self.fetcher = fetcher or RemoteConfigFetcher(settings)
        self.heartbeat_factory = heartbeat_factory
        self.run_id = self._generate_run_id()
        self.phase_records: List[PhaseRecord] = []

    @staticmethod
    def _generate_run_id() -> str:
        stamp = datetime.now(timezone.utc).strftime('%Y%m%d%H%M%S')
        return f'streamboot_run_{stamp}_{uuid.uuid4().hex[:8]}'

    def _resolution_phases(self) -> List[BootstrapPhase]:
        return [
            ArgumentPhase(),
            LocalConfigPhase(self.loader),
            RemoteConfigPhase(self.fetcher),
            DebugModePhase(DebugModeResolver(self.settings)),
        ]

    def _execute_phases(self, context: BootstrapContext, phases: Sequence[BootstrapPhase]) -> BootstrapContext:
        for i, phase in enumerate(phases, 1):
            logger.debug(f'Phase {i}/{len(phases)}: {phase.phase_name}')
            context, record = phase.execute_with_hooks(context)
            self.phase_records.append(record)
        return context

    def resolve(self, argv: Sequence[str]) -> BootstrapContext:
        """Parse arguments and resolve configuration; nothing is constructed or started."""
        context = BootstrapContext(run_id=self.run_id, argv=tuple(argv), settings=self.settings)
        return self._execute_phases(context, self._resolution_phases())

    def _resolve_job(self, context: BootstrapContext) -> StreamingJob:
        if self.job is not None:
            return self.job
        return load_job(require_main_class(context.local.data))

    def run(self, argv: Sequence[str]) -> BootstrapRunResult:
        logger.info('=== Streaming job bootstrap starting ===')
        logger.info(f'Run ID: {self.run_id}')

        context = self.resolve(argv)
        job = self._resolve_job(context)
        hooks = job.hooks
        context = self._execute_phases(context, [ConfigurePhase(hooks)])
        resolved = context.resolved
        logger.info(
            f'Resolved configuration: source={resolved.winning_source.value}, '
            f'version={resolved.effective_version}, debug={str(resolved.debug).lower()}'
        )

        recovery = CheckpointRecoveryOrchestrator(job.runtime, make_context_factory(job.runtime, hooks))
        outcome = recovery.recover(context.directive, resolved)
        ssc = outcome.context
        logger.info(f'Execution context ready ({outcome.state.value})')

        heartbeat_factory = self.heartbeat_factory or job.heartbeat_factory or default_heartbeat_factory()
        heartbeat = heartbeat_factory(ssc, context)

        hooks.before_started(ssc)
        ssc.start()
        heartbeat.start()
        hooks.after_started(ssc)
        logger.info('Execution context started; awaiting termination')
        try:
            ssc.await_termination()
        finally:
            heartbeat.stop()
        hooks.before_stop(ssc)
        logger.info('=== Streaming job terminated ===')

        return BootstrapRunResult(
            run_id=self.run_id,
            context=context,
            recovery=outcome,
            phases=list(self.phase_records),
        )


def bootstrap_streaming_job(argv: Sequence[str], job: Optional[StreamingJob] = None,
                            settings: Optional[BootstrapSettings] = None) -> BootstrapRunResult:
    """Run a streaming job end to end; settings default to the STREAMBOOT_* environment."""
    settings = settings or BootstrapSettings.from_env()
    return BootstrapOrchestrator(settings, job=job).run(argv)
