"""
Base Phase - common contract for the bootstrap phases.

A phase takes the current BootstrapContext and returns a new one. Phases
run strictly in sequence on the calling thread; a BootstrapError raised by
a phase aborts the launch.
"""
from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass

from streamboot.bootstrap_context import BootstrapContext
from streamboot.exceptions import BootstrapError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhaseRecord:
    """Timing record of one phase execution."""
    phase_name: str
    duration_seconds: float
    success: bool


class BootstrapPhase(ABC):
    """
    Abstract base class for all bootstrap phases.

    Subclasses implement execute(); the orchestrator calls
    execute_with_hooks(), which adds logging, timing and phase attribution
    of bootstrap errors.
    """

    phase_key: str = 'phase'

    def __init__(self):
        self.phase_name = self.__class__.__name__
        self.logger = logging.getLogger(f"streamboot.phase.{self.phase_key}")

    @abstractmethod
    def execute(self, context: BootstrapContext) -> BootstrapContext:
        """
        Execute this bootstrap phase.

        Args:
            context: BootstrapContext produced by the previous phase

        Returns:
            The evolved BootstrapContext
        """

    def pre_execute(self, context: BootstrapContext) -> None:
        self.logger.debug(f"Starting phase: {self.phase_name} (run {context.run_id})")

    def post_execute(self, context: BootstrapContext, record: PhaseRecord) -> None:
        if record.success:
            self.logger.info(f"✓ Phase completed: {self.phase_name} in {record.duration_seconds:.3f}s")
        else:
            self.logger.error(f"✗ Phase failed: {self.phase_name} after {record.duration_seconds:.3f}s")

    def execute_with_hooks(self, context: BootstrapContext) -> tuple[BootstrapContext, PhaseRecord]:
        self.pre_execute(context)
        start = time.perf_counter()
        try:
            result = self.execute(context)
        except BootstrapError as e:
            if e.phase is None:
                e.phase = self.phase_key
            record = PhaseRecord(self.phase_name, time.perf_counter() - start, success=False)
            self.post_execute(context, record)
            raise
        record = PhaseRecord(self.phase_name, time.perf_counter() - start, success=True)
        self.post_execute(result, record)
        return result, record
