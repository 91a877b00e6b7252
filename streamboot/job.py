from __future__ import annotations
import importlib
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from streamboot.exceptions import JobResolutionError
from streamboot.hooks import LifecycleHooks
from streamboot.runtime import StreamingRuntime

if TYPE_CHECKING:
    from streamboot.health.heartbeat import HeartbeatFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreamingJob:
    """What a job's main class resolves to: the runtime plus its hooks."""
    runtime: StreamingRuntime
    hooks: LifecycleHooks = field(default_factory=LifecycleHooks)
    heartbeat_factory: Optional['HeartbeatFactory'] = None


def _split_target(main_class: str) -> tuple[str, str]:
    if ':' in main_class:
        module_name, _, attr = main_class.partition(':')
    else:
        module_name, _, attr = main_class.rpartition('.')
    if not module_name or not attr:
        raise JobResolutionError(
            f"Main class '{main_class}' must look like 'package.module:attr' or 'package.module.attr'",
            phase='job',
        )
    return module_name, attr


def load_job(main_class: str) -> StreamingJob:
    """
    Import the job named by the main-class setting.

    The target may be a StreamingJob instance or a zero-argument callable
    (class or factory function) returning one.
    """
    module_name, attr = _split_target(main_class.strip())
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise JobResolutionError(f"Cannot import job module '{module_name}': {e}", phase='job') from e

    try:
        target = getattr(module, attr)
    except AttributeError:
        raise JobResolutionError(f"Module '{module_name}' has no attribute '{attr}'", phase='job') from None

    job = target if isinstance(target, StreamingJob) else None
    if job is None and callable(target):
        job = target()
    if not isinstance(job, StreamingJob):
        raise JobResolutionError(
            f"'{main_class}' did not resolve to a StreamingJob (got {type(job).__name__})", phase='job'
        )
    logger.info(f'✓ Resolved streaming job from {main_class}')
    return job
