# streamboot/__init__.py
from __future__ import annotations

from .exceptions import *
from .args import CheckpointDirective, parse_arguments
from .settings import BootstrapSettings
from .config.models import ConfigFormat, ConfigSource, LocalConfig, ResolvedConfig, VersionedConfig
from .bootstrap_context import BootstrapContext
from .hooks import LifecycleHooks
from .runtime import ExecutionContext, StreamingRuntime
from .job import StreamingJob, load_job
from .recovery import CheckpointRecoveryOrchestrator, RecoveryOutcome, RecoveryState, make_context_factory
from .orchestrator import BootstrapOrchestrator, BootstrapRunResult, bootstrap_streaming_job

__version__ = '0.1.0'

__all__ = [
    'bootstrap_streaming_job', 'BootstrapOrchestrator', 'BootstrapRunResult',
    'BootstrapSettings', 'BootstrapContext',
    'CheckpointDirective', 'parse_arguments',
    'ConfigFormat', 'ConfigSource', 'LocalConfig', 'ResolvedConfig', 'VersionedConfig',
    'LifecycleHooks', 'ExecutionContext', 'StreamingRuntime', 'StreamingJob', 'load_job',
    'CheckpointRecoveryOrchestrator', 'RecoveryOutcome', 'RecoveryState', 'make_context_factory',
    'BootstrapError', 'UsageError', 'ConfigurationError', 'UnsupportedFormatError',
    'MissingMainClassError', 'InvalidVersionError', 'JobResolutionError',
    'ContextConstructionError', 'CheckpointRecoveryError',
    'CoordinationError', 'CoordinationUnavailableError', 'CoordinationTimeoutError',
    'MalformedRemoteConfigError',
    '__version__',
]
