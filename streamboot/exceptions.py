"""
Exception classes for the streamboot bootstrap.

Everything deriving from BootstrapError is fatal at launch: the CLI reports
it on stderr and exits non-zero. CoordinationError subclasses are the
exception: the remote fetcher catches them and degrades to local-only
configuration.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from streamboot.recovery import RecoveryState


class BootstrapError(RuntimeError):
    """
    Base exception for all bootstrap-related errors.

    Raised when a failure during launch prevents the execution context
    from being built or started.
    """

    def __init__(self, message: str, phase: Optional[str] = None):
        super().__init__(message)
        self.phase = phase

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.phase:
            return f"{base_msg} (phase={self.phase})"
        return base_msg


class UsageError(BootstrapError):
    """Raised when the command line holds unrecognized or malformed flags."""

    def __init__(self, message: str, tokens: Sequence[str] = ()):
        super().__init__(message, phase="arguments")
        self.tokens = list(tokens)


class ConfigurationError(BootstrapError):
    """
    Raised when configuration loading or validation fails.

    This includes a missing config path, an unreadable file, or a document
    that does not describe a flat key/value mapping.
    """
    pass


class UnsupportedFormatError(ConfigurationError):
    """Raised when a config file extension is neither properties nor yml/yaml."""

    def __init__(self, path: str, extension: str):
        super().__init__(
            f"Unsupported config format '{extension}' for {path}: must be properties or yml",
            phase="local_config",
        )
        self.path = path
        self.extension = extension


class MissingMainClassError(ConfigurationError):
    """Raised when the main-class key is absent or empty."""
    pass


class InvalidVersionError(ConfigurationError):
    """Raised when conf-version is missing or not an integer."""

    def __init__(self, message: str, value: Optional[str] = None, source: Optional[str] = None):
        super().__init__(message)
        self.value = value
        self.source = source


class JobResolutionError(BootstrapError):
    """Raised when main-class cannot be imported as a streaming job."""
    pass


class ContextConstructionError(BootstrapError):
    """Raised when a second execution context construction is attempted."""
    pass


class CheckpointRecoveryError(BootstrapError):
    """
    Raised when restoring from a checkpoint fails and fresh creation is not allowed.

    The orchestrator reaches its FAILED state and no execution context
    exists. The original restore exception is chained as __cause__.
    """

    def __init__(self, message: str, checkpoint_path: str, state: 'RecoveryState',
                 transitions: Optional[List['RecoveryState']] = None):
        super().__init__(message, phase="recovery")
        self.checkpoint_path = checkpoint_path
        self.state = state
        self.transitions = list(transitions or [])

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.__cause__ is not None:
            return f"{base_msg}\nCaused by: {type(self.__cause__).__name__}: {self.__cause__}"
        return base_msg


class CoordinationError(Exception):
    """Base class for coordination-store failures that degrade to local config."""
    pass


class CoordinationUnavailableError(CoordinationError):
    """The coordination store could not be reached or returned an error."""
    pass


class CoordinationTimeoutError(CoordinationUnavailableError):
    """The coordination store did not answer within the configured timeout."""
    pass


class MalformedRemoteConfigError(CoordinationError):
    """The coordination store returned a blob that is not a usable configuration."""
    pass


__all__ = [
    'BootstrapError', 'UsageError', 'ConfigurationError', 'UnsupportedFormatError',
    'MissingMainClassError', 'InvalidVersionError', 'JobResolutionError',
    'ContextConstructionError', 'CheckpointRecoveryError',
    'CoordinationError', 'CoordinationUnavailableError', 'CoordinationTimeoutError',
    'MalformedRemoteConfigError',
]
