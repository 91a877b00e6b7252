"""Ports onto the external streaming runtime."""
from __future__ import annotations
from typing import TYPE_CHECKING, Callable, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from streamboot.config.models import ResolvedConfig


@runtime_checkable
class ExecutionContext(Protocol):
    """Opaque long-running job handle owned by the streaming runtime."""

    def start(self) -> None: ...

    def await_termination(self) -> None: ...

    def stop(self) -> None: ...

    def checkpoint(self, directory: str) -> None: ...


@runtime_checkable
class StreamingRuntime(Protocol):

    def create_context(self, config: 'ResolvedConfig') -> ExecutionContext: ...

    def load_checkpoint(self, path: str) -> Optional[ExecutionContext]:
        """
        Restore a context from checkpoint data at `path`.

        Returns None when no checkpoint exists there yet; raises when the
        checkpoint exists but cannot be read.
        """
        ...


ContextFactory = Callable[['ResolvedConfig'], ExecutionContext]
