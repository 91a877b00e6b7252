from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from streamboot.args import CheckpointDirective
from streamboot.config.identity import describe
from streamboot.config.models import LocalConfig, ResolvedConfig, VersionedConfig
from streamboot.settings import BootstrapSettings


@dataclass(frozen=True)
class BootstrapContext:
    """
    State threaded through the bootstrap phases.

    Each phase receives a context and returns a new one via evolve(); no
    phase mutates shared state.
    """
    run_id: str
    argv: Tuple[str, ...]
    settings: BootstrapSettings
    directive: Optional[CheckpointDirective] = None
    config_path: Optional[str] = None
    debug: bool = False
    local: Optional[LocalConfig] = None
    identity: Optional[str] = None
    remote: Optional[VersionedConfig] = None
    resolved: Optional[ResolvedConfig] = None
    frozen: bool = False

    def evolve(self, **changes) -> 'BootstrapContext':
        return replace(self, **changes)

    @property
    def app_name(self) -> Optional[str]:
        """Name of the job as resolved, falling back to the local file and then the identity."""
        for config in (self.resolved, self.local):
            name = describe(config.data) if config is not None else None
            if name:
                return name
        return self.identity
