from .base_phase import BootstrapPhase, PhaseRecord
from .argument_phase import ArgumentPhase
from .local_config_phase import LocalConfigPhase
from .remote_config_phase import RemoteConfigPhase
from .debug_mode_phase import DebugModePhase
from .configure_phase import ConfigurePhase

__all__ = [
    'BootstrapPhase', 'PhaseRecord',
    'ArgumentPhase', 'LocalConfigPhase', 'RemoteConfigPhase', 'DebugModePhase', 'ConfigurePhase',
]
