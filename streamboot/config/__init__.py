from .models import ConfigFormat, ConfigSource, LocalConfig, ResolvedConfig, VersionedConfig
from .formats import classify_path, parse_properties, parse_yaml, sniff_format
from .loader import LocalConfigLoader
from .identity import compute_identity, require_main_class
from .reconciler import VersionReconciler, parse_version
from .remote import RemoteConfigFetcher
from .debug import DebugModeResolver

__all__ = [
    'ConfigFormat', 'ConfigSource', 'LocalConfig', 'ResolvedConfig', 'VersionedConfig',
    'classify_path', 'parse_properties', 'parse_yaml', 'sniff_format',
    'LocalConfigLoader', 'compute_identity', 'require_main_class',
    'VersionReconciler', 'parse_version', 'RemoteConfigFetcher', 'DebugModeResolver',
]
