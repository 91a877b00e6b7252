from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional


def _freeze(data: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(data))


class ConfigFormat(Enum):
    PROPERTIES = 'properties'
    YAML = 'yaml'


class ConfigSource(Enum):
    LOCAL = 'local'
    REMOTE = 'remote'


@dataclass(frozen=True)
class LocalConfig:
    """A config file as loaded from disk; raw_text is kept verbatim for auditing."""
    path: str
    format: ConfigFormat
    data: Mapping[str, str]
    raw_text: str

    def __post_init__(self) -> None:
        object.__setattr__(self, 'data', _freeze(self.data))


@dataclass(frozen=True)
class VersionedConfig:
    version: int
    data: Mapping[str, str]
    source: ConfigSource

    def __post_init__(self) -> None:
        object.__setattr__(self, 'data', _freeze(self.data))


@dataclass(frozen=True)
class ResolvedConfig:
    """
    The final configuration handed to the context factory.

    effective_version is always the version of winning_source. Instances are
    immutable; with_entries() and with_debug() return new ones.
    """
    data: Mapping[str, str]
    winning_source: ConfigSource
    effective_version: int
    local_version: int
    remote_version: Optional[int] = None
    debug: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, 'data', _freeze(self.data))

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> str:
        return self.data[key]

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def as_dict(self) -> Dict[str, str]:
        return dict(self.data)

    def with_entries(self, entries: Mapping[str, str]) -> 'ResolvedConfig':
        merged = dict(self.data)
        merged.update(entries)
        return replace(self, data=merged)

    def with_data(self, data: Mapping[str, str]) -> 'ResolvedConfig':
        return replace(self, data=dict(data))

    def with_debug(self, debug: bool) -> 'ResolvedConfig':
        return replace(self, debug=debug)


__all__ = ['ConfigFormat', 'ConfigSource', 'LocalConfig', 'VersionedConfig', 'ResolvedConfig']
