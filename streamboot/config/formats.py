"""
Config format classification and parsing.

Two pure classifiers decide how text is parsed: classify_path() looks at a
file's extension, sniff_format() inspects an untyped blob fetched from the
coordination store. Both return a ConfigFormat so parsing never depends on
where the text came from.
"""
from __future__ import annotations
import logging
import re
from typing import Any, Dict, List, Mapping

import yaml

from streamboot.config.models import ConfigFormat
from streamboot.exceptions import ConfigurationError, UnsupportedFormatError

logger = logging.getLogger(__name__)

_EXTENSIONS = {
    'properties': ConfigFormat.PROPERTIES,
    'yml': ConfigFormat.YAML,
    'yaml': ConfigFormat.YAML,
}

# A single `key=value` line anywhere marks the blob as properties.
PROPERTIES_LINE_PATTERN = re.compile(r'^\s*[\w.\-]+\s*=', re.MULTILINE)

_ESCAPES = {'t': '\t', 'n': '\n', 'r': '\r', 'f': '\f'}


def classify_path(path: str) -> ConfigFormat:
    extension = path.rsplit('.', 1)[-1] if '.' in path else ''
    try:
        return _EXTENSIONS[extension.lower()]
    except KeyError:
        raise UnsupportedFormatError(path, extension) from None


def sniff_format(text: str) -> ConfigFormat:
    if PROPERTIES_LINE_PATTERN.search(text):
        return ConfigFormat.PROPERTIES
    return ConfigFormat.YAML


def parse(text: str, fmt: ConfigFormat) -> Dict[str, str]:
    if fmt is ConfigFormat.PROPERTIES:
        return parse_properties(text)
    return parse_yaml(text)


def _logical_lines(text: str) -> List[str]:
    lines: List[str] = []
    pending = ''
    for raw in text.splitlines():
        line = raw.lstrip() if pending else raw
        if not pending and line.lstrip()[:1] in ('#', '!'):
            continue
        trailing = len(line) - len(line.rstrip('\\'))
        if trailing % 2 == 1:
            pending += line[:-1]
            continue
        lines.append(pending + line)
        pending = ''
    if pending:
        lines.append(pending)
    return lines


def _unescape(s: str) -> str:
    out = []
    i = 0
    while i < len(s):
        ch = s[i]
        if ch == '\\' and i + 1 < len(s):
            nxt = s[i + 1]
            if nxt == 'u' and re.fullmatch(r'[0-9a-fA-F]{4}', s[i + 2:i + 6]):
                out.append(chr(int(s[i + 2:i + 6], 16)))
                i += 6
                continue
            out.append(_ESCAPES.get(nxt, nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return ''.join(out)


def _split_key_value(line: str) -> tuple[str, str]:
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == '\\':
            i += 2
            continue
        if ch in '=:' or ch.isspace():
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip()
    if rest[:1] in ('=', ':'):
        rest = rest[1:]
    return _unescape(key), _unescape(rest.strip())


def parse_properties(text: str) -> Dict[str, str]:
    """Parse java-style properties text into a flat mapping with trimmed values."""
    result: Dict[str, str] = {}
    for line in _logical_lines(text):
        stripped = line.strip()
        if not stripped:
            continue
        key, value = _split_key_value(stripped)
        if key:
            result[key] = value
    return result


def _stringify(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (list, tuple)):
        return ','.join(_stringify(v) for v in value)
    return str(value)


def _flatten(mapping: Mapping[Any, Any], prefix: str, out: Dict[str, str]) -> None:
    for key, value in mapping.items():
        full_key = f'{prefix}.{key}' if prefix else str(key)
        if isinstance(value, Mapping):
            _flatten(value, full_key, out)
        else:
            out[full_key] = _stringify(value)


def parse_yaml(text: str) -> Dict[str, str]:
    """Parse a YAML mapping; nested mappings become dotted keys."""
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f'Invalid YAML configuration: {e}') from e
    if document is None:
        return {}
    if not isinstance(document, Mapping):
        raise ConfigurationError(
            f'YAML configuration must be a mapping, got {type(document).__name__}'
        )
    result: Dict[str, str] = {}
    _flatten(document, '', result)
    return result


__all__ = [
    'classify_path', 'sniff_format', 'parse', 'parse_properties', 'parse_yaml',
    'PROPERTIES_LINE_PATTERN',
]
