from __future__ import annotations
import logging
from pathlib import Path

from streamboot.config.formats import classify_path, parse
from streamboot.config.models import LocalConfig
from streamboot.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class LocalConfigLoader:
    """Loads the job's config file; the extension picks the parser."""

    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    def load(self, path: str) -> LocalConfig:
        fmt = classify_path(path)
        file_path = Path(path)
        if not file_path.is_file():
            raise ConfigurationError(f'Config file not found: {path}', phase='local_config')

        try:
            raw_text = file_path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f'Failed to read config file {path}: {e}', phase='local_config') from e

        data = parse(raw_text, fmt)
        logger.info(f'Loaded {fmt.value} config from {path} ({len(data)} keys)')
        logger.debug(f'Config keys: {sorted(data)}')
        return LocalConfig(path=path, format=fmt, data=data, raw_text=raw_text)
