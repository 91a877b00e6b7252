# streamboot/__main__.py
from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from streamboot.args import USAGE
from streamboot.exceptions import BootstrapError, UsageError
from streamboot.orchestrator import BootstrapOrchestrator
from streamboot.settings import ENV_LOG_LEVEL, BootstrapSettings

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def main(argv: Optional[Sequence[str]] = None, settings: Optional[BootstrapSettings] = None, **orchestrator_kwargs) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    try:
        settings = settings or BootstrapSettings.from_env()
        BootstrapOrchestrator(settings, **orchestrator_kwargs).run(argv)
    except UsageError as e:
        print(f'[streamboot] {e}', file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1
    except BootstrapError as e:
        logger.debug('Bootstrap failed', exc_info=True)
        print(f'[streamboot] {e}', file=sys.stderr)
        return 1
    return 0


def cli_entry() -> None:
    load_dotenv()
    level = os.environ.get(ENV_LOG_LEVEL, 'INFO').strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        level = 'INFO'
    logging.basicConfig(level=level, format=LOG_FORMAT)
    sys.exit(main())


if __name__ == '__main__':
    cli_entry()
