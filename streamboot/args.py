# streamboot/args.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Sequence

from streamboot.exceptions import UsageError

logger = logging.getLogger(__name__)

CHECKPOINT_PATH_FLAG = '--checkpointPath'
CREATE_ON_ERROR_FLAG = '--createOnError'

USAGE = """\
Usage: streamboot [options]

 Options are:
   --checkpointPath <checkpoint directory>
   --createOnError <recreate the context if restoring from the checkpoint fails: true|false>
"""


@dataclass(frozen=True)
class CheckpointDirective:
    """Where to recover from, and whether a failed restore may fall back to a fresh context."""
    path: str = ''
    create_on_error: bool = True

    @property
    def restore_requested(self) -> bool:
        return bool(self.path)


def _parse_bool(flag: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered == 'true':
        return True
    if lowered == 'false':
        return False
    raise UsageError(f"Invalid value for {flag}: '{value}' (expected true or false)", [flag, value])


def parse_arguments(argv: Sequence[str]) -> CheckpointDirective:
    """
    Consume flag/value pairs from the front of argv.

    Anything that is not a recognized flag followed by a value aborts the
    whole parse; there is no partial recovery.
    """
    path = ''
    create_on_error = True
    remaining = list(argv)
    while remaining:
        flag = remaining[0]
        if flag in (CHECKPOINT_PATH_FLAG, CREATE_ON_ERROR_FLAG) and len(remaining) >= 2:
            value = remaining[1]
            if flag == CHECKPOINT_PATH_FLAG:
                path = value
            else:
                create_on_error = _parse_bool(flag, value)
            remaining = remaining[2:]
            continue
        raise UsageError(f"Unrecognized options: {' '.join(remaining)}", remaining)

    directive = CheckpointDirective(path=path, create_on_error=create_on_error)
    logger.debug(f'Parsed checkpoint directive: {directive}')
    return directive
