from __future__ import annotations
import hashlib
from typing import Mapping, Optional

from streamboot.constants import APP_NAME_KEY, MAIN_CLASS_KEY
from streamboot.exceptions import MissingMainClassError


def require_main_class(data: Mapping[str, str]) -> str:
    main_class = (data.get(MAIN_CLASS_KEY) or '').strip()
    if not main_class:
        raise MissingMainClassError(f'{MAIN_CLASS_KEY} must not be empty', phase='local_config')
    return main_class


def app_name(data: Mapping[str, str]) -> str:
    """The configured app name, falling back to the main class."""
    name = (data.get(APP_NAME_KEY) or '').strip()
    return name or require_main_class(data)


def compute_identity(data: Mapping[str, str]) -> str:
    """
    Coordination-store lookup key for this job.

    md5 hex of the app name. It is only an address, never a credential.
    """
    return hashlib.md5(app_name(data).encode('utf-8'), usedforsecurity=False).hexdigest()


def describe(data: Mapping[str, str]) -> Optional[str]:
    """App name or main class for display; None when the mapping has neither."""
    for key in (APP_NAME_KEY, MAIN_CLASS_KEY):
        value = (data.get(key) or '').strip()
        if value:
            return value
    return None
