from __future__ import annotations
import logging
from typing import Callable, Optional, Protocol, runtime_checkable

import httpx

from streamboot.exceptions import CoordinationUnavailableError

logger = logging.getLogger(__name__)

HTTP_SCHEMES = ('http://', 'https://')
ZOOKEEPER_SCHEME = 'zk://'


@runtime_checkable
class CoordinationStore(Protocol):
    """
    Minimal view of the coordination store.

    get() returns None when the node does not exist. Connection problems
    raise CoordinationUnavailableError (or CoordinationTimeoutError).
    """

    def get(self, path: str) -> Optional[str]: ...

    def put(self, path: str, value: str) -> None: ...

    def delete(self, path: str) -> None: ...

    def close(self) -> None: ...


StoreOpener = Callable[[str, float], CoordinationStore]


def open_coordination_store(endpoint: str, timeout: float) -> CoordinationStore:
    """Pick a backend from the endpoint: http(s) URLs use the KV gateway, anything else ZooKeeper."""
    endpoint = endpoint.strip()
    try:
        if endpoint.startswith(HTTP_SCHEMES):
            from streamboot.coordination.http_store import HttpCoordinationStore
            logger.debug(f'Using HTTP coordination store at {endpoint}')
            return HttpCoordinationStore(endpoint, timeout=timeout)

        from streamboot.coordination.zookeeper import ZooKeeperCoordinationStore
        hosts = endpoint[len(ZOOKEEPER_SCHEME):] if endpoint.startswith(ZOOKEEPER_SCHEME) else endpoint
        logger.debug(f'Using ZooKeeper coordination store at {hosts}')
        return ZooKeeperCoordinationStore(hosts, timeout=timeout)
    except (ValueError, httpx.InvalidURL) as e:
        # Client constructors reject bad hosts or ports before any connection is made
        raise CoordinationUnavailableError(f"Invalid coordination endpoint '{endpoint}': {e}") from e
