from __future__ import annotations
import logging
from typing import Optional

from kazoo.client import KazooClient
from kazoo.exceptions import KazooException, NodeExistsError, NoNodeError
from kazoo.handlers.threading import KazooTimeoutError

from streamboot.exceptions import (
    CoordinationTimeoutError,
    CoordinationUnavailableError,
    MalformedRemoteConfigError,
)

logger = logging.getLogger(__name__)


class ZooKeeperCoordinationStore:
    """ZooKeeper-backed store; every call is bounded by `timeout` seconds."""

    def __init__(self, hosts: str, timeout: float = 10.0, client: Optional[KazooClient] = None):
        self.hosts = hosts
        self.timeout = timeout
        self._client = client or KazooClient(hosts=hosts, timeout=timeout)
        self._started = False

    def _ensure_started(self) -> KazooClient:
        if not self._started:
            try:
                self._client.start(timeout=self.timeout)
            except KazooTimeoutError as e:
                raise CoordinationTimeoutError(
                    f'Timed out after {self.timeout}s connecting to ZooKeeper at {self.hosts}'
                ) from e
            except KazooException as e:
                raise CoordinationUnavailableError(f'Cannot connect to ZooKeeper at {self.hosts}: {e}') from e
            self._started = True
        return self._client

    def get(self, path: str) -> Optional[str]:
        client = self._ensure_started()
        try:
            data, _stat = client.get_async(path).get(timeout=self.timeout)
        except NoNodeError:
            return None
        except KazooTimeoutError as e:
            raise CoordinationTimeoutError(f'Timed out after {self.timeout}s reading {path}') from e
        except KazooException as e:
            raise CoordinationUnavailableError(f'ZooKeeper read of {path} failed: {e}') from e
        if data is None:
            return None
        try:
            return data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise MalformedRemoteConfigError(f'Node {path} does not hold UTF-8 text') from e

    def put(self, path: str, value: str) -> None:
        client = self._ensure_started()
        payload = value.encode('utf-8')
        try:
            try:
                client.create(path, payload, ephemeral=True, makepath=True)
            except NodeExistsError:
                client.set(path, payload)
        except KazooTimeoutError as e:
            raise CoordinationTimeoutError(f'Timed out after {self.timeout}s writing {path}') from e
        except KazooException as e:
            raise CoordinationUnavailableError(f'ZooKeeper write of {path} failed: {e}') from e

    def delete(self, path: str) -> None:
        client = self._ensure_started()
        try:
            client.delete(path)
        except NoNodeError:
            pass
        except KazooTimeoutError as e:
            raise CoordinationTimeoutError(f'Timed out after {self.timeout}s deleting {path}') from e
        except KazooException as e:
            raise CoordinationUnavailableError(f'ZooKeeper delete of {path} failed: {e}') from e

    def close(self) -> None:
        if self._started:
            try:
                self._client.stop()
            finally:
                self._client.close()
                self._started = False
