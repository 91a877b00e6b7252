from __future__ import annotations
import logging
from typing import Optional

import httpx

from streamboot.exceptions import CoordinationTimeoutError, CoordinationUnavailableError

logger = logging.getLogger(__name__)


class HttpCoordinationStore:
    """
    Coordination store reached through an HTTP key/value gateway.

    Node paths map directly onto URL paths under base_url: GET reads a
    node (404 means absent), PUT writes one, DELETE removes it.
    """

    def __init__(self, base_url: str, timeout: float = 10.0, client: Optional[httpx.Client] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._client = client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def _send(self, method: str, path: str, content: Optional[str] = None) -> httpx.Response:
        try:
            return self._client.request(method, path, content=content)
        except httpx.TimeoutException as e:
            raise CoordinationTimeoutError(f'Timed out after {self.timeout}s on {method} {self.base_url}{path}') from e
        except httpx.HTTPError as e:
            raise CoordinationUnavailableError(f'{method} {self.base_url}{path} failed: {e}') from e

    def _check(self, response: httpx.Response) -> None:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CoordinationUnavailableError(
                f'Coordination gateway answered {response.status_code} for {response.request.url}'
            ) from e

    def get(self, path: str) -> Optional[str]:
        response = self._send('GET', path)
        if response.status_code == 404:
            return None
        self._check(response)
        return response.text

    def put(self, path: str, value: str) -> None:
        self._check(self._send('PUT', path, content=value))

    def delete(self, path: str) -> None:
        response = self._send('DELETE', path)
        if response.status_code != 404:
            self._check(response)

    def close(self) -> None:
        self._client.close()
