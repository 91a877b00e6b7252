from __future__ import annotations
import json
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Protocol, runtime_checkable

from streamboot.bootstrap_context import BootstrapContext
from streamboot.constants import COORDINATION_ENDPOINT_KEY
from streamboot.coordination.store import CoordinationStore, StoreOpener, open_coordination_store
from streamboot.exceptions import CoordinationError
from streamboot.runtime import ExecutionContext

logger = logging.getLogger(__name__)


@runtime_checkable
class Heartbeat(Protocol):

    def start(self) -> None: ...

    def stop(self) -> None: ...


HeartbeatFactory = Callable[[ExecutionContext, BootstrapContext], Heartbeat]


class HeartbeatReporter:
    """
    Publishes a liveness node for the running job.

    start() spawns one daemon thread that rewrites
    {heartbeat_path_prefix}/{identity} every heartbeat_interval_seconds;
    stop() ends the thread and removes the node. Without a coordination
    endpoint the reporter only logs. Publish failures are logged, never
    raised into the job.
    """

    def __init__(self, context: ExecutionContext, bootstrap: BootstrapContext,
                 store_opener: Optional[StoreOpener] = None):
        self.context = context
        self.bootstrap = bootstrap
        self.settings = bootstrap.settings
        self.path = f'{self.settings.heartbeat_path_prefix}/{bootstrap.identity}'
        self._open_store = store_opener or open_coordination_store
        self._store: Optional[CoordinationStore] = None
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.beats = 0

    @property
    def endpoint(self) -> Optional[str]:
        if self.bootstrap.resolved is None:
            return None
        return self.bootstrap.resolved.get(COORDINATION_ENDPOINT_KEY) or None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def payload(self) -> Dict[str, Any]:
        resolved = self.bootstrap.resolved
        return {
            'identity': self.bootstrap.identity,
            'app_name': self.bootstrap.app_name,
            'run_id': self.bootstrap.run_id,
            'conf_version': resolved.effective_version if resolved else None,
            'conf_source': resolved.winning_source.value if resolved else None,
            'debug': self.bootstrap.debug,
            'timestamp': datetime.now(timezone.utc).isoformat(),
        }

    def start(self) -> None:
        if self.running:
            logger.warning('Heartbeat already running')
            return
        endpoint = self.endpoint
        if endpoint and not self.bootstrap.debug:
            try:
                self._store = self._open_store(endpoint, self.settings.remote_timeout_seconds)
            except CoordinationError as e:
                logger.warning(f'Heartbeat store unavailable, reporting to log only: {e}')
                self._store = None
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name=f'heartbeat-{self.bootstrap.identity}', daemon=True)
        self._thread.start()
        logger.info(f'Heartbeat started ({self.path}, every {self.settings.heartbeat_interval_seconds}s)')

    def stop(self) -> None:
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join(timeout=self.settings.heartbeat_interval_seconds + self.settings.remote_timeout_seconds)
        self._thread = None
        if self._store is not None:
            try:
                self._store.delete(self.path)
            except CoordinationError as e:
                logger.warning(f'Failed to remove heartbeat node {self.path}: {e}')
            finally:
                self._store.close()
                self._store = None
        logger.info(f'Heartbeat stopped after {self.beats} beats')

    def _run(self) -> None:
        while True:
            self._beat()
            if self._stop_event.wait(self.settings.heartbeat_interval_seconds):
                break

    def _beat(self) -> None:
        self.beats += 1
        try:
            body = json.dumps(self.payload(), sort_keys=True)
            if self._store is None:
                logger.debug(f'Heartbeat #{self.beats}: {body}')
                return
            self._store.put(self.path, body)
        except CoordinationError as e:
            logger.warning(f'Heartbeat #{self.beats} publish to {self.path} failed: {e}')
        except Exception as e:
            logger.warning(f'Heartbeat #{self.beats} failed: {e}', exc_info=True)


def default_heartbeat_factory(store_opener: Optional[StoreOpener] = None) -> HeartbeatFactory:
    def factory(context: ExecutionContext, bootstrap: BootstrapContext) -> Heartbeat:
        return HeartbeatReporter(context, bootstrap, store_opener=store_opener)
    return factory
