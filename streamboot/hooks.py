from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict

from streamboot.runtime import ExecutionContext


def _noop(*_args: Any) -> None:
    return None


@dataclass(frozen=True)
class LifecycleHooks:
    """
    User extension points around context construction and shutdown.

    Supply only the callbacks you need; the rest are no-ops. Exceptions
    raised here are not caught by the bootstrap.

    configure:       receives a mutable copy of the resolved settings before they are frozen
    handle:          wires the job's processing onto a freshly created context
    before_started:  context built, not yet started
    after_started:   context started, heartbeat running
    before_stop:     context terminated, heartbeat stopped
    """
    configure: Callable[[Dict[str, str]], None] = _noop
    handle: Callable[[ExecutionContext], None] = _noop
    before_started: Callable[[ExecutionContext], None] = _noop
    after_started: Callable[[ExecutionContext], None] = _noop
    before_stop: Callable[[ExecutionContext], None] = _noop
