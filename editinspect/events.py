from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

SURFACE_CLOSED = "surface_closed"


class Disposable:
    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback: Callable[[], None] | None = callback

    @property
    def disposed(self) -> bool:
        return self._callback is None

    def dispose(self) -> None:
        callback, self._callback = self._callback, None
        if callback is not None:
            callback()


def dispose_all(disposables: list[Disposable]) -> None:
    while disposables:
        disposables.pop().dispose()


class EventEmitter:
    """Named events with handler registration.

    ``on`` returns a Disposable that removes the handler again; owners keep
    these handles and release them when they go away.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Callable[..., Any]]] = {}

    def on(
        self,
        event: str,
        handler: Callable[..., Any],
        disposables: list[Disposable] | None = None,
    ) -> Disposable:
        self._handlers.setdefault(event, []).append(handler)

        def _remove() -> None:
            handlers = self._handlers.get(event, [])
            if handler in handlers:
                handlers.remove(handler)
            if not handlers:
                self._handlers.pop(event, None)

        disposable = Disposable(_remove)
        if disposables is not None:
            disposables.append(disposable)
        return disposable

    def fire(self, event: str, *args: Any) -> None:
        handlers = list(self._handlers.get(event, []))
        logger.debug("event fired", event_name=event, handlers=len(handlers))
        for handler in handlers:
            handler(*args)

    def handler_count(self, event: str) -> int:
        return len(self._handlers.get(event, []))
