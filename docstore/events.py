from __future__ import annotations

from typing import Any, Callable

Listener = Callable[[dict[str, Any]], Any]

DOCUMENT_INSERTED = "documentInserted"
DOCUMENT_UPDATED = "documentUpdated"
DOCUMENT_DELETED = "documentDeleted"


class EventBus:
    """
    Synchronous listener registry.

    Listeners run in registration order on the emitting thread. An exception raised
    by a listener stops the remaining listeners and propagates to the caller of `emit`.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def on(self, event: str, listener: Listener) -> None:
        self._listeners.setdefault(event, []).append(listener)

    def emit(self, event: str, payload: dict[str, Any]) -> None:
        for listener in list(self._listeners.get(event, ())):
            listener(payload)
