"""Shared page controller plumbing: results, observers and event dispatch."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]


@dataclass
class MutationResult:
    """Outcome of a create/update/delete/import/export action."""

    ok: bool
    action: str
    record_id: Optional[str] = None
    message: Optional[str] = None
    details: Any = None

    @property
    def cancelled(self) -> bool:
        return self.action == "cancelled"


class PageController:
    """
    Base class for page-level controllers.

    Subclasses fill ``handlers`` with event name -> callable. Views call
    ``dispatch`` for user actions and ``subscribe`` to be told which
    section of the page needs redrawing.
    """

    def __init__(self) -> None:
        self.handlers: dict[str, Callable[..., Any]] = {}
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, section: str) -> None:
        for listener in list(self._listeners):
            listener(section)

    def dispatch(self, event: str, *args: Any) -> Any:
        """Run the handler registered for an event (KeyError if unknown)."""
        handler = self.handlers.get(event)
        if handler is None:
            raise KeyError(f"No handler for event: {event}")
        logger.debug("Dispatching %s %s", event, args)
        return handler(*args)

    def teardown(self) -> None:
        self._listeners.clear()
