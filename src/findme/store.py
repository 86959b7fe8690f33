"""Observable holder for the screen state."""

from collections.abc import Callable

from structlog import get_logger

from findme.models import UiState

logger = get_logger()

Listener = Callable[[UiState], None]


class UiStateStore:
    """Owns the current UiState and tells subscribers about every change."""

    def __init__(self, initial: UiState):
        self._state = initial
        self._listeners: list[Listener] = []

    @property
    def state(self) -> UiState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for new snapshots.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, **changes) -> UiState:
        """Replace the snapshot with one carrying the given changes."""
        self._state = self._state.model_copy(update=changes)
        logger.debug("State updated", fields=sorted(changes))
        for listener in list(self._listeners):
            listener(self._state)
        return self._state
