"""Shared application state (injected into routes)."""
import logging

from genremap.config import TOKEN_STORAGE_PATH
from genremap.core.credential_store import CredentialStore
from genremap.core.session_controller import SessionController
from genremap.core.storage import JsonFileStorage
from genremap.models.session import SessionState

logger = logging.getLogger(__name__)


def _log_transition(state: SessionState) -> None:
    logger.info("Session: %s", state.status.value)


class AppState:
    def __init__(self, controller: SessionController | None = None) -> None:
        self._controller = controller
        self._unsubscribe = None

    @property
    def controller(self) -> SessionController:
        if self._controller is None:
            store = CredentialStore(JsonFileStorage(TOKEN_STORAGE_PATH))
            self._controller = SessionController(store)
        if self._unsubscribe is None:
            self._unsubscribe = self._controller.subscribe(_log_transition)
        return self._controller

    def shutdown(self) -> None:
        if self._controller is None:
            return
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._controller.close()
        self._controller = None


_state = AppState()


def get_state() -> AppState:
    return _state
