"""Persist the current credential under a single storage key; evict on expiry."""
import json
import logging
import math
from typing import Callable, Optional

from genremap.config import TOKEN_STORAGE_KEY
from genremap.core.credential_codec import current_time_ms
from genremap.core.storage import KeyValueStorage
from genremap.models.credential import Credential

logger = logging.getLogger(__name__)


def _decode(raw: str) -> Optional[Credential]:
    """Return Credential from the stored JSON record, or None if malformed."""
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return None
    if not isinstance(data, dict):
        return None
    access_token = data.get("accessToken")
    expires_at = data.get("expiresAt")
    if not isinstance(access_token, str) or not access_token:
        return None
    if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
        return None
    if not expires_at or not math.isfinite(expires_at):
        return None
    return Credential(access_token=access_token, expires_at=int(expires_at))


class CredentialStore:
    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = TOKEN_STORAGE_KEY,
        now_fn: Callable[[], int] = current_time_ms,
    ) -> None:
        self._storage = storage
        self._key = key
        self._now = now_fn

    def load(self) -> Optional[Credential]:
        """Return the stored credential if present and unexpired.

        Malformed or expired records are deleted as a side effect.
        """
        raw = self._storage.get(self._key)
        if not raw:
            return None
        credential = _decode(raw)
        if credential is None:
            logger.warning("Stored credential malformed, removing")
            self._storage.remove(self._key)
            return None
        if not credential.is_valid(self._now()):
            logger.info("Stored credential expired, removing")
            self._storage.remove(self._key)
            return None
        return credential

    def save(self, credential: Credential) -> None:
        self._storage.set(self._key, json.dumps(credential.to_record()))
        logger.info("Credential saved (expires_at=%d)", credential.expires_at)

    def clear(self) -> None:
        self._storage.remove(self._key)
        logger.info("Credential cleared")
