"""Session state exposed to the presentation layer."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from genremap.models.credential import Credential
from genremap.models.genre import GenreCount


class SessionStatus(str, Enum):
    DISCONNECTED = "disconnected"
    LOADING_GENRES = "loading_genres"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionState:
    """Snapshot of the session. credential is None only when disconnected."""
    status: SessionStatus
    credential: Optional[Credential] = None
    genres: Tuple[GenreCount, ...] = field(default_factory=tuple)
    error: str = ""

    @classmethod
    def disconnected(cls) -> "SessionState":
        return cls(status=SessionStatus.DISCONNECTED)

    @classmethod
    def loading(cls, credential: Credential) -> "SessionState":
        return cls(status=SessionStatus.LOADING_GENRES, credential=credential)

    @classmethod
    def ready(cls, credential: Credential, genres) -> "SessionState":
        return cls(status=SessionStatus.READY, credential=credential, genres=tuple(genres))

    @classmethod
    def failed(cls, credential: Credential, message: str) -> "SessionState":
        return cls(status=SessionStatus.FAILED, credential=credential, error=message)

    @property
    def connected(self) -> bool:
        return self.credential is not None

    def to_dict(self) -> dict:
        """JSON-friendly view. The access token is never included."""
        return {
            "status": self.status.value,
            "connected": self.connected,
            "expires_at": self.credential.expires_at if self.credential else None,
            "genres": [{"genre": g.genre, "count": g.count} for g in self.genres],
            "error": self.error,
        }
