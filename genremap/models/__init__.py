"""Data models for credentials, genre tables, and session state."""
from genremap.models.credential import Credential
from genremap.models.genre import GenreCount
from genremap.models.session import SessionState, SessionStatus

__all__ = [
    "Credential",
    "GenreCount",
    "SessionState",
    "SessionStatus",
]
