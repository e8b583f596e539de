"""Core: credential codec and store, Spotify client, genre aggregation, session."""
from genremap.core.credential_store import CredentialStore
from genremap.core.session_controller import SessionController

__all__ = ["CredentialStore", "SessionController"]
