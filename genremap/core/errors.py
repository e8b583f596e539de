"""Error kinds raised by the core and resolved by the session controller."""

GENERIC_LOAD_ERROR = "Failed to load genres from Spotify."


class GenreMapError(Exception):
    """Base error; str(error) is safe to show to the user."""

    def __init__(self, message: str = GENERIC_LOAD_ERROR) -> None:
        super().__init__(message)
        self.message = message


class InvalidRedirect(GenreMapError):
    """Fragment present but carries no usable access token."""

    def __init__(self, message: str = "Redirect did not contain an access token.") -> None:
        super().__init__(message)


class ExpiredCredential(GenreMapError):
    def __init__(self, message: str = "Spotify session expired. Connect again.") -> None:
        super().__init__(message)


class RemoteApiError(GenreMapError):
    """Non-success HTTP status from the Spotify Web API."""

    def __init__(self, status: int, message: str | None = None) -> None:
        super().__init__(message or f"Spotify API error ({status})")
        self.status = status


class NetworkFailure(GenreMapError):
    """Transport-level failure (DNS, connection reset, timeout)."""


class MissingConfiguration(GenreMapError):
    def __init__(
        self,
        message: str = "SPOTIFY_CLIENT_ID not set. Add your Spotify app client ID to .env before connecting.",
    ) -> None:
        super().__init__(message)
