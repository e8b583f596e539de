"""Session state machine: credential lifecycle and the fetch -> aggregate pipeline.

States: disconnected -> loading_genres -> ready | failed. Every entry into
loading_genres bumps a generation counter; a load only commits its result if
its generation is still current, so a slow fetch from an earlier connect can
never overwrite newer state. Disconnect and close bump the generation too.
"""
import logging
from typing import Awaitable, Callable, Iterable, List, Mapping, Optional, Sequence

from genremap.config import (
    SPOTIFY_CLIENT_ID,
    SPOTIFY_REDIRECT_URI,
    SPOTIFY_SCOPES,
    is_client_id_configured,
)
from genremap.core.credential_codec import (
    build_authorization_url,
    current_time_ms,
    parse_credential_from_fragment,
)
from genremap.core.credential_store import CredentialStore
from genremap.core.errors import (
    GENERIC_LOAD_ERROR,
    ExpiredCredential,
    GenreMapError,
    InvalidRedirect,
    MissingConfiguration,
)
from genremap.core.genre_aggregator import aggregate
from genremap.core.spotify_client import fetch_top_artists_async
from genremap.models.credential import Credential
from genremap.models.genre import GenreCount
from genremap.models.session import SessionState

logger = logging.getLogger(__name__)

Listener = Callable[[SessionState], None]
ArtistFetcher = Callable[[Credential], Awaitable[Sequence[Mapping]]]


class SessionController:
    def __init__(
        self,
        store: CredentialStore,
        fetch_artists: ArtistFetcher = fetch_top_artists_async,
        *,
        aggregate_fn: Callable[[Iterable[Mapping]], List[GenreCount]] = aggregate,
        client_id: Optional[str] = None,
        redirect_uri: str = SPOTIFY_REDIRECT_URI,
        scopes: Sequence[str] = tuple(SPOTIFY_SCOPES),
        now_fn: Callable[[], int] = current_time_ms,
    ) -> None:
        self._store = store
        self._fetch_artists = fetch_artists
        self._aggregate = aggregate_fn
        self._client_id = SPOTIFY_CLIENT_ID if client_id is None else client_id
        self._redirect_uri = redirect_uri
        self._scopes = tuple(scopes)
        self._now = now_fn
        self._state = SessionState.disconnected()
        self._listeners: List[Listener] = []
        self._generation = 0
        self._closed = False

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener with every new state. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: SessionState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Session listener failed")

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _parse_fragment(self, fragment: str) -> Credential:
        credential = parse_credential_from_fragment(fragment, self._now)
        if credential is None:
            raise InvalidRedirect()
        return credential

    async def start(self, fragment: Optional[str] = None) -> bool:
        """Run the one-time startup check.

        A redirect fragment with a token wins over any stored credential.
        Returns True if a fragment was given, meaning the caller should strip
        it from the visible URL whether or not it held a token.
        """
        if fragment and await self.accept_fragment(fragment):
            return True
        credential = self._store.load()
        if credential is not None:
            try:
                await self._load(credential)
            except ExpiredCredential:
                # evicted; the session is already disconnected
                pass
        return bool(fragment)

    def connect(self) -> str:
        """Return the authorization URL to navigate to.

        Raises MissingConfiguration when no usable client ID is set, so no
        doomed request reaches Spotify.
        """
        if not is_client_id_configured(self._client_id):
            raise MissingConfiguration()
        return build_authorization_url(self._client_id, self._redirect_uri, self._scopes)

    async def accept_fragment(self, fragment: str) -> bool:
        """Accept a '#access_token=...' redirect fragment, stamping expiry on our clock.

        Returns False (and changes nothing) when the fragment holds no token.
        """
        try:
            credential = self._parse_fragment(fragment)
        except InvalidRedirect as e:
            logger.info("Redirect ignored: %s", e.message)
            return False
        await self.accept_credential(credential)
        return True

    async def accept_credential(self, credential: Credential) -> None:
        """Persist a freshly parsed credential and load genres with it."""
        if self._closed:
            return
        self._store.save(credential)
        try:
            await self._load(credential)
        except ExpiredCredential:
            # evicted; the session is already disconnected
            return

    async def reload(self) -> None:
        """Load genres again with the current credential (retry after failure).

        Raises ExpiredCredential if the credential expired meanwhile; the
        session is then already disconnected.
        """
        credential = self._state.credential
        if credential is None or self._closed:
            return
        await self._load(credential)

    def disconnect(self) -> None:
        """Forget the credential and any results; supersedes an in-flight load."""
        self._next_generation()
        self._store.clear()
        self._set_state(SessionState.disconnected())

    def close(self) -> None:
        """Teardown: pending loads are discarded and listeners dropped."""
        self._next_generation()
        self._closed = True
        self._listeners.clear()

    async def _load(self, credential: Credential) -> None:
        generation = self._next_generation()
        if not credential.is_valid(self._now()):
            logger.info("Credential expired before load, disconnecting")
            self._store.clear()
            self._set_state(SessionState.disconnected())
            raise ExpiredCredential()

        self._set_state(SessionState.loading(credential))
        try:
            artists = await self._fetch_artists(credential)
            table = self._aggregate(artists)
        except GenreMapError as e:
            message = e.message
            table = None
        except Exception as e:
            logger.warning("Genre load failed unexpectedly: %s", e)
            message = GENERIC_LOAD_ERROR
            table = None

        if generation != self._generation:
            logger.debug("Discarding stale load (generation %d, current %d)", generation, self._generation)
            return
        if table is None:
            logger.warning("Genre load failed: %s", message)
            self._set_state(SessionState.failed(credential, message))
            return
        logger.info("Genre table ready (%d genres)", len(table))
        self._set_state(SessionState.ready(credential, table))
