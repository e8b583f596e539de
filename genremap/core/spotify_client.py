"""Spotify Web API access via Spotipy using a bearer credential."""
import logging
from typing import Any, Callable, List

import requests
from fastapi.concurrency import run_in_threadpool
from spotipy import Spotify, SpotifyException

from genremap.config import (
    SPOTIFY_REQUEST_TIMEOUT_SEC,
    TOP_ARTISTS_LIMIT,
    TOP_ARTISTS_TIME_RANGE,
)
from genremap.core.errors import NetworkFailure, RemoteApiError
from genremap.models.credential import Credential

logger = logging.getLogger(__name__)


def make_spotify(access_token: str) -> Spotify:
    """Return a Spotipy client bound to access_token, with retries disabled.

    A plain requests.Session skips Spotipy's urllib3 retry adapter, so a 5xx
    reaches raise_for_status with its real status instead of a 429 RetryError.
    """
    return Spotify(
        auth=access_token,
        requests_session=requests.Session(),
        requests_timeout=SPOTIFY_REQUEST_TIMEOUT_SEC,
    )


def fetch_top_artists(
    credential: Credential,
    client_factory: Callable[[str], Any] = make_spotify,
) -> List[dict]:
    """Return the user's top artists (up to 50, medium term) as raw artist dicts.

    Raises RemoteApiError with the HTTP status on a non-success response and
    NetworkFailure when the request never got a response. No retry.
    """
    sp = client_factory(credential.access_token)
    try:
        data = sp.current_user_top_artists(
            limit=TOP_ARTISTS_LIMIT,
            time_range=TOP_ARTISTS_TIME_RANGE,
        )
    except SpotifyException as e:
        logger.warning("Top artists request failed: HTTP %s", e.http_status)
        raise RemoteApiError(e.http_status) from e
    except requests.RequestException as e:
        logger.warning("Top artists request failed: %s", e)
        raise NetworkFailure() from e
    items = (data or {}).get("items") or []
    logger.info("Fetched %d top artists", len(items))
    return list(items)


async def fetch_top_artists_async(credential: Credential) -> List[dict]:
    """Awaitable fetch_top_artists; the blocking Spotipy call runs in the threadpool."""
    return await run_in_threadpool(fetch_top_artists, credential)
