"""Build the implicit-grant authorization URL and parse the redirect fragment."""
import logging
import math
import time
import urllib.parse
from typing import Callable, Iterable, Optional

from genremap.config import DEFAULT_TOKEN_LIFETIME_SEC, SPOTIFY_AUTH_ENDPOINT
from genremap.models.credential import Credential

logger = logging.getLogger(__name__)


def current_time_ms() -> int:
    return int(time.time() * 1000)


def build_authorization_url(
    client_id: str,
    redirect_uri: str,
    scopes: Iterable[str],
    *,
    endpoint: str = SPOTIFY_AUTH_ENDPOINT,
) -> str:
    """Return the Spotify authorize URL for the implicit grant.

    show_dialog is always set so the user sees the consent screen on every connect.
    """
    params = {
        "client_id": client_id,
        "response_type": "token",
        "redirect_uri": redirect_uri,
        "scope": " ".join(scopes),
        "show_dialog": "true",
    }
    return f"{endpoint}?{urllib.parse.urlencode(params)}"


def _lifetime_seconds(raw: Optional[str]) -> float:
    if not raw:
        return DEFAULT_TOKEN_LIFETIME_SEC
    try:
        seconds = float(raw)
    except ValueError:
        logger.warning("Redirect had unparseable expires_in %r, using default lifetime", raw)
        return DEFAULT_TOKEN_LIFETIME_SEC
    if not math.isfinite(seconds):
        return DEFAULT_TOKEN_LIFETIME_SEC
    return seconds


def parse_credential_from_fragment(
    fragment: str,
    now_fn: Callable[[], int] = current_time_ms,
) -> Optional[Credential]:
    """Return a Credential from '#access_token=...&expires_in=...', or None.

    None means "not a usable redirect": no leading '#', or no access_token
    (e.g. '#error=access_denied'). expires_in is relative seconds.
    """
    if not fragment or not fragment.startswith("#"):
        return None
    params = urllib.parse.parse_qs(fragment[1:])
    access_token = (params.get("access_token") or [None])[0]
    if not access_token:
        return None
    expires_in = (params.get("expires_in") or [None])[0]
    expires_at = now_fn() + int(_lifetime_seconds(expires_in) * 1000)
    return Credential(access_token=access_token, expires_at=expires_at)


def fragment_from_url(url: str) -> str:
    """Return '#...' from a full redirect URL, or '' if it has no fragment."""
    _, sep, fragment = url.strip().partition("#")
    return f"#{fragment}" if sep else ""
