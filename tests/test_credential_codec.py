from urllib.parse import parse_qs, urlparse

import pytest

from genremap.core.credential_codec import (
    build_authorization_url,
    fragment_from_url,
    parse_credential_from_fragment,
)


def test_build_authorization_url_has_implicit_grant_params() -> None:
    url = build_authorization_url(
        "client-123",
        "http://localhost:8000/callback",
        ["user-top-read", "user-library-read"],
    )
    parsed = urlparse(url)
    assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == "https://accounts.spotify.com/authorize"
    params = parse_qs(parsed.query)
    assert params["client_id"] == ["client-123"]
    assert params["response_type"] == ["token"]
    assert params["redirect_uri"] == ["http://localhost:8000/callback"]
    assert params["scope"] == ["user-top-read user-library-read"]
    assert params["show_dialog"] == ["true"]


def test_build_authorization_url_is_deterministic() -> None:
    args = ("client-123", "http://localhost:8000/callback", ["user-top-read"])
    assert build_authorization_url(*args) == build_authorization_url(*args)


def test_parse_fragment_uses_relative_expiry() -> None:
    credential = parse_credential_from_fragment(
        "#access_token=abc&expires_in=60&token_type=Bearer",
        now_fn=lambda: 1_000,
    )
    assert credential is not None
    assert credential.access_token == "abc"
    assert credential.expires_at == 61_000


def test_parse_fragment_defaults_lifetime_to_one_hour() -> None:
    credential = parse_credential_from_fragment("#access_token=abc", now_fn=lambda: 1_000)
    assert credential is not None
    assert credential.expires_at == 1_000 + 3600 * 1000


def test_parse_fragment_bad_expires_in_falls_back_to_default() -> None:
    credential = parse_credential_from_fragment(
        "#access_token=abc&expires_in=soon", now_fn=lambda: 0
    )
    assert credential is not None
    assert credential.expires_at == 3600 * 1000


@pytest.mark.parametrize(
    "fragment",
    [
        "",
        "access_token=abc&expires_in=3600",
        "?access_token=abc",
        "#foo=bar",
        "#error=access_denied&state=xyz",
        "#access_token=&expires_in=3600",
    ],
)
def test_parse_fragment_rejects_non_redirects(fragment: str) -> None:
    assert parse_credential_from_fragment(fragment) is None


def test_fragment_from_url() -> None:
    assert fragment_from_url("http://localhost:8000/callback#access_token=abc") == "#access_token=abc"
    assert fragment_from_url("http://localhost:8000/callback?code=x") == ""
