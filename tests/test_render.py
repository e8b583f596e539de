from genremap.api.render import EMPTY_MESSAGE, LOADING_MESSAGE, genre_bars, render_page
from genremap.models.credential import Credential
from genremap.models.genre import GenreCount
from genremap.models.session import SessionState

CREDENTIAL = Credential(access_token="secret-token", expires_at=10**13)


def test_genre_bars_scale_to_top_genre() -> None:
    rows = genre_bars([GenreCount("rock", 4), GenreCount("pop", 2), GenreCount("jazz", 1)])
    assert [r["width_percent"] for r in rows] == [100.0, 50.0, 25.0]
    assert genre_bars([]) == []


def test_render_states() -> None:
    assert "Connect with Spotify" in render_page(SessionState.disconnected())
    assert LOADING_MESSAGE in render_page(SessionState.loading(CREDENTIAL))
    assert EMPTY_MESSAGE in render_page(SessionState.ready(CREDENTIAL, []))
    failed = render_page(SessionState.failed(CREDENTIAL, "Spotify API error (401)"))
    assert "Spotify API error (401)" in failed


def test_render_escapes_genres_and_hides_token() -> None:
    page = render_page(SessionState.ready(CREDENTIAL, [GenreCount("<script>", 1)]))
    assert "<script>" not in page.split("<body>", 1)[1]
    assert "secret-token" not in page
