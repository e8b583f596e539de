"""HTML rendering of the session state (genre bars, connect prompt)."""
import html
from typing import List, Sequence

from genremap.models.genre import GenreCount
from genremap.models.session import SessionState, SessionStatus

EMPTY_MESSAGE = "No genres found yet. Try listening to more music on Spotify."
LOADING_MESSAGE = "Loading your genres from Spotify…"


def genre_bars(table: Sequence[GenreCount]) -> List[dict]:
    """Return rows with width_percent relative to the most common genre."""
    max_count = max((g.count for g in table), default=0)
    return [
        {
            "genre": g.genre,
            "count": g.count,
            "width_percent": (g.count / max_count) * 100 if max_count else 0.0,
        }
        for g in table
    ]


def _bars_html(table: Sequence[GenreCount]) -> str:
    if not table:
        return f'<p class="empty">{EMPTY_MESSAGE}</p>'
    rows = []
    for row in genre_bars(table):
        rows.append(
            '<div class="genre-row">'
            f'<div class="genre-label"><span>{html.escape(row["genre"])}</span>'
            f'<span class="genre-count">{row["count"]}</span></div>'
            f'<div class="genre-bar"><div class="genre-fill" style="width: {row["width_percent"]:.1f}%"></div></div>'
            "</div>"
        )
    return '<div class="genres">' + "".join(rows) + "</div>"


def render_page(state: SessionState) -> str:
    """Full page for the current state."""
    if not state.connected:
        body = (
            "<p>Connect your Spotify account to see a visual breakdown of the genres "
            "you listen to most, based on your top artists.</p>"
            '<p><a class="button" href="/api/spotify/connect">Connect with Spotify</a></p>'
        )
    else:
        body = (
            '<form method="post" action="/api/spotify/logout?next=/">'
            '<button type="submit">Disconnect</button></form>'
        )
        if state.status == SessionStatus.LOADING_GENRES:
            body += f'<p class="status">{LOADING_MESSAGE}</p>'
        elif state.status == SessionStatus.FAILED:
            body += f'<p class="error">{html.escape(state.error)}</p>'
        else:
            body += (
                "<p>These genres are calculated from your top Spotify artists "
                "(last few months).</p>" + _bars_html(state.genres)
            )
    return (
        "<!doctype html><html><head><meta charset=\"utf-8\"><title>Your Spotify Genre Map</title>"
        "</head><body><h1>Your Spotify Genre Map</h1>" + body + "</body></html>"
    )


CALLBACK_PAGE = """<!doctype html>
<html><head><meta charset="utf-8"><title>Connecting…</title></head>
<body><p>Connecting to Spotify…</p>
<script>
const fragment = window.location.hash;
// Strip the token from the address bar without reloading
window.history.replaceState({}, document.title, window.location.pathname + window.location.search);
fetch("/api/spotify/callback", {
  method: "POST",
  headers: {"Content-Type": "application/json"},
  body: JSON.stringify({fragment: fragment})
}).finally(() => { window.location.replace("/"); });
</script>
</body></html>
"""
