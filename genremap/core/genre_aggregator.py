"""Turn top-artist records into a ranked genre frequency table."""
from typing import Dict, Iterable, List, Mapping

from genremap.models.genre import GenreCount


def aggregate(artists: Iterable[Mapping]) -> List[GenreCount]:
    """Count lowercased genres across artists, most common first.

    Artists without genres are skipped. Ties keep first-encountered order
    (dicts preserve insertion order and sorted() is stable).
    """
    counts: Dict[str, int] = {}
    for artist in artists:
        genres = artist.get("genres") if artist else None
        if not genres:
            continue
        for genre in genres:
            if genre is None:
                continue
            key = str(genre).lower()
            counts[key] = counts.get(key, 0) + 1
    table = [GenreCount(genre=g, count=c) for g, c in counts.items()]
    return sorted(table, key=lambda row: row.count, reverse=True)
