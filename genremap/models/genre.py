"""Genre frequency rows."""
from dataclasses import dataclass


@dataclass(frozen=True)
class GenreCount:
    """One row of a genre table: lowercased genre and how many artists list it."""
    genre: str
    count: int
