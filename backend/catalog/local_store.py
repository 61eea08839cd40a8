from __future__ import annotations

import itertools
import logging
from pathlib import Path

import pandas as pd

from ..errors import MovieNotFound
from ..recommendations.models import Movie, RatedMovie, UserRating
from .base import CatalogStore, filter_movies

logger = logging.getLogger(__name__)

CATALOG_COLUMNS = ["id", "title", "genre", "year", "description", "poster_url", "rating"]


def _load(path: Path) -> pd.DataFrame:
    df = pd.read_csv(path, dtype={"id": str})
    df["description"] = df["description"].fillna("")
    df["rating"] = pd.to_numeric(df["rating"], errors="coerce").fillna(0.0).clip(0.0, 5.0)
    df["year"] = pd.to_numeric(df["year"], errors="coerce").fillna(0).astype(int)
    return df.sort_values("rating", ascending=False, kind="stable").reset_index(drop=True)


def _row_to_movie(row: pd.Series) -> Movie:
    poster = row.get("poster_url")
    return Movie(
        id=str(row["id"]),
        title=str(row["title"]),
        genre=str(row["genre"]),
        year=int(row["year"]),
        description=str(row["description"]),
        poster_url=str(poster) if pd.notna(poster) else None,
        rating=float(row["rating"]),
    )


class LocalCatalogStore(CatalogStore):
    """
    Catalog held in memory, with ratings and preferences kept per process.

    Used for local development against the bundled CSV and as the store
    behind the API tests.
    """

    def __init__(self, movies: list[Movie]) -> None:
        self._movies = sorted(movies, key=lambda m: m.rating, reverse=True)
        self._by_id = {m.id: m for m in self._movies}
        # (user_id, movie_id) -> (rating, write sequence)
        self._ratings: dict[tuple[str, str], tuple[int, int]] = {}
        self._preferences: dict[str, list[str]] = {}
        self._seq = itertools.count()

    @classmethod
    def from_csv(cls, path: Path) -> LocalCatalogStore:
        df = _load(path)
        movies = [_row_to_movie(row) for _, row in df[CATALOG_COLUMNS].iterrows()]
        logger.info("Loaded %d movies from %s", len(movies), path)
        return cls(movies)

    def list_movies(
        self,
        search: str | None = None,
        genre: str | None = None,
    ) -> list[Movie]:
        return filter_movies(list(self._movies), search, genre)

    def get_movie(self, movie_id: str) -> Movie | None:
        return self._by_id.get(movie_id)

    def get_rating_history(self, user_id: str) -> list[RatedMovie]:
        entries = [
            (rating, seq, self._by_id[movie_id])
            for (uid, movie_id), (rating, seq) in self._ratings.items()
            if uid == user_id and movie_id in self._by_id
        ]
        # Highest rating first, most recent first among equal ratings
        entries.sort(key=lambda e: (e[0], e[1]), reverse=True)
        return [
            RatedMovie(movie_id=m.id, rating=rating, title=m.title, genre=m.genre)
            for rating, _, m in entries
        ]

    def upsert_rating(self, user_id: str, movie_id: str, rating: int) -> UserRating:
        if movie_id not in self._by_id:
            raise MovieNotFound(f"Movie {movie_id} not found")
        self._ratings[(user_id, movie_id)] = (rating, next(self._seq))
        return UserRating(user_id=user_id, movie_id=movie_id, rating=rating)

    def get_favorite_genres(self, user_id: str) -> list[str]:
        return list(self._preferences.get(user_id, []))

    def set_favorite_genres(self, user_id: str, genres: list[str]) -> list[str]:
        self._preferences[user_id] = list(genres)
        return list(genres)
