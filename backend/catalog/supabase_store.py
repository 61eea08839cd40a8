from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError
from supabase import Client, create_client

from ..errors import ConfigurationError, MovieNotFound
from ..recommendations.models import Movie, RatedMovie, UserRating
from .base import CatalogStore, filter_movies
from .config import StoreConfig

logger = logging.getLogger(__name__)


def _joined_movie(row: dict[str, Any]) -> dict[str, Any]:
    """PostgREST returns an embedded relation either as an object or a list."""
    movie = row.get("movies")
    if isinstance(movie, list):
        movie = movie[0] if movie else None
    return movie or {}


class SupabaseCatalogStore(CatalogStore):
    """Store backed by the hosted Supabase tables ``movies``, ``user_ratings``
    and ``user_preferences``."""

    def __init__(self, config: StoreConfig, client: Client | None = None) -> None:
        self._config = config
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            if not self._config.supabase_url or not self._config.supabase_key:
                raise ConfigurationError(
                    "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be configured"
                )
            self._client = create_client(self._config.supabase_url, self._config.supabase_key)
        return self._client

    def list_movies(
        self,
        search: str | None = None,
        genre: str | None = None,
    ) -> list[Movie]:
        result = self.client.table("movies").select("*").order("rating", desc=True).execute()
        movies: list[Movie] = []
        for row in result.data or []:
            try:
                movies.append(Movie(**row))
            except ValidationError:
                logger.warning("Skipping malformed movie row %s", row.get("id"), exc_info=True)
        return filter_movies(movies, search, genre)

    def get_movie(self, movie_id: str) -> Movie | None:
        result = self.client.table("movies").select("*").eq("id", movie_id).limit(1).execute()
        rows = result.data or []
        return Movie(**rows[0]) if rows else None

    def get_rating_history(self, user_id: str) -> list[RatedMovie]:
        result = (
            self.client.table("user_ratings")
            .select("movie_id, rating, movies(title, genre)")
            .eq("user_id", user_id)
            .order("rating", desc=True)
            .execute()
        )
        history: list[RatedMovie] = []
        for row in result.data or []:
            movie = _joined_movie(row)
            history.append(RatedMovie(
                movie_id=str(row["movie_id"]),
                rating=int(row["rating"]),
                title=movie.get("title") or "",
                genre=movie.get("genre") or "",
            ))
        return history

    def upsert_rating(self, user_id: str, movie_id: str, rating: int) -> UserRating:
        if self.get_movie(movie_id) is None:
            raise MovieNotFound(f"Movie {movie_id} not found")
        self.client.table("user_ratings").upsert(
            {"user_id": user_id, "movie_id": movie_id, "rating": rating},
            on_conflict="user_id,movie_id",
        ).execute()
        logger.info("Stored rating %d for user %s on movie %s", rating, user_id, movie_id)
        return UserRating(user_id=user_id, movie_id=movie_id, rating=rating)

    def get_favorite_genres(self, user_id: str) -> list[str]:
        result = (
            self.client.table("user_preferences")
            .select("favorite_genres")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        rows = result.data or []
        if not rows:
            return []
        return list(rows[0].get("favorite_genres") or [])

    def set_favorite_genres(self, user_id: str, genres: list[str]) -> list[str]:
        self.client.table("user_preferences").upsert(
            {"user_id": user_id, "favorite_genres": genres},
            on_conflict="user_id",
        ).execute()
        return list(genres)
