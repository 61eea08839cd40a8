"""Catalog store port: abstract interface over the movie and rating tables."""
from __future__ import annotations

from abc import ABC, abstractmethod

from ..recommendations.models import Movie, RatedMovie, UserRating


class CatalogStore(ABC):
    """Abstraction for the catalog, rating and preference store."""

    @abstractmethod
    def list_movies(
        self,
        search: str | None = None,
        genre: str | None = None,
    ) -> list[Movie]:
        """Return movies ordered by aggregate rating, highest first."""
        ...

    @abstractmethod
    def get_movie(self, movie_id: str) -> Movie | None:
        ...

    @abstractmethod
    def get_rating_history(self, user_id: str) -> list[RatedMovie]:
        """Return every rating the user has made, highest rating first."""
        ...

    @abstractmethod
    def upsert_rating(self, user_id: str, movie_id: str, rating: int) -> UserRating:
        """Insert or overwrite the user's rating for a movie."""
        ...

    @abstractmethod
    def get_favorite_genres(self, user_id: str) -> list[str]:
        ...

    @abstractmethod
    def set_favorite_genres(self, user_id: str, genres: list[str]) -> list[str]:
        ...

    def list_genres(self) -> list[str]:
        """Distinct genres in the order they first appear in the catalog."""
        return list(dict.fromkeys(m.genre for m in self.list_movies() if m.genre))

    def get_user_ratings(self, user_id: str) -> dict[str, int]:
        return {r.movie_id: r.rating for r in self.get_rating_history(user_id)}


def filter_movies(
    movies: list[Movie],
    search: str | None = None,
    genre: str | None = None,
) -> list[Movie]:
    """Apply the catalog search box and genre dropdown filters."""
    if search:
        needle = search.lower()
        movies = [
            m for m in movies
            if needle in m.title.lower() or needle in (m.description or "").lower()
        ]
    if genre and genre != "all":
        movies = [m for m in movies if m.genre == genre]
    return movies
