from __future__ import annotations

import logging
import time

from ..catalog.base import CatalogStore
from ..errors import ConfigurationError
from ..llm.config import LLMConfig
from ..llm.groq_client import suggest_titles
from .models import Movie, RatedMovie, RecommendationRequest

logger = logging.getLogger(__name__)

RATING_SUMMARY_LIMIT = 10
NO_RATINGS_PLACEHOLDER = "No ratings yet"


def summarize_ratings(history: list[RatedMovie]) -> str:
    """Describe the user's top ratings, one movie per line."""
    lines = [
        f"{r.title} ({r.genre}) - Rating: {r.rating}/5"
        for r in history[:RATING_SUMMARY_LIMIT]
    ]
    return "\n".join(lines) or NO_RATINGS_PLACEHOLDER


def summarize_catalog(catalog: list[Movie]) -> str:
    return "\n".join(
        f"{m.title} ({m.genre}, {m.year}) - {m.description}" for m in catalog
    )


def _title_matches(title: str, candidates: list[str]) -> bool:
    # Case-insensitive containment in either direction, so "1. Inception (2010)"
    # and "Inception" both match the catalog title "Inception".
    title_lower = title.lower()
    return any(c in title_lower or title_lower in c for c in candidates)


def match_titles(
    catalog: list[Movie],
    titles: list[str],
    rated_ids: set[str],
    limit: int,
) -> list[Movie]:
    """Return unrated catalog movies named by the model, in catalog order."""
    candidates = [t.lower() for t in titles if t]
    matched = [
        m for m in catalog
        if m.id not in rated_ids and _title_matches(m.title, candidates)
    ]
    return matched[:limit]


def backfill(
    catalog: list[Movie],
    selected: list[Movie],
    rated_ids: set[str],
    limit: int,
) -> list[Movie]:
    """Top up ``selected`` with unrated catalog movies until ``limit`` is reached.

    Favourite genres do not narrow the backfill: any unrated movie qualifies
    and catalog order decides.
    """
    taken = {m.id for m in selected}
    extra = [m for m in catalog if m.id not in rated_ids and m.id not in taken]
    return selected + extra[: max(0, limit - len(selected))]


def select_recommendations(
    request: RecommendationRequest,
    rating_history: list[RatedMovie],
    catalog: list[Movie],
    config: LLMConfig,
) -> list[Movie]:
    """
    Rank unrated catalog movies for a user.

    ``catalog`` must already be ordered by aggregate rating, highest first;
    ties between matches therefore favour better-rated movies.
    """
    rated_ids = {r.movie_id for r in rating_history}

    titles = suggest_titles(
        summarize_ratings(rating_history),
        request.genres,
        summarize_catalog(catalog),
        request.limit,
        config,
    )

    recommendations = match_titles(catalog, titles, rated_ids, request.limit)

    if len(recommendations) < request.limit:
        logger.info(
            "Falling back to catalog order (%d of %d matched)",
            len(recommendations), request.limit,
        )
        recommendations = backfill(catalog, recommendations, rated_ids, request.limit)

    return recommendations[: request.limit]


def get_recommendations(
    request: RecommendationRequest,
    store: CatalogStore,
    config: LLMConfig,
) -> list[Movie]:
    start_time = time.time()
    logger.info(
        "Generating recommendations for user: %s genres: %s",
        request.user_id, request.genres,
    )

    if not config.api_key:
        raise ConfigurationError("GROQ_API_KEY is not configured")

    history = store.get_rating_history(request.user_id)
    catalog = store.list_movies()

    recommendations = select_recommendations(request, history, catalog, config)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info(
        "Final recommendations: %d (%.1f ms)", len(recommendations), elapsed_ms
    )
    return recommendations
