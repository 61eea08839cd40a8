from __future__ import annotations

import logging

import groq
from groq import Groq

from ..errors import ConfigurationError, QuotaExceeded, RateLimited, UpstreamError
from .config import LLMConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert movie recommendation engine. "
    "Analyze user preferences and suggest movies they'll love. "
    "Be concise and only return movie titles from the available list."
)

RATE_LIMIT_MESSAGE = "Rate limit exceeded, please try again later."
QUOTA_MESSAGE = "Payment required. Please add credits to continue."
UPSTREAM_MESSAGE = "Failed to get AI recommendations"


def _build_user_message(
    ratings_summary: str,
    genres: list[str],
    catalog_summary: str,
    limit: int,
) -> str:
    favorite_genres = ", ".join(genres) if genres else "Not specified"
    return (
        f"User's rated movies:\n{ratings_summary}\n\n"
        f"Favorite genres: {favorite_genres}\n\n"
        f"Available movies:\n{catalog_summary}\n\n"
        f"Recommend {limit} movies from the available list that this user would enjoy. "
        "Return ONLY the exact movie titles, one per line."
    )


def parse_titles(content: str) -> list[str]:
    """Split a completion into candidate titles, one per non-blank line."""
    return [line.strip() for line in content.split("\n") if line.strip()]


def suggest_titles(
    ratings_summary: str,
    genres: list[str],
    catalog_summary: str,
    limit: int,
    config: LLMConfig,
) -> list[str]:
    """
    Ask the LLM which catalog titles fit the user best.

    Raises ``RateLimited`` on HTTP 429, ``QuotaExceeded`` on HTTP 402 and
    ``UpstreamError`` on any other failure, timeouts included. Nothing is
    retried.
    """
    if not config.api_key:
        raise ConfigurationError("GROQ_API_KEY is not configured")

    client = Groq(
        api_key=config.api_key,
        base_url=config.base_url,
        timeout=config.timeout,
        max_retries=0,
    )
    try:
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": _build_user_message(
                        ratings_summary, genres, catalog_summary, limit
                    ),
                },
            ],
            max_tokens=config.max_tokens,
            temperature=config.temperature,
        )
    except groq.RateLimitError as exc:
        raise RateLimited(RATE_LIMIT_MESSAGE) from exc
    except groq.APIStatusError as exc:
        if exc.status_code == 429:
            raise RateLimited(RATE_LIMIT_MESSAGE) from exc
        if exc.status_code == 402:
            raise QuotaExceeded(QUOTA_MESSAGE) from exc
        logger.error("AI API error: %s %s", exc.status_code, exc.response.text)
        raise UpstreamError(UPSTREAM_MESSAGE) from exc
    except groq.APITimeoutError as exc:
        logger.warning("AI API request timed out after %.1fs", config.timeout)
        raise UpstreamError(UPSTREAM_MESSAGE) from exc
    except groq.APIConnectionError as exc:
        logger.warning("AI API connection failed", exc_info=True)
        raise UpstreamError(UPSTREAM_MESSAGE) from exc

    content = response.choices[0].message.content or ""
    titles = parse_titles(content)
    logger.info("AI recommended titles: %s", titles)
    return titles
