from __future__ import annotations

import logging
import os

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from .catalog.base import CatalogStore
from .catalog.config import StoreConfig
from .catalog.factory import build_store
from .errors import ServiceError
from .llm.config import LLMConfig
from .recommendations.models import (
    ErrorResponse,
    Movie,
    PreferencesRequest,
    PreferencesResponse,
    RatingRequest,
    RecommendationRequest,
    RecommendationResponse,
    UserRating,
)
from .recommendations.retrieval import get_recommendations

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

RECOMMENDATIONS_PATH = "/get-recommendations"

app = FastAPI(title="CineAI Recommendation API", version="1.0.0")


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts) or "Invalid request body"


@app.middleware("http")
async def cors_headers(request: Request, call_next):
    # Pre-flight requests are answered before routing or configuration is touched.
    if request.method == "OPTIONS":
        return Response(headers=CORS_HEADERS)
    try:
        response = await call_next(request)
    except Exception as exc:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        response = _error_response(str(exc) or "Unknown error occurred", 500)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # The recommendation function answers every failure with 429, 402 or 500.
    status_code = 500 if request.url.path == RECOMMENDATIONS_PATH else 422
    return _error_response(_validation_message(exc), status_code)


# ── Dependencies ─────────────────────────────────────────────────────────


def get_llm_config() -> LLMConfig:
    return LLMConfig.from_env()


def get_store() -> CatalogStore:
    return build_store(StoreConfig.from_env())


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post(
    RECOMMENDATIONS_PATH,
    response_model=RecommendationResponse,
    responses={
        402: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def recommendations(
    body: RecommendationRequest,
    store: CatalogStore = Depends(get_store),
    config: LLMConfig = Depends(get_llm_config),
):
    try:
        movies = get_recommendations(body, store, config)
    except ServiceError as exc:
        if exc.status_code >= 500:
            logger.error("Error in get-recommendations: %s", exc.message)
        return _error_response(exc.message, exc.status_code)
    except Exception as exc:
        logger.exception("Error in get-recommendations")
        return _error_response(str(exc) or "Unknown error occurred", 500)
    return RecommendationResponse(recommendations=movies)


# ── Catalog endpoints ────────────────────────────────────────────────────


@app.get("/movies", response_model=list[Movie])
def list_movies(
    search: str | None = None,
    genre: str | None = None,
    store: CatalogStore = Depends(get_store),
) -> list[Movie]:
    return store.list_movies(search=search, genre=genre)


@app.get("/genres")
def list_genres(store: CatalogStore = Depends(get_store)) -> dict[str, list[str]]:
    return {"genres": store.list_genres()}


# ── User endpoints ───────────────────────────────────────────────────────


@app.get("/users/{user_id}/ratings")
def user_ratings(
    user_id: str,
    store: CatalogStore = Depends(get_store),
) -> dict[str, int]:
    return store.get_user_ratings(user_id)


@app.put("/users/{user_id}/ratings/{movie_id}", response_model=UserRating)
def rate_movie(
    user_id: str,
    movie_id: str,
    body: RatingRequest,
    store: CatalogStore = Depends(get_store),
) -> UserRating:
    return store.upsert_rating(user_id, movie_id, body.rating)


@app.get("/users/{user_id}/preferences", response_model=PreferencesResponse)
def get_preferences(
    user_id: str,
    store: CatalogStore = Depends(get_store),
) -> PreferencesResponse:
    return PreferencesResponse(
        user_id=user_id, favorite_genres=store.get_favorite_genres(user_id)
    )


@app.put("/users/{user_id}/preferences", response_model=PreferencesResponse)
def set_preferences(
    user_id: str,
    body: PreferencesRequest,
    store: CatalogStore = Depends(get_store),
) -> PreferencesResponse:
    genres = store.set_favorite_genres(user_id, body.favorite_genres)
    return PreferencesResponse(user_id=user_id, favorite_genres=genres)
