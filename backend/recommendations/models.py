from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Movie(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    title: str
    genre: str = ""
    year: int = 0
    description: str = ""
    poster_url: str | None = None
    rating: float = Field(default=0.0, ge=0.0, le=5.0)

    @field_validator("genre", "description", mode="before")
    @classmethod
    def _null_text(cls, value):
        return "" if value is None else value

    @field_validator("year", mode="before")
    @classmethod
    def _null_year(cls, value):
        return 0 if value is None else value

    @field_validator("rating", mode="before")
    @classmethod
    def _null_rating(cls, value):
        return 0.0 if value is None else value


class UserRating(BaseModel):
    user_id: str
    movie_id: str
    rating: int = Field(..., ge=1, le=5)


class RatedMovie(BaseModel):
    """A user's rating joined with the title and genre of the rated movie."""

    movie_id: str
    rating: int
    title: str
    genre: str


class RecommendationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1)
    genres: list[str] = Field(default_factory=list)
    limit: int = Field(default=5, ge=1)

    @field_validator("genres", mode="before")
    @classmethod
    def _null_genres(cls, value):
        return [] if value is None else value


class RecommendationResponse(BaseModel):
    recommendations: list[Movie]


class ErrorResponse(BaseModel):
    error: str


class RatingRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5)


class PreferencesRequest(BaseModel):
    favorite_genres: list[str] = Field(default_factory=list)


class PreferencesResponse(BaseModel):
    user_id: str
    favorite_genres: list[str]
