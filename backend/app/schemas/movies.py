"""
Catalog response schemas.
"""
from pydantic import BaseModel


class MovieResponse(BaseModel):
    id: int
    title: str
    overview: str = ""
    poster_path: str | None = None
    poster_url: str | None = None
    vote_average: float = 0.0
    rounded_rating: float = 0.0


class GenrePageResponse(BaseModel):
    token: str
    label: str
    genre_id: str | None
    page: int


class MovieListResponse(BaseModel):
    """Movies on one genre page after the title filter."""

    genre: GenrePageResponse
    count: int
    items: list[MovieResponse]


class TrailerResponse(BaseModel):
    key: str
    site: str


class MovieTrailerResponse(BaseModel):
    movie_id: int
    trailer: TrailerResponse | None = None
    embed_url: str | None = None
