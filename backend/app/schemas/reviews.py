"""
Review request/response schemas.
"""
from pydantic import BaseModel

from app.services.review_service import SortOption, StarGlyph


class CreateReviewRequest(BaseModel):
    """Submit a review for a movie. Range checks happen in the service."""

    rating: int | None = None
    comment: str = ""


class ReviewResponse(BaseModel):
    """A single review with its rendered stars."""

    rating: int | float
    comment: str
    stars: list[StarGlyph]


class ReviewListResponse(BaseModel):
    """All reviews for one movie, in display order."""

    movie_id: int
    sort: SortOption
    total: int
    reviews: list[ReviewResponse]


class SubmitReviewResponse(BaseModel):
    """Outcome of a submission. ``accepted`` is False for an empty comment."""

    accepted: bool
    error_message: str | None = None
    reviews: list[ReviewResponse]


class StarsResponse(BaseModel):
    rating: float
    glyphs: list[StarGlyph]
    text: str
