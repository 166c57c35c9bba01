"""
Reviews API — /reviews
──────────────────────
Anonymous per-movie reviews kept in the key-value store.

Endpoints:
  GET    /reviews/movie/{movie_id}    — Reviews for a movie, sorted
  POST   /reviews/movie/{movie_id}    — Submit a review
  GET    /reviews/stars               — Star glyphs for a rating
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.deps.reviews import get_review_store
from app.schemas.reviews import (
    CreateReviewRequest,
    ReviewListResponse,
    ReviewResponse,
    StarsResponse,
    SubmitReviewResponse,
)
from app.services.review_service import (
    ReviewForm,
    SortOption,
    render_star_string,
    render_stars,
    sort_reviews,
    submit_review,
)
from app.services.review_store import Review, ReviewStore

router = APIRouter()


def _error(code: str, message: str) -> dict:
    """Standard error envelope."""
    return {"error": {"code": code, "message": message}}


def _map_review(review: Review) -> ReviewResponse:
    return ReviewResponse(
        rating=review.rating,
        comment=review.comment,
        stars=render_stars(review.rating),
    )


# ── Routes ────────────────────────────────────────────────────────────────────

@router.get("/movie/{movie_id}", response_model=ReviewListResponse)
def get_movie_reviews(
    movie_id: int,
    sort: SortOption = Query(SortOption.NEWEST, description="newest | highest | lowest"),
    store: ReviewStore = Depends(get_review_store),
) -> ReviewListResponse:
    reviews = sort_reviews(store.load(movie_id), sort)
    return ReviewListResponse(
        movie_id=movie_id,
        sort=sort,
        total=len(reviews),
        reviews=[_map_review(r) for r in reviews],
    )


@router.post(
    "/movie/{movie_id}",
    response_model=SubmitReviewResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_review(
    movie_id: int,
    payload: CreateReviewRequest,
    response: Response,
    store: ReviewStore = Depends(get_review_store),
) -> SubmitReviewResponse:
    """
    Submit a review.

    An out-of-range rating is a 400. An empty comment is not an error: the
    submission is dropped and the current reviews come back with 200.
    """
    form = ReviewForm(rating=payload.rating, comment=payload.comment)
    result = submit_review(store, movie_id, form)

    if result.error_message:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_error("INVALID_RATING", result.error_message),
        )
    if not result.accepted:
        response.status_code = status.HTTP_200_OK

    return SubmitReviewResponse(
        accepted=result.accepted,
        error_message=None,
        reviews=[_map_review(r) for r in result.reviews],
    )


@router.get("/stars", response_model=StarsResponse)
def get_stars(
    rating: float = Query(..., allow_inf_nan=False, description="Rating on a 0-10 scale"),
) -> StarsResponse:
    try:
        glyphs = render_stars(rating)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=_error("INVALID_RATING", str(exc)),
        ) from exc
    return StarsResponse(rating=rating, glyphs=glyphs, text=render_star_string(rating))
