"""
Review business logic: validation, submission, ordering and star rendering.
"""
import logging
import math
from dataclasses import dataclass, field
from enum import Enum

from app.services.review_store import Review, ReviewStore

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 10
STAR_SLOTS = 10
RATING_RANGE_MESSAGE = f"Rating must be between {MIN_RATING} and {MAX_RATING}."


class InvalidRatingError(Exception):
    """Raised when a rating is missing or outside [1, 10]."""

    def __init__(self, message: str = RATING_RANGE_MESSAGE) -> None:
        super().__init__(message)


class SortOption(str, Enum):
    NEWEST = "newest"
    HIGHEST = "highest"
    LOWEST = "lowest"


class StarGlyph(str, Enum):
    FULL = "full"
    HALF = "half"
    EMPTY = "empty"


STAR_CHARACTERS: dict[StarGlyph, str] = {
    StarGlyph.FULL: "★",
    StarGlyph.HALF: "⯪",
    StarGlyph.EMPTY: "☆",
}


# ── Validation ────────────────────────────────────────────────────────────────

def is_valid_rating(rating: int | float | None) -> bool:
    if rating is None or isinstance(rating, bool):
        return False
    return MIN_RATING <= rating <= MAX_RATING


def validate_rating(rating: int | float | None) -> int | float:
    """Return *rating* unchanged, or raise InvalidRatingError."""
    if not is_valid_rating(rating):
        raise InvalidRatingError()
    return rating


@dataclass
class ReviewForm:
    """Pending input for one movie's review box."""

    rating: int | float | None = None
    comment: str = ""
    error_message: str = ""

    def clear(self) -> None:
        self.rating = None
        self.comment = ""
        self.error_message = ""


@dataclass
class SubmissionResult:
    accepted: bool
    reviews: list[Review] = field(default_factory=list)
    error_message: str | None = None


def update_rating(form: ReviewForm, value: int | float | None) -> ReviewForm:
    """Set the pending rating, flagging out-of-range values as they are typed."""
    form.rating = value
    form.error_message = "" if is_valid_rating(value) else RATING_RANGE_MESSAGE
    return form


def submit_review(store: ReviewStore, movie_id: int | str, form: ReviewForm) -> SubmissionResult:
    """
    Validate the form and, if acceptable, append and persist the review.

    Outcomes:
      - bad or missing rating → rejected, ``form.error_message`` set, nothing written
      - empty comment         → ignored, no message, nothing written
      - otherwise             → appended, form cleared
    """
    current = store.load(movie_id)

    try:
        rating = validate_rating(form.rating)
    except InvalidRatingError as exc:
        form.error_message = str(exc)
        return SubmissionResult(accepted=False, reviews=current, error_message=str(exc))

    if not form.comment:
        logger.debug("Ignoring review for movie %s with empty comment", movie_id)
        return SubmissionResult(accepted=False, reviews=current)

    review = Review(rating=rating, comment=form.comment)
    reviews = store.append(movie_id, review)
    form.clear()
    logger.info("Stored review for movie %s (now %d)", movie_id, len(reviews))
    return SubmissionResult(accepted=True, reviews=reviews)


# ── Ordering ──────────────────────────────────────────────────────────────────

def sort_reviews(reviews: list[Review], option: SortOption | str = SortOption.NEWEST) -> list[Review]:
    """Return a new list ordered by *option*; the input is left untouched."""
    option = SortOption(option)
    if option == SortOption.NEWEST:
        # No timestamps are stored, so insertion order is the only recency signal.
        return list(reversed(reviews))
    if option == SortOption.HIGHEST:
        return sorted(reviews, key=lambda r: r.rating, reverse=True)
    return sorted(reviews, key=lambda r: r.rating)


# ── Stars ─────────────────────────────────────────────────────────────────────

def render_stars(rating: int | float) -> list[StarGlyph]:
    """
    Map a 0-10 rating onto exactly ten glyph slots.

    ``floor(rating)`` full stars, one half star when the fractional part is
    at least .5, then empty stars. Input is clamped to [0, 10]; NaN raises
    ValueError.
    """
    if math.isnan(rating):
        raise ValueError("rating must be a number, got NaN")
    rating = min(max(float(rating), 0.0), float(STAR_SLOTS))
    full_stars = math.floor(rating)
    has_half_star = rating % 1 >= 0.5
    empty_stars = max(0, STAR_SLOTS - full_stars - (1 if has_half_star else 0))

    glyphs = [StarGlyph.FULL] * full_stars
    if has_half_star:
        glyphs.append(StarGlyph.HALF)
    glyphs.extend([StarGlyph.EMPTY] * empty_stars)
    return glyphs


def render_star_string(rating: int | float) -> str:
    return "".join(STAR_CHARACTERS[g] for g in render_stars(rating))
