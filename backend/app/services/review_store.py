"""
Review persistence.

One entry per movie under ``movie-reviews-<movie_id>``; the value is a UTF-8
JSON array of ``{"rating": number, "comment": string}`` objects. Every write
replaces the whole collection.
"""
import json
import logging
import math
from dataclasses import asdict, dataclass

from app.core.config import settings
from app.services.kv_store import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Review:
    rating: int | float
    comment: str


def _decode_review(raw: object) -> Review:
    if not isinstance(raw, dict):
        raise ValueError("review entry is not an object")
    rating = raw.get("rating")
    comment = raw.get("comment")
    # bool is an int subclass; a stored true/false is not a rating
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        raise ValueError("review rating is not a number")
    if not math.isfinite(rating):
        raise ValueError("review rating is not finite")
    if not isinstance(comment, str):
        raise ValueError("review comment is not a string")
    return Review(rating=rating, comment=comment)


class ReviewStore:
    """Loads and saves per-movie review collections on a key-value store."""

    def __init__(self, storage: KeyValueStore, key_prefix: str | None = None) -> None:
        self.storage = storage
        self.key_prefix = settings.REVIEW_KEY_PREFIX if key_prefix is None else key_prefix

    def key_for(self, movie_id: int | str) -> str:
        return f"{self.key_prefix}{movie_id}"

    def load(self, movie_id: int | str) -> list[Review]:
        """
        Return the stored reviews for *movie_id*.

        Absent or unparseable values read as an empty list; this never raises.
        """
        key = self.key_for(movie_id)
        blob = self.storage.get(key)
        if blob is None:
            return []

        try:
            payload = json.loads(blob.decode("utf-8"))
            if not isinstance(payload, list):
                raise ValueError("stored value is not an array")
            return [_decode_review(item) for item in payload]
        except (UnicodeDecodeError, ValueError, RecursionError) as exc:
            logger.warning("Ignoring malformed reviews under %s: %s", key, exc)
            return []

    def save(self, movie_id: int | str, reviews: list[Review]) -> None:
        """Serialize the full collection and overwrite any prior value."""
        blob = json.dumps([asdict(r) for r in reviews]).encode("utf-8")
        self.storage.set(self.key_for(movie_id), blob)
        logger.debug("Saved %d reviews for movie %s", len(reviews), movie_id)

    def append(self, movie_id: int | str, review: Review) -> list[Review]:
        """Read-modify-append-write. Returns the new collection."""
        reviews = [*self.load(movie_id), review]
        self.save(movie_id, reviews)
        return reviews
