"""
TMDB Catalog Client
───────────────────
Wraps the two TMDB v3 endpoints the movie viewer needs.

Flow:
  1. Client opens a genre page → /discover/movie?with_genres=<id>&page=<n>.
  2. Client opens a movie      → /movie/{id}/videos, filtered to YouTube.
"""
import logging
from decimal import ROUND_HALF_UP, Decimal

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

TMDB_BASE_URL = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE = "https://image.tmdb.org/t/p/w500"
TMDB_TIMEOUT_SECONDS = 10.0
TRAILER_SITE = "YouTube"


def _round_rating(value: float) -> float:
    """One decimal place, halves rounded up (7.25 -> 7.3)."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class TMDBConfigError(Exception):
    """Raised when TMDB client is used without an API key."""


class TMDBUpstreamError(Exception):
    """Raised for non-recoverable TMDB request/response errors."""


class TMDBService:
    """
    Thin async wrapper around TMDB v3 API.
    Uses httpx for HTTP so calls do not block the event loop.
    """

    def __init__(self, api_key: str | None = None) -> None:
        self.api_key = api_key or settings.TMDB_API_KEY
        if not self.api_key:
            raise TMDBConfigError(
                "TMDB_API_KEY is not set. "
                "Add it to your .env file or pass it explicitly."
            )

    async def _get(self, path: str, params: dict, what: str) -> dict:
        query = {"api_key": self.api_key, **params}
        try:
            async with httpx.AsyncClient(timeout=TMDB_TIMEOUT_SECONDS) as client:
                response = await client.get(f"{TMDB_BASE_URL}{path}", params=query)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning("TMDB %s returned %s", what, exc.response.status_code)
            raise TMDBUpstreamError(
                f"TMDB {what} failed with status {exc.response.status_code}"
            ) from exc
        except httpx.RequestError as exc:
            logger.warning("TMDB %s request failed: %s", what, exc)
            raise TMDBUpstreamError(f"TMDB {what} request failed") from exc
        return response.json()

    async def discover_movies(self, genre: str | None = None, page: int = 1) -> list[dict]:
        """
        List movies for a genre id (or all genres when *genre* is None).

        Returns a list of dicts shaped like:
        [
          {
            "id": 693134,
            "title": "Dune: Part Two",
            "overview": "...",
            "poster_path": "/abc.jpg",
            "poster_url": "https://image.tmdb.org/t/p/w500/abc.jpg",
            "vote_average": 8.2,
            "rounded_rating": 8.2
          },
          ...
        ]
        """
        params: dict = {"page": page}
        if genre:
            params["with_genres"] = genre

        payload = await self._get("/discover/movie", params, "discover")
        mapped: list[dict] = []
        for raw in payload.get("results", []):
            movie = self._map_movie(raw)
            if movie is not None:
                mapped.append(movie)
        return mapped

    async def get_trailers(self, movie_id: int) -> list[dict]:
        """Return the movie's YouTube videos as ``{"key", "site"}`` dicts."""
        payload = await self._get(
            f"/movie/{movie_id}/videos",
            {"language": "en-US"},
            "videos",
        )
        return [
            {"key": raw["key"], "site": raw["site"]}
            for raw in payload.get("results", [])
            if raw.get("site") == TRAILER_SITE and raw.get("key")
        ]

    def _format_poster_url(self, path: str | None) -> str | None:
        """Prefix the TMDB image base URL onto a poster path."""
        if not path:
            return None
        return f"{TMDB_IMAGE_BASE}{path}"

    def _map_movie(self, raw: dict) -> dict | None:
        """Normalize a TMDB /discover/movie result row."""
        movie_id = raw.get("id")
        title = raw.get("title")
        if not movie_id or not title:
            return None

        vote_average = float(raw.get("vote_average") or 0.0)
        return {
            "id": int(movie_id),
            "title": title,
            "overview": raw.get("overview") or "",
            "poster_path": raw.get("poster_path"),
            "poster_url": self._format_poster_url(raw.get("poster_path")),
            "vote_average": vote_average,
            "rounded_rating": _round_rating(vote_average),
        }
