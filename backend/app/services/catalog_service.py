"""
Catalog business logic: genre pages, title filtering and trailer choice.

Every genre page shares one code path; a page is just a (genre id, page)
pair looked up from GENRE_PAGES.
"""
from dataclasses import dataclass

from app.services.tmdb_sync import TMDBService

YOUTUBE_EMBED_BASE = "https://www.youtube.com/embed/"


@dataclass(frozen=True)
class GenrePage:
    token: str
    label: str
    genre_id: str | None
    page: int


GENRE_PAGES: dict[str, GenrePage] = {
    "home": GenrePage("home", "Home", None, 1),
    "comedy": GenrePage("comedy", "Comedy", "35", 2),
    "horror": GenrePage("horror", "Horror", "27", 2),
    "animation": GenrePage("animation", "Animation", "16", 1),
}


class UnknownGenreError(Exception):
    """Raised when a genre page token is not registered."""


def get_genre_page(token: str) -> GenrePage:
    try:
        return GENRE_PAGES[token.strip().lower()]
    except KeyError as exc:
        raise UnknownGenreError(f"Unknown genre page '{token}'") from exc


def filter_movies_by_title(movies: list[dict], query: str | None) -> list[dict]:
    """Case-insensitive substring match on the title; blank query keeps all."""
    needle = (query or "").lower()
    if not needle:
        return list(movies)
    return [m for m in movies if needle in (m.get("title") or "").lower()]


def select_trailer(trailers: list[dict]) -> dict | None:
    """Pick the first YouTube trailer, if any."""
    # Not the second entry: a movie with a single trailer would get none.
    for trailer in trailers:
        if trailer.get("site") == "YouTube" and trailer.get("key"):
            return trailer
    return None


def embed_url(trailer: dict | None) -> str | None:
    if trailer is None:
        return None
    return f"{YOUTUBE_EMBED_BASE}{trailer['key']}"


async def list_genre_movies(
    token: str,
    query: str | None = None,
    page: int | None = None,
    client: TMDBService | None = None,
) -> tuple[GenrePage, list[dict]]:
    """Fetch a genre page from TMDB and apply the title filter."""
    genre_page = get_genre_page(token)
    client = client or TMDBService()
    movies = await client.discover_movies(genre_page.genre_id, page or genre_page.page)
    return genre_page, filter_movies_by_title(movies, query)


async def get_movie_trailer(movie_id: int, client: TMDBService | None = None) -> dict | None:
    client = client or TMDBService()
    return select_trailer(await client.get_trailers(movie_id))
