"""
Movies API — /movies
────────────────────
Endpoints:
  GET  /movies/genres                 — Registered genre pages
  GET  /movies/genre/{token}          — One genre page, optionally title-filtered
  GET  /movies/{movie_id}/trailer     — Selected YouTube trailer
"""
from fastapi import APIRouter, HTTPException, Query, status

from app.schemas.movies import (
    GenrePageResponse,
    MovieListResponse,
    MovieResponse,
    MovieTrailerResponse,
    TrailerResponse,
)
from app.services.catalog_service import (
    GENRE_PAGES,
    UnknownGenreError,
    embed_url,
    get_movie_trailer,
    list_genre_movies,
)
from app.services.tmdb_sync import TMDBConfigError, TMDBUpstreamError

router = APIRouter()


def _error(code: str, message: str) -> dict:
    """Standard error envelope."""
    return {"error": {"code": code, "message": message}}


def _upstream_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, TMDBConfigError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=_error("TMDB_NOT_CONFIGURED", str(exc)),
        )
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=_error("TMDB_UPSTREAM_ERROR", str(exc)),
    )


# ── Routes ────────────────────────────────────────────────────────────────────

@router.get("/genres", response_model=list[GenrePageResponse])
def list_genres() -> list[GenrePageResponse]:
    return [
        GenrePageResponse(token=p.token, label=p.label, genre_id=p.genre_id, page=p.page)
        for p in GENRE_PAGES.values()
    ]


@router.get("/genre/{token}", response_model=MovieListResponse)
async def get_genre_movies(
    token: str,
    q: str | None = Query(None, description="Case-insensitive title filter"),
    page: int | None = Query(None, ge=1, le=500, description="Overrides the page's default"),
) -> MovieListResponse:
    try:
        genre_page, movies = await list_genre_movies(token, query=q, page=page)
    except UnknownGenreError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=_error("GENRE_NOT_FOUND", str(exc)),
        ) from exc
    except (TMDBConfigError, TMDBUpstreamError) as exc:
        raise _upstream_http_error(exc) from exc

    items = [MovieResponse(**m) for m in movies]
    return MovieListResponse(
        genre=GenrePageResponse(
            token=genre_page.token,
            label=genre_page.label,
            genre_id=genre_page.genre_id,
            page=page or genre_page.page,
        ),
        count=len(items),
        items=items,
    )


@router.get("/{movie_id}/trailer", response_model=MovieTrailerResponse)
async def get_trailer(movie_id: int) -> MovieTrailerResponse:
    try:
        trailer = await get_movie_trailer(movie_id)
    except (TMDBConfigError, TMDBUpstreamError) as exc:
        raise _upstream_http_error(exc) from exc

    return MovieTrailerResponse(
        movie_id=movie_id,
        trailer=TrailerResponse(**trailer) if trailer else None,
        embed_url=embed_url(trailer),
    )
