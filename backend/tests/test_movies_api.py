import unittest
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from app.main import app
from app.services.catalog_service import GENRE_PAGES, UnknownGenreError
from app.services.tmdb_sync import TMDBConfigError, TMDBUpstreamError


def _movie(**overrides):
    base = {
        "id": 8363,
        "title": "Superbad",
        "overview": "Two co-dependent high school seniors...",
        "poster_path": "/abc.jpg",
        "poster_url": "https://image.tmdb.org/t/p/w500/abc.jpg",
        "vote_average": 7.249,
        "rounded_rating": 7.2,
    }
    base.update(overrides)
    return base


class TestMoviesApi(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(app)

    def test_list_genres(self) -> None:
        response = self.client.get("/movies/genres")
        self.assertEqual(response.status_code, 200)
        tokens = [g["token"] for g in response.json()]
        self.assertEqual(tokens, list(GENRE_PAGES))

    def test_genre_movies_envelope(self) -> None:
        with patch(
            "app.api.movies.list_genre_movies",
            new=AsyncMock(return_value=(GENRE_PAGES["comedy"], [_movie()])),
        ) as mocked:
            response = self.client.get("/movies/genre/comedy", params={"q": "super"})

        mocked.assert_awaited_once_with("comedy", query="super", page=None)
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["genre"]["genre_id"], "35")
        self.assertEqual(payload["genre"]["page"], 2)
        self.assertEqual(payload["count"], 1)
        self.assertEqual(payload["items"][0]["title"], "Superbad")

    def test_genre_movies_unknown_genre_404(self) -> None:
        with patch(
            "app.api.movies.list_genre_movies",
            new=AsyncMock(side_effect=UnknownGenreError("Unknown genre page 'western'")),
        ):
            response = self.client.get("/movies/genre/western")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["detail"]["error"]["code"], "GENRE_NOT_FOUND")

    def test_genre_movies_without_api_key_503(self) -> None:
        with patch(
            "app.api.movies.list_genre_movies",
            new=AsyncMock(side_effect=TMDBConfigError("TMDB_API_KEY is not set.")),
        ):
            response = self.client.get("/movies/genre/horror")

        self.assertEqual(response.status_code, 503)

    def test_trailer_found(self) -> None:
        with patch(
            "app.api.movies.get_movie_trailer",
            new=AsyncMock(return_value={"key": "4wCH1K-ckZw", "site": "YouTube"}),
        ):
            response = self.client.get("/movies/8363/trailer")

        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["trailer"]["key"], "4wCH1K-ckZw")
        self.assertEqual(payload["embed_url"], "https://www.youtube.com/embed/4wCH1K-ckZw")

    def test_trailer_missing_is_null(self) -> None:
        with patch("app.api.movies.get_movie_trailer", new=AsyncMock(return_value=None)):
            response = self.client.get("/movies/8363/trailer")

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json()["trailer"])
        self.assertIsNone(response.json()["embed_url"])

    def test_trailer_upstream_error_502(self) -> None:
        with patch(
            "app.api.movies.get_movie_trailer",
            new=AsyncMock(side_effect=TMDBUpstreamError("TMDB videos failed with status 500")),
        ):
            response = self.client.get("/movies/8363/trailer")

        self.assertEqual(response.status_code, 502)
