import asyncio
import unittest
from unittest.mock import AsyncMock, MagicMock

from app.services.catalog_service import (
    GENRE_PAGES,
    UnknownGenreError,
    embed_url,
    filter_movies_by_title,
    get_genre_page,
    get_movie_trailer,
    list_genre_movies,
    select_trailer,
)

MOVIES = [
    {"id": 1, "title": "Superbad"},
    {"id": 2, "title": "The Super Mario Bros. Movie"},
    {"id": 3, "title": "Hereditary"},
]


class TestCatalogHelpers(unittest.TestCase):
    def test_filter_is_case_insensitive_substring(self) -> None:
        result = filter_movies_by_title(MOVIES, "SUPER")
        self.assertEqual([m["id"] for m in result], [1, 2])

    def test_blank_query_keeps_everything(self) -> None:
        self.assertEqual(filter_movies_by_title(MOVIES, ""), MOVIES)
        self.assertEqual(filter_movies_by_title(MOVIES, None), MOVIES)

    def test_genre_pages_map_to_tmdb_genre_ids(self) -> None:
        self.assertEqual(GENRE_PAGES["comedy"].genre_id, "35")
        self.assertEqual(GENRE_PAGES["horror"].genre_id, "27")
        self.assertEqual(GENRE_PAGES["animation"].genre_id, "16")
        self.assertIsNone(GENRE_PAGES["home"].genre_id)

    def test_get_genre_page_normalizes_token(self) -> None:
        self.assertIs(get_genre_page(" Horror "), GENRE_PAGES["horror"])

    def test_get_genre_page_unknown(self) -> None:
        with self.assertRaises(UnknownGenreError):
            get_genre_page("western")

    def test_select_trailer_takes_first_youtube_not_second(self) -> None:
        trailers = [
            {"key": "v1", "site": "Vimeo"},
            {"key": "yt1", "site": "YouTube"},
            {"key": "yt2", "site": "YouTube"},
        ]
        self.assertEqual(select_trailer(trailers), {"key": "yt1", "site": "YouTube"})
        self.assertEqual(select_trailer([{"key": "solo", "site": "YouTube"}])["key"], "solo")
        self.assertIsNone(select_trailer([]))

    def test_embed_url(self) -> None:
        self.assertEqual(embed_url({"key": "abc", "site": "YouTube"}), "https://www.youtube.com/embed/abc")
        self.assertIsNone(embed_url(None))


class TestCatalogCalls(unittest.TestCase):
    def test_list_genre_movies_uses_page_defaults(self) -> None:
        client = MagicMock()
        client.discover_movies = AsyncMock(return_value=MOVIES)

        page, movies = asyncio.run(list_genre_movies("comedy", query="bad", client=client))

        client.discover_movies.assert_awaited_once_with("35", 2)
        self.assertEqual(page.token, "comedy")
        self.assertEqual([m["title"] for m in movies], ["Superbad"])

    def test_list_genre_movies_page_override(self) -> None:
        client = MagicMock()
        client.discover_movies = AsyncMock(return_value=[])

        asyncio.run(list_genre_movies("home", page=4, client=client))

        client.discover_movies.assert_awaited_once_with(None, 4)

    def test_get_movie_trailer(self) -> None:
        client = MagicMock()
        client.get_trailers = AsyncMock(return_value=[{"key": "k", "site": "YouTube"}])

        trailer = asyncio.run(get_movie_trailer(27205, client=client))

        client.get_trailers.assert_awaited_once_with(27205)
        self.assertEqual(trailer["key"], "k")
