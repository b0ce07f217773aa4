"""Tests for the TMDb API client."""

from unittest.mock import AsyncMock, MagicMock, patch

from marquee.config import settings
from marquee.services.tmdb_client import TMDbClient


# ---------------------------------------------------------------------------
# Sample fixture data
# ---------------------------------------------------------------------------

SAMPLE_SEARCH_RESPONSE = {
    "results": [
        {
            "id": 426063,
            "title": "Nosferatu",
            "original_title": "Nosferatu",
            "release_date": "2024-12-25",
            "vote_average": 6.7,
            "vote_count": 3100,
            "overview": "A gothic tale of obsession.",
            "poster_path": "/5qGIxdEO841C0tdY8vOdLoRVrr0.jpg",
        },
        {
            "id": 653,
            "title": "Nosferatu",
            "original_title": "Nosferatu, eine Symphonie des Grauens",
            "release_date": "1922-02-16",
            "vote_average": 7.7,
            "vote_count": 2200,
        },
        {"id": 999, "title": ""},
    ]
}

SAMPLE_DETAILS_RESPONSE = {
    "id": 653,
    "title": "Nosferatu",
    "tagline": "A Symphony of Horror",
    "overview": "The vampire Count Orlok expresses interest in a new residence.",
    "release_date": "1922-02-16",
    "runtime": 94,
    "vote_average": 7.7,
    "vote_count": 2200,
    "poster_path": "/poster.jpg",
    "backdrop_path": "/backdrop.jpg",
    "genres": [{"id": 27, "name": "Horror"}, {"id": 14, "name": "Fantasy"}],
    "credits": {
        "crew": [
            {"name": "Albin Grau", "job": "Producer"},
            {"name": "F. W. Murnau", "job": "Director"},
            {"name": "Someone Else", "job": "Director"},
        ],
        "cast": [
            {"name": "Gustav von Wangenheim", "order": 1},
            {"name": "Max Schreck", "order": 0},
            {"name": "Greta Schröder", "order": 2},
            {"name": "Uncredited Extra"},
            {"name": "Alexander Granach", "order": 3},
            {"name": "Georg H. Schnell", "order": 4},
            {"name": "Ruth Landshoff", "order": 5},
        ],
    },
    "videos": {
        "results": [
            {"key": "teaser1", "site": "YouTube", "type": "Teaser"},
            {"key": "vimeo1", "site": "Vimeo", "type": "Trailer"},
            {"key": "trailer1", "site": "YouTube", "type": "Trailer"},
        ]
    },
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_http_response(json_data: dict, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = Exception(f"HTTP {status_code}")
    else:
        response.raise_for_status = MagicMock()
    return response


def make_async_client_ctx(response: MagicMock) -> AsyncMock:
    """Return an async context manager whose .get() always returns *response*."""
    inner = AsyncMock()
    inner.get = AsyncMock(return_value=response)
    ctx = AsyncMock()
    ctx.__aenter__ = AsyncMock(return_value=inner)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return ctx


# ---------------------------------------------------------------------------
# search_movies
# ---------------------------------------------------------------------------


class TestSearchMovies:
    async def test_returns_empty_list_without_api_key(self) -> None:
        client = TMDbClient(api_key="dummy")
        client.api_key = None  # type: ignore[assignment]
        assert await client.search_movies("Nosferatu") == []

    async def test_returns_all_results_as_candidates(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response(SAMPLE_SEARCH_RESPONSE))
        with patch("httpx.AsyncClient", return_value=ctx):
            candidates = await client.search_movies("Nosferatu")

        # The untitled result is skipped
        assert [c.tmdb_id for c in candidates] == [426063, 653]
        assert candidates[1].original_title == "Nosferatu, eine Symphonie des Grauens"
        assert candidates[0].vote_count == 3100

    async def test_never_sends_year_filter(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response(SAMPLE_SEARCH_RESPONSE))
        with patch("httpx.AsyncClient", return_value=ctx):
            await client.search_movies("Nosferatu")
        params = ctx.__aenter__.return_value.get.call_args.kwargs["params"]
        assert "year" not in params
        assert params["language"] == settings.tmdb_language

    async def test_returns_empty_list_when_results_empty(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response({"results": []}))
        with patch("httpx.AsyncClient", return_value=ctx):
            assert await client.search_movies("UnknownFilm") == []

    async def test_returns_empty_list_on_rate_limit(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response({}, status_code=429))
        with patch("httpx.AsyncClient", return_value=ctx):
            assert await client.search_movies("Nosferatu") == []

    async def test_returns_empty_list_on_network_error(self) -> None:
        client = TMDbClient(api_key="test-key")
        inner = AsyncMock()
        inner.get = AsyncMock(side_effect=Exception("Connection refused"))
        ctx = AsyncMock()
        ctx.__aenter__ = AsyncMock(return_value=inner)
        ctx.__aexit__ = AsyncMock(return_value=False)
        with patch("httpx.AsyncClient", return_value=ctx):
            assert await client.search_movies("Nosferatu") == []


# ---------------------------------------------------------------------------
# get_movie_details
# ---------------------------------------------------------------------------


class TestGetMovieDetails:
    async def test_returns_none_without_api_key(self) -> None:
        client = TMDbClient(api_key="dummy")
        client.api_key = None  # type: ignore[assignment]
        assert await client.get_movie_details(653) is None

    async def test_returns_details_on_success(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response(SAMPLE_DETAILS_RESPONSE))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await client.get_movie_details(653)
        assert result is not None
        assert result["runtime"] == 94

    async def test_appends_credits_and_videos(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response(SAMPLE_DETAILS_RESPONSE))
        with patch("httpx.AsyncClient", return_value=ctx):
            await client.get_movie_details(653)
        params = ctx.__aenter__.return_value.get.call_args.kwargs["params"]
        assert params["append_to_response"] == "credits,videos"

    async def test_calls_correct_endpoint(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response(SAMPLE_DETAILS_RESPONSE))
        with patch("httpx.AsyncClient", return_value=ctx):
            await client.get_movie_details(99)
        url = ctx.__aenter__.return_value.get.call_args.args[0]
        assert url.endswith("/movie/99")

    async def test_returns_none_on_http_error(self) -> None:
        client = TMDbClient(api_key="test-key")
        ctx = make_async_client_ctx(make_http_response({}, status_code=404))
        with patch("httpx.AsyncClient", return_value=ctx):
            assert await client.get_movie_details(99999) is None

    async def test_returns_none_on_invalid_key(self) -> None:
        client = TMDbClient(api_key="bad-key")
        ctx = make_async_client_ctx(make_http_response({}, status_code=401))
        with patch("httpx.AsyncClient", return_value=ctx):
            assert await client.get_movie_details(653) is None


# ---------------------------------------------------------------------------
# build_movie_info and extractors
# ---------------------------------------------------------------------------


class TestBuildMovieInfo:
    def test_builds_info_from_details(self) -> None:
        client = TMDbClient(api_key="key")
        info = client.build_movie_info(SAMPLE_DETAILS_RESPONSE)

        assert info.tmdb_id == 653
        assert info.tagline == "A Symphony of Horror"
        assert info.runtime == 94
        assert info.rating == 7.7
        assert info.vote_count == 2200
        assert info.genres == ["Horror", "Fantasy"]
        assert info.director == "F. W. Murnau"
        assert info.release_date == "1922-02-16"
        assert info.trailer_url == "https://www.youtube.com/watch?v=trailer1"

    def test_builds_image_urls_from_configured_sizes(self) -> None:
        client = TMDbClient(api_key="key")
        info = client.build_movie_info(SAMPLE_DETAILS_RESPONSE)
        assert info.poster_url == (
            f"https://image.tmdb.org/t/p/{settings.tmdb_poster_size}/poster.jpg"
        )
        assert info.backdrop_url == (
            f"https://image.tmdb.org/t/p/{settings.tmdb_backdrop_size}/backdrop.jpg"
        )

    def test_handles_minimal_details(self) -> None:
        client = TMDbClient(api_key="key")
        info = client.build_movie_info({"id": 1, "overview": ""})
        assert info.overview is None
        assert info.director is None
        assert info.top_cast == []
        assert info.genres == []
        assert info.poster_url is None
        assert info.trailer_url is None


class TestExtractors:
    def test_extract_director_returns_first_director(self) -> None:
        client = TMDbClient(api_key="key")
        assert client.extract_director(SAMPLE_DETAILS_RESPONSE["credits"]) == "F. W. Murnau"

    def test_extract_director_none_without_crew(self) -> None:
        client = TMDbClient(api_key="key")
        assert client.extract_director({}) is None

    def test_extract_cast_sorts_by_billing_order(self) -> None:
        client = TMDbClient(api_key="key")
        cast = client.extract_cast(SAMPLE_DETAILS_RESPONSE["credits"])
        assert cast == [
            "Max Schreck",
            "Gustav von Wangenheim",
            "Greta Schröder",
            "Alexander Granach",
            "Georg H. Schnell",
        ]

    def test_extract_cast_respects_n(self) -> None:
        client = TMDbClient(api_key="key")
        assert client.extract_cast(SAMPLE_DETAILS_RESPONSE["credits"], n=1) == ["Max Schreck"]

    def test_extract_cast_puts_unordered_last(self) -> None:
        client = TMDbClient(api_key="key")
        credits = {"cast": [{"name": "Extra"}, {"name": "Lead", "order": 0}]}
        assert client.extract_cast(credits) == ["Lead", "Extra"]

    def test_extract_trailer_prefers_teaser_over_other_types(self) -> None:
        client = TMDbClient(api_key="key")
        videos = {
            "results": [
                {"key": "clip", "site": "YouTube", "type": "Clip"},
                {"key": "teaser", "site": "YouTube", "type": "Teaser"},
            ]
        }
        assert client.extract_trailer_url(videos) == "https://www.youtube.com/watch?v=teaser"

    def test_extract_trailer_ignores_other_sites(self) -> None:
        client = TMDbClient(api_key="key")
        videos = {"results": [{"key": "v", "site": "Vimeo", "type": "Trailer"}]}
        assert client.extract_trailer_url(videos) is None

    def test_image_url_none_without_path(self) -> None:
        client = TMDbClient(api_key="key")
        assert client.image_url(None, "w500") is None
