"""TMDb API service for catalog listings, credits and recommendations."""

import httpx
from attrs import define, field, frozen

from ..models.tmdb import Credits, MovieSummary, require_dict, require_list

BASE_URL = "https://api.themoviedb.org/3/"

# Query parameters a request may carry besides api_key and language.
DECLARED_PARAMS = frozenset({"sort_by", "query"})

# Errors that mean an upstream response could not be used. Network failures,
# rate limiting and malformed payloads are not told apart.
UPSTREAM_ERRORS = (httpx.HTTPError, KeyError, ValueError)


def _check_params(instance, attribute, value: dict) -> None:
    unknown = set(value) - DECLARED_PARAMS
    if unknown:
        raise ValueError(f"Undeclared TMDb parameters: {sorted(unknown)}")


def _movie_id(movie_id: int) -> int:
    if isinstance(movie_id, bool) or not isinstance(movie_id, int):
        raise TypeError(f"movie_id must be an int, got {movie_id!r}")
    if movie_id < 0:
        raise ValueError(f"movie_id must not be negative, got {movie_id}")
    return movie_id


@frozen
class TMDbRequest:
    """A GET request against the TMDb API.

    Paths are built from typed values and parameters are encoded by httpx, so
    a search term never ends up spliced into a URL by hand.
    """

    path: str
    params: dict[str, str] = field(factory=dict, validator=_check_params, hash=False)

    @classmethod
    def discover_popular(cls) -> "TMDbRequest":
        return cls("discover/movie", {"sort_by": "popularity.desc"})

    @classmethod
    def search(cls, query: str) -> "TMDbRequest":
        if not query.strip():
            raise ValueError("Search query must not be empty")
        return cls("search/movie", {"query": query})

    @classmethod
    def credits(cls, movie_id: int) -> "TMDbRequest":
        return cls(f"movie/{_movie_id(movie_id)}/credits")

    @classmethod
    def recommendations(cls, movie_id: int) -> "TMDbRequest":
        return cls(f"movie/{_movie_id(movie_id)}/recommendations")

    def query_params(self, api_key: str, language: str) -> dict[str, str]:
        """Parameters sent on the wire, credential and language included."""
        return {"api_key": api_key, "language": language, **self.params}


@define
class TMDbService:
    """Client for TMDb API."""

    api_key: str
    language: str = "en-US"
    base_url: str = BASE_URL
    timeout: float = 30.0
    _client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(self, request: TMDbRequest) -> dict:
        """Send a request and return the decoded JSON body.

        Raises httpx.HTTPError for transport failures and non-success
        responses, ValueError when the body is not JSON.
        """
        client = await self._get_client()
        resp = await client.get(
            request.path,
            params=request.query_params(self.api_key, self.language),
        )
        resp.raise_for_status()
        return resp.json()

    async def get_popular(self) -> list[MovieSummary]:
        """Movies sorted by descending popularity."""
        data = await self.get(TMDbRequest.discover_popular())
        return self._parse_results(data)

    async def search_movies(self, query: str) -> list[MovieSummary]:
        """Movies matching a title query, in relevance order."""
        data = await self.get(TMDbRequest.search(query))
        return self._parse_results(data)

    async def get_credits(self, movie_id: int) -> Credits:
        data = await self.get(TMDbRequest.credits(movie_id))
        return Credits.from_api(movie_id, data)

    async def get_recommendations(self, movie_id: int) -> list[MovieSummary]:
        data = await self.get(TMDbRequest.recommendations(movie_id))
        return self._parse_results(data)

    def _parse_results(self, data: dict) -> list[MovieSummary]:
        """Parse the ``results`` list of a listing response."""
        data = require_dict(data, "listing")
        results = require_list(data.get("results"), "results")
        return [MovieSummary.from_api(item) for item in results]
