"""Shared fixtures: a fake TMDb upstream served through httpx.MockTransport."""

import httpx
import pytest

from movie_recs.services.tmdb import TMDbService

BASE_URL = "https://api.themoviedb.org/3/"


def movie_payload(
    movie_id: int,
    title: str | None = None,
    poster_path: str | None = "/poster.jpg",
    release_date: str = "2020-01-01",
) -> dict:
    return {
        "id": movie_id,
        "title": title or f"Movie {movie_id}",
        "poster_path": poster_path,
        "release_date": release_date,
        "popularity": 100.0,
    }


def credits_payload(
    director: str | None = None, cast: tuple[str, ...] = (), crew: list | None = None
) -> dict:
    crew = list(crew or [])
    if director:
        crew.append({"id": 900, "name": director, "job": "Director"})
    return {
        "crew": crew,
        "cast": [{"id": 500 + i, "name": name} for i, name in enumerate(cast)],
    }


class FakeTMDb:
    """Routes requests by path to canned responses and records each request."""

    def __init__(self):
        self.routes = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, json=None, status_code: int = 200) -> None:
        self.routes[path] = (status_code, json)

    def add_handler(self, path: str, handler) -> None:
        """Register an async ``handler(request) -> httpx.Response`` for a path."""
        self.routes[path] = handler

    def add_listing(self, path: str, movies: list[dict]) -> None:
        self.add(path, json={"page": 1, "results": movies})

    def add_credits(self, movie_id: int, **kwargs) -> None:
        self.add(f"movie/{movie_id}/credits", json=credits_payload(**kwargs))

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/3/")
        route = self.routes.get(path)
        if route is None:
            return httpx.Response(404, json={"status_message": "not found"})
        if callable(route):
            return await route(request)
        status_code, json = route
        return httpx.Response(status_code, json=json)

    def paths(self) -> list[str]:
        return [r.url.path.removeprefix("/3/") for r in self.requests]

    def service(self) -> TMDbService:
        client = httpx.AsyncClient(
            base_url=BASE_URL, transport=httpx.MockTransport(self.handler)
        )
        return TMDbService(api_key="test-key", client=client)


@pytest.fixture
def fake_tmdb() -> FakeTMDb:
    return FakeTMDb()
