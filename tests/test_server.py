"""Tests for the MCP tool handlers."""

import asyncio
import json

from movie_recs.mcp.server import handle_tool, movie_to_dict
from movie_recs.models.tmdb import CreditPerson, EnrichedMovie
from movie_recs.services.browser import MovieBrowser

from conftest import movie_payload

IMAGE_BASE = "https://image.tmdb.org/t/p/w500"


class TestMovieToDict:
    """Tests for movie serialization."""

    def test_full_movie(self):
        """Test every field is serialized."""
        movie = EnrichedMovie(
            id=1,
            title="A",
            poster_path="/a.jpg",
            release_date="2000-01-01",
            director=CreditPerson(id=2, name="D"),
            lead_actor=CreditPerson(id=3, name="L"),
        )
        assert movie_to_dict(movie, IMAGE_BASE) == {
            "id": 1,
            "title": "A",
            "release_date": "2000-01-01",
            "poster_url": "https://image.tmdb.org/t/p/w500/a.jpg",
            "director": {"id": 2, "name": "D"},
            "lead_actor": {"id": 3, "name": "L"},
        }

    def test_missing_fields(self):
        """Test absent poster and credits serialize as null."""
        result = movie_to_dict(EnrichedMovie(id=1, title="A"), IMAGE_BASE)
        assert result["poster_url"] is None
        assert result["director"] is None
        assert result["lead_actor"] is None


class TestHandleTool:
    """Tests for tool dispatch."""

    def make_browser(self, fake_tmdb) -> MovieBrowser:
        fake_tmdb.add_listing("discover/movie", [movie_payload(1)])
        fake_tmdb.add_credits(1, director="A", cast=("B",))
        fake_tmdb.add_listing("movie/1/recommendations", [movie_payload(2)])
        fake_tmdb.add_credits(2)
        return MovieBrowser(fake_tmdb.service())

    def test_browse_then_select(self, fake_tmdb):
        """Test browsing and selecting through tool calls."""
        browser = self.make_browser(fake_tmdb)

        async def run():
            browsed = await handle_tool(browser, "browse_movies", {}, IMAGE_BASE)
            selected = await handle_tool(
                browser, "select_movie", {"movie_id": 1}, IMAGE_BASE
            )
            return json.loads(browsed), json.loads(selected)

        browsed, selected = asyncio.run(run())

        assert browsed["view"] == "catalog"
        assert browsed["movies"][0]["director"]["name"] == "A"
        assert selected["view"] == "recommendations"
        assert selected["selected"]["id"] == 1
        assert [m["id"] for m in selected["movies"]] == [2]
        assert selected["error"] is None

    def test_browse_after_select_shows_catalog(self, fake_tmdb):
        """Test searching from the recommendation view switches back to the catalog."""
        browser = self.make_browser(fake_tmdb)
        fake_tmdb.add_listing("search/movie", [movie_payload(3)])
        fake_tmdb.add_credits(3)

        async def run():
            await handle_tool(browser, "browse_movies", {}, IMAGE_BASE)
            await handle_tool(browser, "select_movie", {"movie_id": 1}, IMAGE_BASE)
            return await handle_tool(
                browser, "browse_movies", {"search_term": "Matrix"}, IMAGE_BASE
            )

        state = json.loads(asyncio.run(run()))

        assert state["view"] == "catalog"
        assert "selected" not in state
        assert [m["id"] for m in state["movies"]] == [3]
        assert state["search_term"] == "Matrix"

    def test_select_movie_not_on_screen(self, fake_tmdb):
        """Test selecting an unknown id does not call upstream."""
        browser = self.make_browser(fake_tmdb)

        text = asyncio.run(handle_tool(browser, "select_movie", {"movie_id": 99}, IMAGE_BASE))

        assert text == "Movie 99 is not on screen"
        assert fake_tmdb.requests == []

    def test_back_and_home(self, fake_tmdb):
        """Test navigation tools return to the catalog."""
        browser = self.make_browser(fake_tmdb)

        async def run():
            await handle_tool(browser, "browse_movies", {}, IMAGE_BASE)
            await handle_tool(browser, "select_movie", {"movie_id": 1}, IMAGE_BASE)
            back = await handle_tool(browser, "back_to_movies", {}, IMAGE_BASE)
            await handle_tool(browser, "select_movie", {"movie_id": 1}, IMAGE_BASE)
            home = await handle_tool(browser, "return_home", {}, IMAGE_BASE)
            return json.loads(back), json.loads(home)

        back, home = asyncio.run(run())

        assert back["view"] == "catalog"
        assert home["view"] == "catalog"
        assert home["search_term"] == ""

    def test_error_is_reported(self, fake_tmdb):
        """Test upstream failures appear in the view state."""
        fake_tmdb.add("discover/movie", status_code=500, json={})
        browser = MovieBrowser(fake_tmdb.service())

        state = json.loads(
            asyncio.run(handle_tool(browser, "browse_movies", {}, IMAGE_BASE))
        )

        assert state["error"] == "Failed to fetch movies."
        assert state["movies"] == []

    def test_unknown_tool(self, fake_tmdb):
        """Test unknown tool names."""
        browser = MovieBrowser(fake_tmdb.service())

        text = asyncio.run(handle_tool(browser, "delete_everything", {}, IMAGE_BASE))

        assert text == "Unknown tool: delete_everything"
