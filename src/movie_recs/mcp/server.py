"""MCP server exposing movie browsing and recommendations."""

import asyncio
import json
import logging
import sys

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from ..config import Settings, get_settings
from ..models.state import Viewing
from ..models.tmdb import CreditPerson, EnrichedMovie, poster_url
from ..services.browser import MovieBrowser
from ..services.tmdb import TMDbService

logger = logging.getLogger(__name__)


def person_to_dict(person: CreditPerson | None) -> dict | None:
    if person is None:
        return None
    return {"id": person.id, "name": person.name}


def movie_to_dict(movie: EnrichedMovie, image_base_url: str) -> dict:
    """Serialize an enriched movie for tool output."""
    return {
        "id": movie.id,
        "title": movie.title,
        "release_date": movie.release_date,
        "poster_url": poster_url(movie.poster_path, image_base_url),
        "director": person_to_dict(movie.director),
        "lead_actor": person_to_dict(movie.lead_actor),
    }


def view_to_dict(browser: MovieBrowser, image_base_url: str) -> dict:
    """Describe what a client should currently render."""
    query = browser.query
    result = {
        "search_term": query.search_term,
        "loading": query.loading,
        "error": query.error,
    }
    if isinstance(browser.navigation, Viewing):
        result["view"] = "recommendations"
        result["selected"] = movie_to_dict(browser.navigation.selected, image_base_url)
        movies = browser.recommendation_movies
    else:
        result["view"] = "catalog"
        movies = browser.catalog_movies
    result["movies"] = [movie_to_dict(m, image_base_url) for m in movies]
    return result


def create_browser(settings: Settings) -> MovieBrowser:
    tmdb = TMDbService(
        api_key=settings.tmdb_api_key,
        language=settings.language,
        base_url=settings.tmdb_base_url,
        timeout=settings.timeout,
    )
    return MovieBrowser(tmdb)


async def handle_tool(
    browser: MovieBrowser, name: str, arguments: dict, image_base_url: str
) -> str:
    """Run one tool call against the browser and return its JSON text."""
    if name == "browse_movies":
        await browser.get_catalog(arguments.get("search_term") or "")

    elif name == "select_movie":
        movie_id = int(arguments["movie_id"])
        movie = browser.find_visible(movie_id)
        if movie is None:
            return f"Movie {movie_id} is not on screen"
        await browser.select_movie(movie)

    elif name == "back_to_movies":
        browser.back_to_movies()

    elif name == "return_home":
        await browser.return_home()

    elif name == "get_view_state":
        pass

    else:
        return f"Unknown tool: {name}"

    return json.dumps(view_to_dict(browser, image_base_url), indent=2)


def create_mcp_server() -> Server:
    """Create and configure the MCP server."""
    server = Server("movie-recs")
    settings = get_settings()
    browser = create_browser(settings)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(
                name="browse_movies",
                description="Show popular movies, or search by title when a search term is given. Each movie includes its director and lead actor.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "search_term": {
                            "type": "string",
                            "description": "Movie title to search for (empty for popular movies)",
                        },
                    },
                },
            ),
            Tool(
                name="select_movie",
                description="Select a movie on screen and show movies recommended for it",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "movie_id": {
                            "type": "integer",
                            "description": "TMDb ID of a movie currently on screen",
                        },
                    },
                    "required": ["movie_id"],
                },
            ),
            Tool(
                name="back_to_movies",
                description="Leave the recommendations and show the last movie list again",
                inputSchema={
                    "type": "object",
                    "properties": {},
                },
            ),
            Tool(
                name="return_home",
                description="Clear the selection and search, and reload popular movies",
                inputSchema={
                    "type": "object",
                    "properties": {},
                },
            ),
            Tool(
                name="get_view_state",
                description="Get the movies currently on screen with loading and error status",
                inputSchema={
                    "type": "object",
                    "properties": {},
                },
            ),
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[TextContent]:
        try:
            text = await handle_tool(
                browser, name, arguments or {}, settings.image_base_url
            )
            return [TextContent(type="text", text=text)]
        except Exception as e:
            logger.exception("Tool %s failed", name)
            return [TextContent(type="text", text=f"Error: {str(e)}")]

    return server


async def main():
    """Run the MCP server."""
    settings = get_settings()
    # stdout carries the protocol
    logging.basicConfig(
        stream=sys.stderr,
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    server = create_mcp_server()
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
