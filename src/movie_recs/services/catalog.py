"""Catalog listings: popular movies, title search and recommendations."""

import logging

from attrs import define

from ..errors import CatalogFetchFailed
from ..models.tmdb import MovieSummary
from .tmdb import UPSTREAM_ERRORS, TMDbService

logger = logging.getLogger(__name__)

FETCH_MOVIES_FAILED = "Failed to fetch movies."
FETCH_RECOMMENDATIONS_FAILED = "Failed to fetch recommended movies."


@define
class CatalogFetcher:
    """Resolves a browse request into raw movie summaries."""

    tmdb: TMDbService

    async def fetch_popular(self) -> list[MovieSummary]:
        try:
            return await self.tmdb.get_popular()
        except UPSTREAM_ERRORS as exc:
            logger.warning("Popular listing failed: %s", exc)
            raise CatalogFetchFailed(FETCH_MOVIES_FAILED) from exc

    async def fetch_by_search(self, term: str) -> list[MovieSummary]:
        try:
            return await self.tmdb.search_movies(term)
        except UPSTREAM_ERRORS as exc:
            logger.warning("Search for %r failed: %s", term, exc)
            raise CatalogFetchFailed(FETCH_MOVIES_FAILED) from exc

    async def fetch(self, search_term: str = "") -> list[MovieSummary]:
        """Search when a term is given, otherwise list popular movies.

        A non-blank term is sent as typed, surrounding whitespace included.
        """
        if not search_term.strip():
            return await self.fetch_popular()
        return await self.fetch_by_search(search_term)


@define
class RecommendationFetcher:
    """Looks up the movies TMDb recommends for a given movie."""

    tmdb: TMDbService

    async def fetch_recommendations(self, movie_id: int) -> list[MovieSummary]:
        try:
            return await self.tmdb.get_recommendations(movie_id)
        except UPSTREAM_ERRORS as exc:
            logger.warning("Recommendations for movie %s failed: %s", movie_id, exc)
            raise CatalogFetchFailed(FETCH_RECOMMENDATIONS_FAILED) from exc
