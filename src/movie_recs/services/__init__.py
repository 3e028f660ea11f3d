"""Service layer for TMDb access and view state."""

from .browser import MovieBrowser
from .catalog import CatalogFetcher, RecommendationFetcher
from .enrichment import EnrichmentAggregator
from .tmdb import TMDbRequest, TMDbService

__all__ = [
    "CatalogFetcher",
    "EnrichmentAggregator",
    "MovieBrowser",
    "RecommendationFetcher",
    "TMDbRequest",
    "TMDbService",
]
