"""Browse, search and recommendation navigation for a single user view."""

import itertools
import logging
from collections.abc import Callable

from attrs import define, field

from ..errors import MovieRecsError
from ..models.state import (
    Browsing,
    Failed,
    Idle,
    Loaded,
    Loading,
    NavigationState,
    QueryState,
    ViewState,
    Viewing,
    visible_movies,
)
from ..models.tmdb import EnrichedMovie
from .catalog import (
    FETCH_MOVIES_FAILED,
    FETCH_RECOMMENDATIONS_FAILED,
    CatalogFetcher,
    RecommendationFetcher,
)
from .enrichment import EnrichmentAggregator
from .tmdb import TMDbService

logger = logging.getLogger(__name__)

CATALOG = "catalog"
RECOMMENDATIONS = "recommendations"

Listener = Callable[["MovieBrowser"], None]


@define
class MovieBrowser:
    """State holder consumed by a presentation layer.

    Every public operation returns the movies to show and never raises for
    upstream failures; those become the ``error`` signal instead. Each fetch
    takes a token from a monotonic counter and only the latest token for a
    view may write to it, so a slow earlier search cannot overwrite a newer
    one.
    """

    tmdb: TMDbService
    catalog_fetcher: CatalogFetcher = field(init=False)
    recommendation_fetcher: RecommendationFetcher = field(init=False)
    aggregator: EnrichmentAggregator = field(init=False)
    navigation: NavigationState = field(factory=Browsing, init=False)
    catalog: ViewState = field(factory=Idle, init=False)
    recommendations: ViewState = field(factory=Idle, init=False)
    search_term: str = field(default="", init=False)
    _tokens: itertools.count = field(factory=itertools.count, init=False)
    _latest: dict[str, int] = field(factory=dict, init=False)
    _listeners: list[Listener] = field(factory=list, init=False)

    def __attrs_post_init__(self) -> None:
        self.catalog_fetcher = CatalogFetcher(self.tmdb)
        self.recommendation_fetcher = RecommendationFetcher(self.tmdb)
        self.aggregator = EnrichmentAggregator(self.tmdb)

    async def close(self) -> None:
        await self.tmdb.close()

    # Signals

    @property
    def loading(self) -> bool:
        return isinstance(self.catalog, Loading) or isinstance(
            self.recommendations, Loading
        )

    @property
    def error(self) -> str | None:
        """Failure message of the view currently on screen, if any."""
        state = self._active_state()
        if isinstance(state, Failed):
            return state.message
        return None

    @property
    def query(self) -> QueryState:
        return QueryState(
            search_term=self.search_term, loading=self.loading, error=self.error
        )

    @property
    def catalog_movies(self) -> list[EnrichedMovie]:
        return visible_movies(self.catalog)

    @property
    def recommendation_movies(self) -> list[EnrichedMovie]:
        return visible_movies(self.recommendations)

    @property
    def selected(self) -> EnrichedMovie | None:
        if isinstance(self.navigation, Viewing):
            return self.navigation.selected
        return None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every state change; returns an unsubscriber."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Operations

    async def get_catalog(self, search_term: str = "") -> list[EnrichedMovie]:
        """Load popular movies, or search results when a term is given.

        Browsing always leaves any selected movie, so the results are what
        ends up on screen.
        """
        self._clear_selection()
        self.search_term = search_term
        token = self._start(CATALOG)
        try:
            summaries = await self.catalog_fetcher.fetch(search_term)
            movies = await self.aggregator.enrich_or_raise(summaries)
        except MovieRecsError as exc:
            logger.warning("Catalog fetch for %r failed: %s", search_term, exc)
            self._settle(CATALOG, token, Failed(FETCH_MOVIES_FAILED))
            return self.catalog_movies

        self._settle(CATALOG, token, Loaded(movies))
        return self.catalog_movies

    async def select_movie(self, movie: EnrichedMovie) -> list[EnrichedMovie]:
        """Show recommendations for ``movie``.

        Any previous recommendations are dropped as soon as the selection
        changes. On failure the selection stays and the error is set.
        """
        self.navigation = Viewing(selected=movie)
        token = self._start(RECOMMENDATIONS)
        try:
            summaries = await self.recommendation_fetcher.fetch_recommendations(
                movie.id
            )
            recommendations = await self.aggregator.enrich_or_raise(summaries)
        except MovieRecsError as exc:
            logger.warning("Recommendations for %s failed: %s", movie.id, exc)
            self._settle(RECOMMENDATIONS, token, Failed(FETCH_RECOMMENDATIONS_FAILED))
            return self.recommendation_movies

        if self._is_current(RECOMMENDATIONS, token):
            self.navigation = Viewing(selected=movie, recommendations=recommendations)
        self._settle(RECOMMENDATIONS, token, Loaded(recommendations))
        return self.recommendation_movies

    def back_to_movies(self) -> list[EnrichedMovie]:
        """Leave the recommendation grid and show the catalog as it was."""
        self._clear_selection()
        self._notify()
        return self.catalog_movies

    async def return_home(self) -> list[EnrichedMovie]:
        """Leave the recommendation grid and reload the popular catalog."""
        return await self.get_catalog("")

    def find_visible(self, movie_id: int) -> EnrichedMovie | None:
        """Look up a movie on the current screen by its TMDb id."""
        if isinstance(self.navigation, Viewing):
            candidates = [self.navigation.selected, *self.recommendation_movies]
        else:
            candidates = self.catalog_movies
        return next((m for m in candidates if m.id == movie_id), None)

    # Internals

    def _active_state(self) -> ViewState:
        if isinstance(self.navigation, Viewing):
            return self.recommendations
        return self.catalog

    def _start(self, view: str) -> int:
        token = next(self._tokens)
        self._latest[view] = token
        setattr(self, view, Loading(token))
        self._notify()
        return token

    def _is_current(self, view: str, token: int) -> bool:
        return self._latest.get(view) == token

    def _settle(self, view: str, token: int, state: ViewState) -> bool:
        """Apply the outcome of fetch ``token`` unless a newer one superseded it."""
        if not self._is_current(view, token):
            logger.debug("Discarding superseded %s response (token %d)", view, token)
            return False
        setattr(self, view, state)
        self._notify()
        return True

    def _clear_selection(self) -> None:
        # Invalidate any in-flight recommendation fetch.
        self._latest[RECOMMENDATIONS] = next(self._tokens)
        self.navigation = Browsing()
        self.recommendations = Idle()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
