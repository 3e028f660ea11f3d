"""View and navigation state models.

Each logical view (the catalog grid and the recommendation grid) is held as a
single tagged value instead of separate loading/error/data flags, so a view is
never both loading and showing a failure at once.
"""

from attrs import field, frozen

from .tmdb import EnrichedMovie


def _to_tuple(movies) -> tuple[EnrichedMovie, ...]:
    return tuple(movies)


@frozen
class Idle:
    """Nothing has been requested for this view yet."""


@frozen
class Loading:
    """A fetch carrying ``token`` is outstanding."""

    token: int


@frozen
class Loaded:
    movies: tuple[EnrichedMovie, ...] = field(default=(), converter=_to_tuple)


@frozen
class Failed:
    """The latest fetch failed; the error replaces the whole view."""

    message: str


ViewState = Idle | Loading | Loaded | Failed


def visible_movies(state: ViewState) -> list[EnrichedMovie]:
    """Movies a view should render for the given state."""
    if isinstance(state, Loaded):
        return list(state.movies)
    return []


@frozen
class Browsing:
    """Showing the base catalog."""


@frozen
class Viewing:
    """Showing recommendations derived from ``selected``."""

    selected: EnrichedMovie
    recommendations: tuple[EnrichedMovie, ...] = field(
        default=(), converter=_to_tuple
    )


NavigationState = Browsing | Viewing


@frozen
class QueryState:
    search_term: str = ""
    loading: bool = False
    error: str | None = None


@frozen
class Ok:
    """Every enrichment in an aggregation run succeeded."""

    movies: tuple[EnrichedMovie, ...] = field(default=(), converter=_to_tuple)


@frozen
class Err:
    """An aggregation run failed; no partial results are kept."""

    reason: str


AggregateResult = Ok | Err
