"""Data models for Movie Recs."""

from .state import (
    AggregateResult,
    Browsing,
    Err,
    Failed,
    Idle,
    Loaded,
    Loading,
    NavigationState,
    Ok,
    QueryState,
    ViewState,
    Viewing,
)
from .tmdb import (
    CastMember,
    CreditPerson,
    Credits,
    CrewMember,
    EnrichedMovie,
    MovieSummary,
)

__all__ = [
    "AggregateResult",
    "Browsing",
    "CastMember",
    "CreditPerson",
    "Credits",
    "CrewMember",
    "EnrichedMovie",
    "Err",
    "Failed",
    "Idle",
    "Loaded",
    "Loading",
    "MovieSummary",
    "NavigationState",
    "Ok",
    "QueryState",
    "ViewState",
    "Viewing",
]
