"""Errors raised by the movie services."""


class MovieRecsError(Exception):
    """Base error; ``str(error)`` is safe to show to a user."""


class CatalogFetchFailed(MovieRecsError):
    """A popular, search or recommendation listing could not be fetched."""


class EnrichmentFailed(MovieRecsError):
    """At least one credits lookup in an aggregation run failed."""
