"""Director and lead actor enrichment for lists of movie summaries."""

import asyncio
import logging

from attrs import define

from ..errors import EnrichmentFailed
from ..models.state import AggregateResult, Err, Ok
from ..models.tmdb import Credits, CreditPerson, EnrichedMovie, MovieSummary
from .tmdb import UPSTREAM_ERRORS, TMDbService

logger = logging.getLogger(__name__)

DIRECTOR_JOB = "Director"


def extract_director(credits: Credits) -> CreditPerson | None:
    """First crew member whose job is Director; any others are ignored."""
    for member in credits.crew:
        if member.job == DIRECTOR_JOB:
            return CreditPerson(id=member.id, name=member.name)
    return None


def extract_lead_actor(credits: Credits) -> CreditPerson | None:
    """First cast entry.

    TMDb normally returns cast in billing order, but that is not checked here.
    """
    if not credits.cast:
        return None
    lead = credits.cast[0]
    return CreditPerson(id=lead.id, name=lead.name)


def merge_credits(summary: MovieSummary, credits: Credits) -> EnrichedMovie:
    return EnrichedMovie.from_summary(
        summary,
        director=extract_director(credits),
        lead_actor=extract_lead_actor(credits),
    )


@define
class EnrichmentAggregator:
    """Attaches credits to every movie in a list, all or nothing.

    Credits lookups run concurrently. If any one fails, the others are
    cancelled and the whole run fails; output order always matches input
    order regardless of completion order.
    """

    tmdb: TMDbService

    async def _enrich_one(self, summary: MovieSummary) -> EnrichedMovie:
        credits = await self.tmdb.get_credits(summary.id)
        return merge_credits(summary, credits)

    async def enrich(self, summaries: list[MovieSummary]) -> AggregateResult:
        if not summaries:
            return Ok()

        try:
            async with asyncio.TaskGroup() as tg:
                tasks = [tg.create_task(self._enrich_one(s)) for s in summaries]
        except ExceptionGroup as group:
            failures, unexpected = group.split(UPSTREAM_ERRORS)
            if unexpected is not None:
                raise unexpected
            first = failures.exceptions[0]
            logger.warning(
                "Enrichment of %d movies failed (%d lookup errors): %s",
                len(summaries),
                len(failures.exceptions),
                first,
            )
            return Err(reason=f"Credits lookup failed: {first}")

        return Ok(task.result() for task in tasks)

    async def enrich_or_raise(self, summaries: list[MovieSummary]) -> list[EnrichedMovie]:
        """Like ``enrich`` but raises EnrichmentFailed instead of returning Err."""
        result = await self.enrich(summaries)
        if isinstance(result, Err):
            raise EnrichmentFailed(result.reason)
        return list(result.movies)
