"""TMDb data models."""

from attrs import define, field, frozen

POSTER_BASE_URL = "https://image.tmdb.org/t/p/w500"


def require_dict(data, what: str) -> dict:
    """Return ``data`` if it is a JSON object, else raise ValueError."""
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object for {what}, got {type(data).__name__}")
    return data


def require_list(data, what: str) -> list:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array for {what}, got {type(data).__name__}")
    return data


def poster_url(poster_path: str | None, base_url: str = POSTER_BASE_URL) -> str | None:
    """Build a full poster URL, or None when the movie has no poster."""
    if not poster_path:
        return None
    return f"{base_url}{poster_path}"


@frozen
class MovieSummary:
    """Represents a movie as listed by discover, search or recommendations."""

    id: int
    title: str
    poster_path: str | None = None
    release_date: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "MovieSummary":
        data = require_dict(data, "movie")
        movie_id = data["id"]
        if isinstance(movie_id, bool) or not isinstance(movie_id, int):
            raise ValueError(f"Movie id must be an integer, got {movie_id!r}")
        return cls(
            id=movie_id,
            title=data.get("title") or "",
            poster_path=data.get("poster_path"),
            release_date=data.get("release_date") or "",
        )


@frozen
class CreditPerson:
    """A person attached to an enriched movie (director or lead actor)."""

    id: int | None
    name: str


@define
class CrewMember:
    """Represents a crew credit."""

    id: int | None
    name: str
    job: str


@define
class CastMember:
    """Represents a cast credit."""

    id: int | None
    name: str


@define
class Credits:
    """Credits for a single movie, in upstream order."""

    movie_id: int
    crew: list[CrewMember] = field(factory=list)
    cast: list[CastMember] = field(factory=list)

    @classmethod
    def from_api(cls, movie_id: int, data: dict) -> "Credits":
        """Parse a credits payload.

        Person ids and names are optional per entry, and entries that are not
        objects are skipped, so one odd credit never fails the whole movie.
        """
        data = require_dict(data, "credits")
        crew = [c for c in require_list(data.get("crew"), "crew") if isinstance(c, dict)]
        cast = [c for c in require_list(data.get("cast"), "cast") if isinstance(c, dict)]
        return cls(
            movie_id=movie_id,
            crew=[
                CrewMember(id=c.get("id"), name=c.get("name") or "", job=c.get("job") or "")
                for c in crew
            ],
            cast=[CastMember(id=c.get("id"), name=c.get("name") or "") for c in cast],
        )


@frozen
class EnrichedMovie:
    """A movie summary plus its director and lead actor, when known."""

    id: int
    title: str
    poster_path: str | None = None
    release_date: str = ""
    director: CreditPerson | None = None
    lead_actor: CreditPerson | None = None

    @classmethod
    def from_summary(
        cls,
        summary: MovieSummary,
        director: CreditPerson | None = None,
        lead_actor: CreditPerson | None = None,
    ) -> "EnrichedMovie":
        return cls(
            id=summary.id,
            title=summary.title,
            poster_path=summary.poster_path,
            release_date=summary.release_date,
            director=director,
            lead_actor=lead_actor,
        )

    @property
    def poster_url(self) -> str | None:
        return poster_url(self.poster_path)
