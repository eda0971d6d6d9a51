"""
Data models for the Movie List Uploader.
Defines the core data structures passed between ingestion, resolution and persistence.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field, asdict  # auto-generates __init__, __repr__, etc.
# Import typing helpers for precise and self-documenting types
from typing import Any, Dict, List, Optional  # lists, dicts and optional values


@dataclass(frozen=True)
class MovieRecord:
	"""
	A movie title resolved against TMDb and flattened into displayable fields.
	Optional fields are None when the source has nothing for them.
	"""
	id: int  # TMDb identifier assigned by the source
	title: str  # movie title as returned by the details call
	overview: str  # synopsis text (may be empty)
	actors: List[str]  # first five cast names in billing order
	genres: List[str]  # genre names (e.g., ["Drama", "War"])
	poster_url: Optional[str] = None  # absolute poster image URL
	release_date: Optional[str] = None  # 'YYYY-MM-DD' as returned by TMDb
	rating: Optional[float] = None  # average user vote on a 0-10 scale
	trailer_key: Optional[str] = None  # video key of the first trailer
	director: Optional[str] = None  # first crew member credited as Director
	runtime: Optional[int] = None  # runtime in minutes

	def to_dict(self) -> Dict[str, Any]:
		"""Return a JSON-ready dict; missing optional fields stay as None (null)."""
		return asdict(self)


@dataclass
class ResolutionFailure:
	"""A query whose lookup raised an error; kept so the caller can report it."""
	query: str  # the title line that failed
	reason: str  # short human-readable description of the error


@dataclass
class ResolutionReport:
	"""
	Outcome of resolving one batch of queries.
	Records keep the original query order with dropped queries filtered out.
	"""
	records: List[MovieRecord] = field(default_factory=list)  # resolved movies
	not_found: List[str] = field(default_factory=list)  # queries with zero search candidates
	failures: List[ResolutionFailure] = field(default_factory=list)  # isolated per-query errors

	@property
	def total(self) -> int:
		"""Number of queries that went into the batch."""
		return len(self.records) + len(self.not_found) + len(self.failures)


@dataclass
class SaveResult:
	"""Response of a successful submission to the persistence sink."""
	status_code: int  # HTTP status returned by the sink
	body: Any = None  # decoded JSON body, or raw text when the body is not JSON
