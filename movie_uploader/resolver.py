"""
Resolution module.
Resolves title queries into MovieRecords via TMDb search + details, one query at a time
or as a concurrent batch with per-query error isolation.
"""

from concurrent.futures import ThreadPoolExecutor  # bounded worker pool
from typing import Any, Dict, List, Optional, Sequence

from loguru import logger

from .config import DEFAULT_MAX_WORKERS, DEFAULT_TMDB_IMAGE_BASE_URL
from .errors import TMDBError
from .models import MovieRecord, ResolutionFailure, ResolutionReport
from .tmdb_client import TMDBClient

MAX_ACTORS = 5  # cast names kept per record

# Outcome markers used while collecting batch results
_FOUND = "found"
_NOT_FOUND = "not_found"
_FAILED = "failed"


def build_record(details: Dict[str, Any], poster_base_url: str = DEFAULT_TMDB_IMAGE_BASE_URL) -> MovieRecord:
	"""
	Flatten a TMDb details payload (with credits and videos appended) into a MovieRecord.
	Raises TMDBError when the payload lacks an id or a title.
	"""
	movie_id = details.get("id")
	title = details.get("title")
	if movie_id is None or not title:
		raise TMDBError(f"Details payload is missing id or title: id={movie_id!r}")

	credits = details.get("credits") or {}
	videos = (details.get("videos") or {}).get("results") or []

	# Cast arrives in billing order; keep the first few names
	actors = [c["name"] for c in (credits.get("cast") or [])[:MAX_ACTORS] if c.get("name")]
	genres = [g["name"] for g in (details.get("genres") or []) if g.get("name")]

	director = next(
		(p.get("name") for p in (credits.get("crew") or []) if p.get("job") == "Director"),
		None,
	)
	trailer_key = next(
		(v.get("key") for v in videos if v.get("type") == "Trailer"),
		None,
	)

	poster_path = details.get("poster_path")
	poster_url = f"{poster_base_url.rstrip('/')}{poster_path}" if poster_path else None

	rating = details.get("vote_average")
	runtime = details.get("runtime")

	return MovieRecord(
		id=int(movie_id),
		title=title,
		overview=details.get("overview") or "",
		actors=actors,
		genres=genres,
		poster_url=poster_url,
		release_date=details.get("release_date") or None,
		rating=float(rating) if rating is not None else None,
		trailer_key=trailer_key,
		director=director,
		runtime=int(runtime) if runtime else None,
	)


class MovieResolver:
	"""
	Two-step TMDb resolution: search by title, take the first candidate, fetch its details.
	Batches run on a bounded thread pool so large lists never fan out without limit.
	"""
	def __init__(
		self,
		client: TMDBClient,
		poster_base_url: str = DEFAULT_TMDB_IMAGE_BASE_URL,
		max_workers: int = DEFAULT_MAX_WORKERS,
	):
		self.client = client  # TMDb API wrapper
		self.poster_base_url = poster_base_url  # prefix for poster paths
		self.max_workers = max(1, int(max_workers))  # at least one worker

	def resolve_title(self, query: str) -> Optional[MovieRecord]:
		"""
		Resolve a single query. Returns None when TMDb has no candidate for it.
		Errors propagate; batch isolation happens in resolve_all.
		"""
		candidates = self.client.search_movie(query)
		if not candidates:
			logger.debug(f"[Resolver] No candidates for '{query}'")
			return None

		# TMDb's own ranking decides; no local re-ranking
		first = candidates[0]
		movie_id = first.get("id") if isinstance(first, dict) else None
		if movie_id is None:
			raise TMDBError(f"Search candidate for '{query}' has no id")
		logger.debug(f"[Resolver] '{query}' -> TMDb id {movie_id}")

		details = self.client.get_movie_details(movie_id)
		return build_record(details, self.poster_base_url)

	def _resolve_isolated(self, query: str):
		"""Run resolve_title and turn any exception into a failure outcome for this query only."""
		try:
			record = self.resolve_title(query)
		except Exception as e:
			logger.error(f"[Resolver] Error fetching data for \"{query}\": {e}")
			return _FAILED, ResolutionFailure(query=query, reason=str(e))
		if record is None:
			return _NOT_FOUND, query
		return _FOUND, record

	def resolve_all(self, queries: Sequence[str]) -> ResolutionReport:
		"""
		Resolve every query concurrently and wait for all of them to settle.
		Records come back in query order with not-found and failed queries filtered out.
		"""
		report = ResolutionReport()
		if not queries:
			return report

		workers = min(self.max_workers, len(queries))
		logger.info(f"[Resolver] Resolving {len(queries)} titles with {workers} workers")

		# map() yields in submission order regardless of completion order
		with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="resolver") as executor:
			outcomes: List = list(executor.map(self._resolve_isolated, queries))

		for kind, value in outcomes:
			if kind == _FOUND:
				report.records.append(value)
			elif kind == _NOT_FOUND:
				report.not_found.append(value)
			else:
				report.failures.append(value)

		logger.info(
			f"[Resolver] Resolved {len(report.records)} of {len(queries)} titles "
			f"({len(report.not_found)} not found, {len(report.failures)} failed)"
		)
		return report
