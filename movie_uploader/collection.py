"""
In-memory collection of resolved movies for one session.
"""

from typing import Any, Dict, Iterable, Iterator, List

from loguru import logger

from .models import MovieRecord


class MovieCollection:
	"""Ordered list of MovieRecords; records are replaced or removed, never edited."""

	def __init__(self, records: Iterable[MovieRecord] = ()):
		self._records: List[MovieRecord] = list(records)

	def __len__(self) -> int:
		return len(self._records)

	def __iter__(self) -> Iterator[MovieRecord]:
		return iter(list(self._records))  # snapshot so callers can remove while iterating

	def __bool__(self) -> bool:
		return bool(self._records)

	@property
	def records(self) -> List[MovieRecord]:
		return list(self._records)

	def ids(self) -> List[int]:
		return [r.id for r in self._records]

	def replace(self, records: Iterable[MovieRecord]) -> None:
		"""Swap the whole collection for a fresh batch of results."""
		self._records = list(records)

	def remove(self, movie_id: int) -> int:
		"""
		Drop every record with this id and return how many were dropped.
		An unknown id is a no-op that returns 0.
		"""
		before = len(self._records)
		self._records = [r for r in self._records if r.id != movie_id]
		removed = before - len(self._records)
		if removed:
			logger.info(f"[Collection] Removed movie id={movie_id} ({removed} record(s))")
		else:
			logger.debug(f"[Collection] No movie with id={movie_id}; nothing removed")
		return removed

	def to_payload(self) -> List[Dict[str, Any]]:
		"""JSON-ready list of records, in display order."""
		return [r.to_dict() for r in self._records]
