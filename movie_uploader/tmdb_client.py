"""
TMDb client module.
Thin wrapper around The Movie Database (TMDb) v3 search and details endpoints.
"""

from typing import Any, Dict, List, Optional

import requests  # HTTP client
from requests.adapters import HTTPAdapter  # connection pool sizing
from loguru import logger  # console logger

from .config import DEFAULT_MAX_WORKERS, DEFAULT_TMDB_BASE_URL, DEFAULT_TMDB_TIMEOUT
from .errors import ConfigurationError, TMDBError


class TMDBClient:
	"""
	Issues the two TMDb calls the resolver needs: title search and details lookup.
	All failures (transport, non-2xx, malformed JSON) surface as TMDBError.
	"""

	def __init__(
		self,
		api_key: Optional[str],
		base_url: str = DEFAULT_TMDB_BASE_URL,
		timeout: float = DEFAULT_TMDB_TIMEOUT,
		session: Optional[requests.Session] = None,
		pool_size: int = DEFAULT_MAX_WORKERS,
	):
		if not api_key:
			raise ConfigurationError(
				"No TMDb API key configured (set TMDB_API_KEY)",
				user_message="TMDb API key is missing. Set TMDB_API_KEY and restart.",
			)
		self.api_key = api_key
		self.base_url = base_url.rstrip("/")
		self.timeout = timeout
		self.session = session or self._build_session(pool_size)  # reuse connections across lookups

	@staticmethod
	def _build_session(pool_size: int) -> requests.Session:
		"""Session shared by all resolver workers, pooling one connection per worker."""
		session = requests.Session()
		adapter = HTTPAdapter(pool_connections=1, pool_maxsize=max(1, pool_size))
		session.mount("https://", adapter)
		session.mount("http://", adapter)
		return session

	def _get(self, path: str, **params) -> Dict[str, Any]:
		"""GET a TMDb path and return its decoded JSON object."""
		params["api_key"] = self.api_key
		url = f"{self.base_url}{path}"
		visible = {k: v for k, v in params.items() if k != "api_key"}  # never log the key
		logger.debug(f"[TMDb] GET {path} params={visible}")

		try:
			resp = self.session.get(url, params=params, timeout=self.timeout)
		except requests.RequestException as e:
			raise TMDBError(f"Request to {path} failed: {e}") from e

		if resp.status_code == 429:
			raise TMDBError(f"TMDb rate limit reached on {path}")
		if not resp.ok:
			raise TMDBError(f"TMDb returned HTTP {resp.status_code} for {path}")

		try:
			payload = resp.json()
		except ValueError as e:
			raise TMDBError(f"TMDb returned invalid JSON for {path}") from e
		if not isinstance(payload, dict):
			raise TMDBError(f"TMDb returned an unexpected payload for {path}")
		return payload

	def search_movie(self, query: str) -> List[Dict[str, Any]]:
		"""Return TMDb's ranked candidates for a free-text title (possibly empty)."""
		payload = self._get("/search/movie", query=query)
		results = payload.get("results")
		if not isinstance(results, list):
			raise TMDBError(f"Search payload for '{query}' has no results list")
		return results

	def get_movie_details(self, movie_id: int) -> Dict[str, Any]:
		"""Return movie details with credits and videos appended in the same call."""
		return self._get(f"/movie/{movie_id}", append_to_response="credits,videos")

	def close(self) -> None:
		self.session.close()
