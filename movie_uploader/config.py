"""
Runtime settings.
Values come from environment variables, optionally loaded from a local .env file.
"""

import os  # environment access
from dataclasses import dataclass  # settings container
from pathlib import Path  # locate the .env file
from typing import Optional  # the API key may be absent

from dotenv import load_dotenv  # read KEY=VALUE pairs from .env into os.environ

from .errors import ConfigurationError

# Defaults match the public TMDb endpoints and the placeholder persistence sink
DEFAULT_TMDB_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"
DEFAULT_SAVE_ENDPOINT = "https://dummyendpoint.com/save"
DEFAULT_TMDB_TIMEOUT = 10.0  # seconds per TMDb request
DEFAULT_SAVE_TIMEOUT = 5.0  # seconds for the single save request
DEFAULT_MAX_WORKERS = 8  # concurrent title lookups in flight


@dataclass(frozen=True)
class Settings:
	tmdb_api_key: Optional[str] = None
	tmdb_base_url: str = DEFAULT_TMDB_BASE_URL
	tmdb_image_base_url: str = DEFAULT_TMDB_IMAGE_BASE_URL
	tmdb_timeout: float = DEFAULT_TMDB_TIMEOUT
	max_workers: int = DEFAULT_MAX_WORKERS
	save_endpoint: str = DEFAULT_SAVE_ENDPOINT
	save_timeout: float = DEFAULT_SAVE_TIMEOUT

	@classmethod
	def from_env(cls, env_file: Optional[str] = None) -> "Settings":
		"""
		Build settings from the process environment.
		A .env file (explicit path, or ./.env) is loaded first without overriding real variables.
		"""
		dotenv_path = Path(env_file) if env_file else Path.cwd() / ".env"
		if dotenv_path.exists():
			load_dotenv(dotenv_path, override=False)

		return cls(
			tmdb_api_key=os.getenv("TMDB_API_KEY") or None,
			tmdb_base_url=os.getenv("TMDB_BASE_URL", DEFAULT_TMDB_BASE_URL).rstrip("/"),
			tmdb_image_base_url=os.getenv("TMDB_IMAGE_BASE_URL", DEFAULT_TMDB_IMAGE_BASE_URL).rstrip("/"),
			tmdb_timeout=_read_positive("TMDB_TIMEOUT", DEFAULT_TMDB_TIMEOUT, float),
			max_workers=_read_positive("RESOLVER_MAX_WORKERS", DEFAULT_MAX_WORKERS, int),
			save_endpoint=os.getenv("SAVE_ENDPOINT", DEFAULT_SAVE_ENDPOINT),
			save_timeout=_read_positive("SAVE_TIMEOUT", DEFAULT_SAVE_TIMEOUT, float),
		)


def _read_positive(name: str, default, cast):
	"""Read a number that must be greater than zero (timeouts, worker counts)."""
	raw = os.getenv(name)
	if raw is None or not raw.strip():
		return default
	try:
		value = cast(raw.strip())
	except ValueError as e:
		raise ConfigurationError(f"Invalid value for {name}: {raw!r}") from e
	if not value > 0:  # also rejects nan
		raise ConfigurationError(f"{name} must be greater than 0, got {raw!r}")
	return value
