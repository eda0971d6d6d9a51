"""
Persistence module.
Submits the final movie collection to the remote sink as one JSON POST.
"""

from typing import Any, Optional, Sequence

import requests  # HTTP client
from loguru import logger  # console logger

from .config import DEFAULT_SAVE_ENDPOINT, DEFAULT_SAVE_TIMEOUT
from .errors import EmptyCollectionError, NoResponseError, RemoteRejectedError, RequestBuildError
from .models import MovieRecord, SaveResult


class CollectionSaver:
	"""
	Sends the whole collection in a single request with a fixed timeout.
	No retry, no chunking; failures are classified into three SaveError types.
	"""

	def __init__(
		self,
		endpoint: str = DEFAULT_SAVE_ENDPOINT,
		timeout: float = DEFAULT_SAVE_TIMEOUT,
		session: Optional[requests.Session] = None,
	):
		self.endpoint = endpoint  # sink URL
		self.timeout = timeout  # seconds
		self.session = session or requests.Session()

	def save(self, records: Sequence[MovieRecord]) -> SaveResult:
		"""POST every record; raise a SaveError subclass on any failure."""
		# Empty collections are rejected locally before any network call
		if not records:
			logger.warning("[Saver] Nothing to save; request not sent")
			raise EmptyCollectionError()

		payload = [r.to_dict() for r in records]
		logger.info(f"[Saver] Saving {len(payload)} movies to {self.endpoint}")

		try:
			resp = self.session.post(self.endpoint, json=payload, timeout=self.timeout)
		except (requests.ConnectionError, requests.Timeout) as e:
			# Request went out (or tried to) but nothing came back
			logger.error(f"[Saver] No response from {self.endpoint}: {e}")
			raise NoResponseError(str(e)) from e
		except (requests.RequestException, TypeError, ValueError) as e:
			# Bad URL, unserialisable payload and similar: the request never left
			logger.error(f"[Saver] Could not send request to {self.endpoint}: {e}")
			raise RequestBuildError(str(e)) from e

		body = _decode_body(resp)
		if not resp.ok:
			message = body.get("message") if isinstance(body, dict) else None
			logger.error(f"[Saver] Sink rejected the payload: HTTP {resp.status_code} {message or ''}".rstrip())
			raise RemoteRejectedError(resp.status_code, message)

		logger.info(f"[Saver] Data saved successfully (HTTP {resp.status_code})")
		logger.debug(f"[Saver] Response: {body}")
		return SaveResult(status_code=resp.status_code, body=body)

	def close(self) -> None:
		self.session.close()


def _decode_body(resp: requests.Response) -> Any:
	try:
		return resp.json()
	except ValueError:
		return resp.text or None
