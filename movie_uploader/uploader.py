"""
Session facade.
Holds the state of one upload session (titles + current collection) and exposes the user actions:
load titles, search, remove a movie, save the collection.
"""

from typing import List, Optional, Union

from loguru import logger

from .collection import MovieCollection
from .config import Settings
from .errors import BatchResolutionError, MovieUploaderError, NoTitlesError
from .ingestion import TitleListLoader
from .models import ResolutionReport, SaveResult
from .persistence import CollectionSaver
from .resolver import MovieResolver
from .tmdb_client import TMDBClient


class MovieUploader:
	"""
	High-level API used by the Streamlit page, the HTTP API and the CLI script.
	One instance per user session; nothing is shared between sessions.
	"""
	def __init__(
		self,
		resolver: MovieResolver,
		saver: CollectionSaver,
		loader: Optional[TitleListLoader] = None,
	):
		self.resolver = resolver  # title -> record pipeline
		self.saver = saver  # persistence sink client
		self.loader = loader or TitleListLoader()  # upload parser
		self.titles: List[str] = []  # queries from the last upload
		self.collection = MovieCollection()  # current results
		self.last_report: Optional[ResolutionReport] = None  # outcome of the last search
		self.upload_id: Optional[str] = None  # id of the upload the titles came from

	@classmethod
	def from_settings(cls, settings: Settings) -> "MovieUploader":
		"""Wire real TMDb and sink clients from settings."""
		client = TMDBClient(
			api_key=settings.tmdb_api_key,
			base_url=settings.tmdb_base_url,
			timeout=settings.tmdb_timeout,
			pool_size=settings.max_workers,
		)
		resolver = MovieResolver(
			client,
			poster_base_url=settings.tmdb_image_base_url,
			max_workers=settings.max_workers,
		)
		saver = CollectionSaver(endpoint=settings.save_endpoint, timeout=settings.save_timeout)
		return cls(resolver, saver)

	def load_titles(self, content: Union[str, bytes]) -> List[str]:
		"""Replace the title list with the lines of a new upload; previous results are cleared."""
		self.titles = self.loader.load_titles(content)
		self.collection.replace([])
		self.last_report = None
		return list(self.titles)

	def load_upload(self, upload_id: str, content: Union[str, bytes]) -> bool:
		"""
		Load an uploaded file unless it is the one already loaded.
		The UI reruns on every click, so the same upload is offered again and must not reset the results.
		"""
		if upload_id == self.upload_id:
			return False
		self.load_titles(content)
		self.upload_id = upload_id
		return True

	def search(self) -> ResolutionReport:
		"""
		Resolve all loaded titles and replace the collection with the results.
		Per-title failures are in the report; only an orchestration failure raises.
		"""
		if not self.titles:
			logger.warning("[Uploader] Search requested without any titles")
			raise NoTitlesError()

		try:
			report = self.resolver.resolve_all(self.titles)
		except MovieUploaderError:
			raise
		except Exception as e:
			logger.exception("[Uploader] Error during data fetch process")
			raise BatchResolutionError(str(e)) from e

		self.collection.replace(report.records)
		self.last_report = report
		return report

	def remove(self, movie_id: int) -> int:
		return self.collection.remove(movie_id)

	def save(self) -> SaveResult:
		return self.saver.save(self.collection.records)

	def close(self) -> None:
		"""Release the HTTP connections held by the TMDb and sink clients."""
		self.resolver.client.close()
		self.saver.close()
