"""
Error types for the Movie List Uploader.
Every error carries a user_message that the UI and API show as-is.
"""

from typing import Optional


class MovieUploaderError(Exception):
	"""Base class for all errors raised by this package."""

	default_message = "An unexpected error occurred. Please try again."

	def __init__(self, detail: Optional[str] = None, user_message: Optional[str] = None):
		self.detail = detail or self.default_message  # technical description for logs
		self.user_message = user_message or self.default_message  # text shown to the user
		super().__init__(self.detail)


class ConfigurationError(MovieUploaderError):
	"""Missing or invalid settings (e.g., no TMDb API key)."""

	default_message = "The application is not configured correctly."


class TMDBError(MovieUploaderError):
	"""A TMDb request failed: network error, non-2xx status or malformed payload."""

	default_message = "Error fetching data from TMDb."


class NoTitlesError(MovieUploaderError):
	default_message = "Please upload a file with movie titles."


class BatchResolutionError(MovieUploaderError):
	"""The batch orchestration itself failed, outside of per-title isolation."""

	default_message = "An error occurred while fetching movie data."


class SaveError(MovieUploaderError):
	"""Base class for persistence failures."""


class EmptyCollectionError(SaveError):
	default_message = "No movie data to save."


class RemoteRejectedError(SaveError):
	"""The sink answered with an error status."""

	def __init__(self, status_code: int, message: Optional[str] = None):
		self.status_code = status_code
		self.remote_message = message or "Please try again."
		super().__init__(
			detail=f"Sink rejected the payload with HTTP {status_code}: {self.remote_message}",
			user_message=f"Error saving data: {self.remote_message}",
		)


class NoResponseError(SaveError):
	"""The request went out but no response came back (connection error or timeout)."""

	default_message = "No response from the server. Please check your connection."


class RequestBuildError(SaveError):
	"""The request could not be prepared or sent at all."""

	default_message = "An unexpected error occurred. Please try again."
