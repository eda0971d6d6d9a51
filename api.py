"""
FastAPI server exposing the movie list resolver.
Endpoints:
- GET /health: basic health check
- POST /resolve: resolve a title list (raw text or JSON list) into movie records
- POST /save: forward a list of records to the persistence sink

Settings (TMDB_API_KEY, SAVE_ENDPOINT, ...) are read from the environment / .env on each request.
"""

# Import standard libraries for timing
import time  # measure request latencies
from typing import Iterator, List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for request/response models
from fastapi import Depends, FastAPI, HTTPException  # FastAPI primitives
from pydantic import BaseModel  # request/response schema definitions

# Import our internal modules
from movie_uploader.config import Settings  # env configuration
from movie_uploader.errors import (
	EmptyCollectionError,
	MovieUploaderError,
	NoResponseError,
	NoTitlesError,
	RemoteRejectedError,
)
from movie_uploader.models import MovieRecord  # resolved movie
from movie_uploader.persistence import CollectionSaver  # sink client
from movie_uploader.uploader import MovieUploader  # session facade

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Movie List Uploader API", version="1.0.0")  # web app


# Pydantic model that describes the shape of a single movie in requests/responses
class MovieOut(BaseModel):
	id: int  # TMDb id
	title: str  # human-readable title
	overview: str = ""  # synopsis
	actors: List[str] = []  # first five cast names
	genres: List[str] = []  # genre names
	poster_url: Optional[str] = None  # absolute poster URL
	release_date: Optional[str] = None  # YYYY-MM-DD
	rating: Optional[float] = None  # 0..10
	trailer_key: Optional[str] = None  # YouTube key
	director: Optional[str] = None  # director name
	runtime: Optional[int] = None  # minutes


class ResolveRequest(BaseModel):
	text: Optional[str] = None  # raw uploaded text, one title per line
	titles: Optional[List[str]] = None  # or an explicit list of titles


class FailureOut(BaseModel):
	query: str  # title that failed
	reason: str  # error description


class ResolveResponse(BaseModel):
	titles: List[str]  # parsed queries
	elapsed_ms: float  # server-side resolution time in ms
	results: List[MovieOut]  # resolved records, in query order
	not_found: List[str]  # queries TMDb had no match for
	failures: List[FailureOut]  # queries whose lookup failed


class SaveRequest(BaseModel):
	movies: List[MovieOut]  # collection to persist


class SaveResponse(BaseModel):
	saved: int  # number of records sent
	status_code: int  # status returned by the sink


def get_settings() -> Settings:
	"""Dependency: read settings once per request (env lookups only)."""
	try:
		return Settings.from_env()
	except MovieUploaderError as e:
		logger.error(f"[API] Invalid settings: {e.detail}")
		raise HTTPException(status_code=500, detail=e.user_message)


def get_uploader(settings: Settings = Depends(get_settings)) -> Iterator[MovieUploader]:
	"""Dependency: a fresh session per request, closed once the request is done."""
	try:
		uploader = MovieUploader.from_settings(settings)
	except MovieUploaderError as e:
		logger.error(f"[API] Cannot build uploader: {e.detail}")
		raise HTTPException(status_code=500, detail=e.user_message)
	try:
		yield uploader
	finally:
		uploader.close()  # release TMDb and sink connections


def get_saver(settings: Settings = Depends(get_settings)) -> Iterator[CollectionSaver]:
	"""Dependency: sink client; saving does not need a TMDb key."""
	saver = CollectionSaver(endpoint=settings.save_endpoint, timeout=settings.save_timeout)
	try:
		yield saver
	finally:
		saver.close()


def _to_out(record: MovieRecord) -> MovieOut:
	return MovieOut(**record.to_dict())


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {"status": "ok"}


@app.post("/resolve", response_model=ResolveResponse)
def resolve(body: ResolveRequest, uploader: MovieUploader = Depends(get_uploader)):
	"""Parse the titles and resolve each one against TMDb."""
	# An explicit list goes through the same trimming as uploaded text
	content = body.text if body.text is not None else "\n".join(body.titles or [])
	titles = uploader.load_titles(content)

	start = time.time()  # start timer
	try:
		report = uploader.search()  # concurrent lookups
	except NoTitlesError as e:
		raise HTTPException(status_code=400, detail=e.user_message)
	except MovieUploaderError as e:
		logger.error(f"[API] /resolve failed: {e.detail}")
		raise HTTPException(status_code=500, detail=e.user_message)
	elapsed_ms = (time.time() - start) * 1000  # compute ms
	logger.info(f"[API] /resolve served {len(report.records)} of {len(titles)} titles in {elapsed_ms:.2f} ms")

	return ResolveResponse(
		titles=titles,
		elapsed_ms=round(elapsed_ms, 2),
		results=[_to_out(r) for r in report.records],
		not_found=report.not_found,
		failures=[FailureOut(query=f.query, reason=f.reason) for f in report.failures],
	)


@app.post("/save", response_model=SaveResponse)
def save(body: SaveRequest, saver: CollectionSaver = Depends(get_saver)):
	"""Send the posted records to the sink in one request."""
	records = [MovieRecord(**m.model_dump()) for m in body.movies]
	try:
		result = saver.save(records)
	except EmptyCollectionError as e:
		raise HTTPException(status_code=400, detail=e.user_message)
	except RemoteRejectedError as e:
		raise HTTPException(status_code=502, detail=e.user_message)
	except NoResponseError as e:
		raise HTTPException(status_code=504, detail=e.user_message)
	except MovieUploaderError as e:
		raise HTTPException(status_code=500, detail=e.user_message)
	return SaveResponse(saved=len(body.movies), status_code=result.status_code)
