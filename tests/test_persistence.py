"""
Unit tests for CollectionSaver: local rejection and failure classification.
Run: python tests/test_persistence.py
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(Path(__file__).resolve().parent))

import requests

from fakes import FakeResponse, FakeSession
from movie_uploader.errors import EmptyCollectionError, NoResponseError, RemoteRejectedError, RequestBuildError
from movie_uploader.models import MovieRecord
from movie_uploader.persistence import CollectionSaver

ENDPOINT = "https://sink.test/save"
RECORDS = [
	MovieRecord(id=27205, title="Inception", overview="", actors=["Leonardo DiCaprio"], genres=["Action"]),
	MovieRecord(id=603, title="The Matrix", overview="", actors=[], genres=[], director="Lana Wachowski"),
]


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def assert_raises(fn, exc_type, msg):
	try:
		fn()
	except exc_type as e:
		return e
	raise AssertionError(msg)


def make_saver(reply):
	session = FakeSession({"/save": reply})
	return CollectionSaver(ENDPOINT, timeout=5, session=session), session


def test_empty_collection_rejected_locally():
	saver, session = make_saver(FakeResponse(200, {}))
	err = assert_raises(lambda: saver.save([]), EmptyCollectionError, "empty save should raise")
	assert_equal(err.user_message, "No movie data to save.", "warning text")
	assert_equal(session.calls, [], "no network call")


def test_success_posts_whole_collection():
	saver, session = make_saver(FakeResponse(201, {"id": "abc"}))
	result = saver.save(RECORDS)
	assert_equal(result.status_code, 201, "status code")
	assert_equal(result.body, {"id": "abc"}, "decoded body")

	method, url, payload, timeout = session.calls[0]
	assert_equal((method, url, timeout), ("POST", ENDPOINT, 5), "single POST with fixed timeout")
	assert_equal([p["id"] for p in payload], [27205, 603], "all records, in order")
	assert_equal(payload[1]["director"], "Lana Wachowski", "flat record fields")
	assert_equal(len(session.calls), 1, "one request")


def test_remote_rejection_with_message():
	saver, _ = make_saver(FakeResponse(400, {"message": "Quota exceeded"}))
	err = assert_raises(lambda: saver.save(RECORDS), RemoteRejectedError, "4xx should raise")
	assert_equal(err.user_message, "Error saving data: Quota exceeded", "server message surfaced")
	assert_equal(err.status_code, 400, "status kept")


def test_remote_rejection_without_message():
	saver, _ = make_saver(FakeResponse(503, None, text="Service Unavailable"))
	err = assert_raises(lambda: saver.save(RECORDS), RemoteRejectedError, "5xx should raise")
	assert_equal(err.user_message, "Error saving data: Please try again.", "fallback text")


def test_no_response():
	for exc in (requests.ConnectionError("refused"), requests.Timeout("timed out")):
		saver, _ = make_saver(exc)
		err = assert_raises(lambda: saver.save(RECORDS), NoResponseError, f"{type(exc).__name__} -> no response")
		assert_equal(err.user_message, "No response from the server. Please check your connection.", "no-response text")


def test_request_could_not_be_sent():
	saver, _ = make_saver(requests.exceptions.InvalidURL("bad url"))
	err = assert_raises(lambda: saver.save(RECORDS), RequestBuildError, "invalid url -> build error")
	assert_equal(err.user_message, "An unexpected error occurred. Please try again.", "generic text")


def main():
	print("Running persistence tests...")
	test_empty_collection_rejected_locally()
	test_success_posts_whole_collection()
	test_remote_rejection_with_message()
	test_remote_rejection_without_message()
	test_no_response()
	test_request_could_not_be_sent()
	print("All persistence tests passed!")


if __name__ == '__main__':
	main()
