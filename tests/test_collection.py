"""
Unit tests for MovieCollection removal semantics.
Run: python tests/test_collection.py
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from movie_uploader.collection import MovieCollection
from movie_uploader.models import MovieRecord


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def movie(movie_id, title="Some Movie"):
	return MovieRecord(id=movie_id, title=title, overview="", actors=[], genres=[])


def test_remove_present():
	coll = MovieCollection([movie(1), movie(2), movie(3)])
	assert_equal(coll.remove(2), 1, "one record removed")
	assert_equal(coll.ids(), [1, 3], "others untouched, order kept")


def test_remove_absent_is_noop():
	coll = MovieCollection([movie(1), movie(2)])
	assert_equal(coll.remove(99), 0, "unknown id removes nothing")
	assert_equal(len(coll), 2, "size unchanged")


def test_remove_drops_all_with_same_id():
	coll = MovieCollection([movie(7), movie(8), movie(7)])
	assert_equal(coll.remove(7), 2, "every record with the id goes")
	assert_equal(coll.ids(), [8], "remaining ids")


def test_replace_and_payload():
	coll = MovieCollection()
	coll.replace([movie(1, "Heat")])
	payload = coll.to_payload()
	assert_equal(payload[0]["title"], "Heat", "payload title")
	assert_equal(payload[0]["poster_url"], None, "absent optional -> None")


def main():
	print("Running collection tests...")
	test_remove_present()
	test_remove_absent_is_noop()
	test_remove_drops_all_with_same_id()
	test_replace_and_payload()
	print("All collection tests passed!")


if __name__ == '__main__':
	main()
