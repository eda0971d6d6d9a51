"""
Unit tests for record building and the concurrent resolution pipeline.
Run: python tests/test_resolver.py
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from fakes import FakeTMDBClient, details_payload
from movie_uploader.errors import TMDBError
from movie_uploader.resolver import MovieResolver, build_record


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def assert_true(cond, msg):
	if not cond:
		raise AssertionError(msg)


def test_build_record_full_payload():
	record = build_record(details_payload(27205, "Inception"), "https://img.test/w500")
	assert_equal(record.id, 27205, "id")
	assert_equal(record.title, "Inception", "title")
	assert_equal(record.actors, ["Actor 1", "Actor 2", "Actor 3", "Actor 4", "Actor 5"], "first five cast names")
	assert_equal(record.genres, ["Action", "Science Fiction"], "genre names")
	assert_equal(record.poster_url, "https://img.test/w500/27205.jpg", "poster joined with base url")
	assert_equal(record.director, "First Director", "first Director in crew")
	assert_equal(record.trailer_key, "trailer-key", "first Trailer, teaser skipped")
	assert_equal(record.release_date, "2010-07-15", "release date")
	assert_equal(record.rating, 8.4, "rating")
	assert_equal(record.runtime, 148, "runtime")


def test_build_record_optional_fields_absent():
	payload = details_payload(
		603, "The Matrix",
		poster_path=None,
		runtime=None,
		credits={"cast": [{"name": "Keanu Reeves"}], "crew": [{"name": "X", "job": "Writer"}]},
		videos={"results": [{"key": "t", "type": "Teaser"}]},
	)
	record = build_record(payload)
	assert_equal(record.actors, ["Keanu Reeves"], "short cast kept whole")
	assert_true(record.poster_url is None, "no poster path -> None")
	assert_true(record.director is None, "no Director -> None")
	assert_true(record.trailer_key is None, "no Trailer -> None")
	assert_true(record.runtime is None, "no runtime -> None")
	assert_true(record.title and record.id, "title and id always set")


def test_build_record_without_enrichment():
	payload = {"id": 1, "title": "Bare", "genres": []}
	record = build_record(payload)
	assert_equal(record.actors, [], "no credits -> empty cast")
	assert_equal(record.overview, "", "missing overview -> empty")
	assert_true(record.director is None and record.trailer_key is None, "nothing to enrich")


def test_build_record_malformed():
	for payload in ({"title": "No id"}, {"id": 5}):
		try:
			build_record(payload)
		except TMDBError:
			continue
		raise AssertionError(f"payload {payload} should be rejected")


def test_resolve_title_takes_first_candidate():
	client = FakeTMDBClient(
		search={"Heat": [{"id": 949}, {"id": 11}]},
		details={949: details_payload(949, "Heat"), 11: details_payload(11, "Other")},
	)
	record = MovieResolver(client).resolve_title("Heat")
	assert_equal(record.id, 949, "first candidate used, no re-ranking")


def test_resolve_title_not_found():
	client = FakeTMDBClient(search={"asdfgh": []})
	assert_true(MovieResolver(client).resolve_title("asdfgh") is None, "zero candidates -> None")


def test_resolve_all_isolation_and_order():
	client = FakeTMDBClient(
		search={
			"Inception": [{"id": 1}],
			"Nothing": [],
			"Broken": [{"id": 2}],
			"Offline": TMDBError("connection refused"),
			"The Matrix": [{"id": 3}],
		},
		details={
			1: details_payload(1, "Inception"),
			2: TMDBError("HTTP 500"),
			3: details_payload(3, "The Matrix"),
		},
	)
	queries = ["Inception", "Nothing", "Broken", "Offline", "The Matrix"]
	report = MovieResolver(client, max_workers=4).resolve_all(queries)

	assert_equal([r.title for r in report.records], ["Inception", "The Matrix"], "query order, dropped filtered")
	assert_equal(report.not_found, ["Nothing"], "not-found reported separately")
	assert_equal(sorted(f.query for f in report.failures), ["Broken", "Offline"], "failures isolated")
	assert_equal(report.total, len(queries), "every query accounted for")


def test_resolve_all_keeps_duplicate_ids():
	client = FakeTMDBClient(
		search={"Heat": [{"id": 949}], "heat 1995": [{"id": 949}]},
		details={949: details_payload(949, "Heat")},
	)
	report = MovieResolver(client).resolve_all(["Heat", "heat 1995"])
	assert_equal([r.id for r in report.records], [949, 949], "no de-duplication")


def test_resolve_all_is_bounded():
	titles = [f"Movie {i}" for i in range(12)]
	client = FakeTMDBClient(search={t: [] for t in titles}, delay=0.02)
	report = MovieResolver(client, max_workers=3).resolve_all(titles)
	assert_true(client.max_active <= 3, f"at most 3 lookups in flight, saw {client.max_active}")
	assert_equal(report.not_found, titles, "all settled, order kept")


def test_resolve_all_empty():
	report = MovieResolver(FakeTMDBClient()).resolve_all([])
	assert_equal(report.total, 0, "empty batch")


def main():
	print("Running resolver tests...")
	test_build_record_full_payload()
	test_build_record_optional_fields_absent()
	test_build_record_without_enrichment()
	test_build_record_malformed()
	test_resolve_title_takes_first_candidate()
	test_resolve_title_not_found()
	test_resolve_all_isolation_and_order()
	test_resolve_all_keeps_duplicate_ids()
	test_resolve_all_is_bounded()
	test_resolve_all_empty()
	print("All resolver tests passed!")


if __name__ == '__main__':
	main()
