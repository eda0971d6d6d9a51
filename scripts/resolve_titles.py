"""
Resolve a title list from the command line.

This script:
1) Loads titles from a .txt file (one per line)
2) Resolves each title on TMDb (search + details)
3) Optionally writes the records to a JSON file
4) Optionally submits them to the configured save endpoint

Usage:
    python -m scripts.resolve_titles titles.txt --output movies.json --save

TMDB_API_KEY (and optionally SAVE_ENDPOINT, RESOLVER_MAX_WORKERS, ...) come from the
environment or a .env file in the working directory.
"""

import argparse  # command-line flags
import json  # write records
import sys  # exit codes
import time  # measure step timings
from pathlib import Path  # filesystem-safe paths

from loguru import logger  # console logging

from movie_uploader.config import Settings  # env configuration
from movie_uploader.errors import MovieUploaderError  # user-facing failures
from movie_uploader.uploader import MovieUploader  # session facade


def parse_args(argv=None):
	parser = argparse.ArgumentParser(description="Resolve a list of movie titles against TMDb.")
	parser.add_argument("titles_file", help="Text file with one movie title per line")
	parser.add_argument("--output", "-o", help="Write resolved records to this JSON file")
	parser.add_argument("--save", action="store_true", help="Submit the records to SAVE_ENDPOINT")
	parser.add_argument("--env-file", help="Path to a .env file (defaults to ./.env)")
	return parser.parse_args(argv)


def run(args, uploader: MovieUploader) -> int:
	# 1) Load titles
	logger.info("[1/3] Loading titles...")
	try:
		titles = uploader.loader.load_titles_from_file(args.titles_file)
	except FileNotFoundError as e:
		logger.error(str(e))
		return 2
	uploader.titles = titles
	logger.info(f"[OK] Loaded {len(titles)} titles")

	# 2) Resolve
	logger.info("[2/3] Resolving on TMDb...")
	t0 = time.time()  # start timer
	try:
		report = uploader.search()
	except MovieUploaderError as e:
		logger.error(e.user_message)
		return 1
	logger.info(f"[OK] {len(report.records)} of {len(titles)} resolved in {time.time() - t0:.2f}s")
	for title in report.not_found:
		logger.warning(f"No TMDb match for \"{title}\"")
	for failure in report.failures:
		logger.error(f"Error fetching data for \"{failure.query}\": {failure.reason}")
	for record in report.records:
		logger.info(f"  {record.id}: {record.title} ({record.release_date or 'N/A'}) - {record.director or 'N/A'}")

	if args.output:
		out = Path(args.output)
		out.write_text(json.dumps(uploader.collection.to_payload(), indent=2, ensure_ascii=False), encoding="utf-8")
		logger.info(f"[OK] Wrote {len(uploader.collection)} records to {out}")

	# 3) Save
	if args.save:
		logger.info("[3/3] Saving...")
		try:
			result = uploader.save()
		except MovieUploaderError as e:
			logger.error(e.user_message)
			return 1
		logger.info(f"[OK] Data saved successfully! (HTTP {result.status_code})")
	else:
		logger.info("[3/3] Skipping save (pass --save to submit)")

	logger.info("=" * 60)
	return 0


def main(argv=None) -> int:
	args = parse_args(argv)

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Resolve Movie Titles")
	logger.info("=" * 60)

	try:
		uploader = MovieUploader.from_settings(Settings.from_env(args.env_file))
	except MovieUploaderError as e:
		logger.error(e.user_message)
		return 2

	try:
		return run(args, uploader)
	finally:
		uploader.close()  # release HTTP connections


if __name__ == '__main__':
	sys.exit(main())  # invoke resolver
