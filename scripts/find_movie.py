"""
Build the movie database and print lookups to the console.

This script:
1) Loads settings (MOVIE_HUNTER_* env vars or .env)
2) Ingests titles, cast/crew, crosswalk, ratings and tag scores
3) Prints the movies matching --title, --person and/or --tag

Usage:
    python -m scripts.find_movie --title "Night Bus"
    python -m scripts.find_movie --person "Clark Gable" --tag "romance"

With no lookup arguments it searches DEFAULT_TITLE.
"""

import argparse  # command-line options
import time  # measure ingestion time
from typing import List, Optional

from loguru import logger  # console logging

from movie_hunter.config import get_settings  # dataset paths and filters
from movie_hunter.ingest import build_database  # ingestion driver
from movie_hunter.logging_config import setup_logging  # loguru sink setup
from movie_hunter.models import Movie  # entity type

DEFAULT_TITLE = "Это случилось однажды ночью"
NOT_FOUND = "Фильм не найден."


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
	parser = argparse.ArgumentParser(description="Look up movies by title, person or tag.")
	parser.add_argument('--title', help="exact movie title")
	parser.add_argument('--person', help="exact actor or director name")
	parser.add_argument('--tag', help="exact tag name")
	args = parser.parse_args(argv)
	if not (args.title or args.person or args.tag):
		args.title = DEFAULT_TITLE
	return args


def print_movies(movies: Optional[List[Movie]]):
	if not movies:
		print(NOT_FOUND)
		return
	for movie in movies:
		print(movie)


def main(argv: Optional[List[str]] = None):
	args = parse_args(argv)
	settings = get_settings()
	setup_logging(settings.log_level)

	t0 = time.time()  # start timer
	db, _ = build_database(settings)
	logger.info(f"[CLI] Ingested {len(db)} movies in {time.time() - t0:.2f}s")

	if args.title:
		movie = db.find_by_title(args.title)
		print_movies([movie] if movie else None)
	if args.person:
		print_movies(db.find_by_person(args.person))
	if args.tag:
		print_movies(db.find_by_tag(args.tag))


if __name__ == '__main__':
	main()
