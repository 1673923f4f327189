"""
Ingestion driver.
Reads each dataset once, in dependency order, and merges its rows into a MovieDatabase.

Order matters: movies must exist before cast, rating and tag rows reference them,
and the crosswalk must be registered before tag scores resolve through it.
"""

# Standard libs for counting outcomes and typing
from collections import Counter  # per-dataset outcome tallies
from dataclasses import dataclass, field  # report container
from pathlib import Path  # filesystem paths
from typing import Dict, Iterable, Optional, Tuple, Union  # type hints

# Project modules
from .config import Settings  # dataset paths and filters
from .models import MergeStatus  # mutation outcomes
from .movie_database import MovieDatabase  # entity store
from .row_source import read_rows  # delimited file reader

# Console logging
from loguru import logger  # console logger


TAB = '\t'  # IMDb exports
COMMA = ','  # MovieLens exports

DIRECTOR_CATEGORY = 'director'  # cast/crew category that marks directorship
BELOW_THRESHOLD = 'below_threshold'  # tag score at or under the relevance cut
UNKNOWN_TAG = 'unknown_tag'  # tag id missing from the tag dictionary

PathLike = Union[str, Path]


@dataclass
class IngestReport:
	"""Outcome counts per dataset, keyed by MergeStatus value or filter reason."""
	counts: Dict[str, Counter] = field(default_factory=dict)

	def add(self, dataset: str, outcomes: Counter):
		self.counts[dataset] = outcomes

	def log_summary(self):
		for dataset, outcomes in self.counts.items():
			summary = ', '.join(f"{k}={v}" for k, v in sorted(outcomes.items()))
			logger.info(f"[Ingest] {dataset}: {summary or 'no rows'}")


def _key(fields, index, name):
	# Empty keys are malformed input; raising here lets read_rows report file and line
	value = fields[index]
	if not value:
		raise ValueError(f"empty {name}")
	return value


def _tally(statuses: Iterable[MergeStatus]) -> Counter:
	return Counter(status.value for status in statuses)


def load_titles(db: MovieDatabase, path: PathLike, languages: Iterable[str] = ('EN', 'RU')) -> Counter:
	"""Seed movies from the title catalog, keeping only allow-listed languages."""
	allowed = set(languages)

	def map_row(fields):
		if fields[3] not in allowed:
			return None  # dropped by the row source
		return _key(fields, 0, "title id"), _key(fields, 2, "title")

	return _tally(db.add_movie(title_id, title) for title_id, title in read_rows(path, TAB, map_row))


def load_people(db: MovieDatabase, path: PathLike) -> Counter:
	"""Attach actors and directors from the cast/crew catalog."""
	def map_row(fields):
		return fields[0], _key(fields, 2, "person name"), fields[3] == DIRECTOR_CATEGORY

	return _tally(
		db.add_person_to_movie(person_name, title_id, is_director)
		for title_id, person_name, is_director in read_rows(path, TAB, map_row)
	)


def load_links(db: MovieDatabase, path: PathLike) -> Counter:
	"""Register foreign movie id -> title id aliases from the crosswalk."""
	def map_row(fields):
		return _key(fields, 0, "movie id"), _key(fields, 1, "imdb id")

	return _tally(
		db.add_alias(foreign_movie_id, numeric_title_id)
		for foreign_movie_id, numeric_title_id in read_rows(path, COMMA, map_row)
	)


def load_ratings(db: MovieDatabase, path: PathLike) -> Counter:
	"""Set ratings; a rating field that is not a number aborts ingestion."""
	def map_row(fields):
		return fields[0], float(fields[1])

	return _tally(db.set_rating(title_id, rating) for title_id, rating in read_rows(path, TAB, map_row))


def load_tag_names(path: PathLike) -> Dict[int, str]:
	"""Build the tag id -> tag name dictionary. It is not stored in the database."""
	def map_row(fields):
		return int(fields[0]), _key(fields, 1, "tag name")

	tag_names = dict(read_rows(path, COMMA, map_row))
	logger.info(f"[Ingest] Loaded {len(tag_names)} tag names")
	return tag_names


def load_tag_scores(
	db: MovieDatabase,
	path: PathLike,
	tag_names: Dict[int, str],
	threshold: float = 0.5,
) -> Counter:
	"""
	Attach tags whose relevance is strictly above `threshold`.
	Scores for tag ids missing from `tag_names` are skipped.
	"""
	def map_row(fields):
		return fields[0], int(fields[1]), float(fields[2])

	outcomes: Counter = Counter()
	for foreign_movie_id, tag_id, relevance in read_rows(path, COMMA, map_row):
		if relevance <= threshold:
			outcomes[BELOW_THRESHOLD] += 1
			continue
		tag_name = tag_names.get(tag_id)
		if tag_name is None:
			outcomes[UNKNOWN_TAG] += 1
			continue
		outcomes[db.add_tag_to_movie(tag_name, foreign_movie_id).value] += 1
	return outcomes


def build_database(settings: Settings, db: Optional[MovieDatabase] = None) -> Tuple[MovieDatabase, IngestReport]:
	"""
	Run every loader in dependency order and return the populated database.
	Malformed rows and missing files propagate and stop the build.
	"""
	db = db if db is not None else MovieDatabase()
	report = IngestReport()

	logger.info(f"[Ingest] Building movie database from {settings.data_dir}")
	report.add('titles', load_titles(db, settings.titles_path, settings.languages))
	report.add('people', load_people(db, settings.people_path))
	report.add('links', load_links(db, settings.links_path))
	report.add('ratings', load_ratings(db, settings.ratings_path))
	tag_names = load_tag_names(settings.tag_names_path)
	report.add('tag_scores', load_tag_scores(db, settings.tag_scores_path, tag_names, settings.relevance_threshold))

	report.log_summary()
	logger.info(f"[Ingest] Database ready | {db.stats()}")
	return db, report
