"""
Ingestion tests: row source, per-dataset loaders and the full build order.
Writes a miniature copy of the six dataset files into a temp directory.
"""

from pathlib import Path

import pytest

from movie_hunter.config import Settings
from movie_hunter.ingest import (
	BELOW_THRESHOLD,
	UNKNOWN_TAG,
	build_database,
	load_tag_names,
	load_tag_scores,
	load_titles,
)
from movie_hunter.movie_database import MovieDatabase
from movie_hunter.row_source import RowParseError, read_rows


TITLES = (
	"titleId\tordering\ttitle\tregion\n"
	"tt0000001\t1\tNight Bus\tEN\n"
	"tt0000001\t2\tНочной автобус\tRU\n"
	"tt0000002\t1\tLe Train\tFR\n"
	"tt0000003\t1\tHarbor\tEN\n"
)

PEOPLE = (
	"tconst\tordering\tname\tcategory\n"
	"tt0000001\t1\tA. Actor\tactor\n"
	"tt0000001\t2\tB. Actress\tactress\n"
	"tt0000001\t3\tD. Director\tdirector\n"
	"tt0000002\t1\tF. Foreign\tactor\n"
	"tt0000003\t1\tA. Actor\tactor\n"
)

LINKS = (
	"movieId,imdbId,tmdbId\n"
	"7,0000001,100\n"
	"8,3,101\n"
	"9,2,102\n"
)

RATINGS = (
	"tconst\taverageRating\tnumVotes\n"
	"tt0000001\t8.5\t120\n"
	"tt0000002\t6.1\t40\n"
	"tt0000003\t7.0\t10\n"
)

TAG_NAMES = (
	"tagId,tag\n"
	"1,Drama\n"
	"2,noir\n"
	"3,harbor\n"
)

TAG_SCORES = (
	"movieId,tagId,relevance\n"
	"7,1,0.91\n"
	"7,2,0.5\n"
	"8,3,0.75\n"
	"8,99,0.99\n"
	"9,1,0.8\n"
	"55,1,0.9\n"
)


def write_dataset(data_dir: Path, **overrides) -> Settings:
	"""Write the six dataset files, replacing any given by keyword, and return settings for them."""
	settings = Settings(data_dir=data_dir)
	contents = {
		settings.titles_path: overrides.get('titles', TITLES),
		settings.people_path: overrides.get('people', PEOPLE),
		settings.links_path: overrides.get('links', LINKS),
		settings.ratings_path: overrides.get('ratings', RATINGS),
		settings.tag_names_path: overrides.get('tag_names', TAG_NAMES),
		settings.tag_scores_path: overrides.get('tag_scores', TAG_SCORES),
	}
	for path, text in contents.items():
		path.write_text(text, encoding='utf-8')
	return settings


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def test_read_rows_skips_header_and_dropped_rows(tmp_path):
	path = tmp_path / 'rows.tsv'
	path.write_text("a\tb\n1\tx\n2\ty\n\n3\tz\r\n", encoding='utf-8')
	rows = list(read_rows(path, '\t', lambda f: None if f[0] == '2' else (f[0], f[1])))
	assert_equal(rows, [('1', 'x'), ('3', 'z')], "header skipped, None dropped, CRLF stripped")


def test_read_rows_missing_file(tmp_path):
	with pytest.raises(FileNotFoundError):
		list(read_rows(tmp_path / 'absent.csv', ',', lambda f: f))


def test_read_rows_reports_malformed_line(tmp_path):
	path = tmp_path / 'ratings.tsv'
	path.write_text("tconst\taverageRating\ntt01\t7.0\ntt02\tn/a\n", encoding='utf-8')
	with pytest.raises(RowParseError) as exc_info:
		list(read_rows(path, '\t', lambda f: (f[0], float(f[1]))))
	assert_equal(exc_info.value.line_num, 3, "line number of the bad row")


def test_load_titles_applies_language_allow_list(tmp_path):
	settings = write_dataset(tmp_path)
	db = MovieDatabase()
	outcomes = load_titles(db, settings.titles_path, ['EN', 'RU'])
	assert_equal(outcomes['created'], 2, "two EN movies created")
	assert_equal(outcomes['duplicate'], 1, "RU alternate title is a duplicate")
	assert_equal(db.get_movie('tt0000001').title, "Night Bus", "first title row wins")
	assert_equal(db.get_movie('tt0000002'), None, "FR row filtered out")


def test_load_tag_scores_threshold_and_unknown_ids(tmp_path):
	settings = write_dataset(tmp_path)
	db = MovieDatabase()
	load_titles(db, settings.titles_path)
	db.add_alias('7', '0000001')
	db.add_alias('8', '3')
	tag_names = load_tag_names(settings.tag_names_path)
	assert_equal(tag_names, {1: 'Drama', 2: 'noir', 3: 'harbor'}, "tag dictionary")

	outcomes = load_tag_scores(db, settings.tag_scores_path, tag_names, 0.5)
	assert_equal(outcomes[BELOW_THRESHOLD], 1, "relevance equal to the cut is rejected")
	assert_equal(outcomes[UNKNOWN_TAG], 1, "unknown tag id skipped")
	assert_equal(outcomes['missing_alias'], 2, "foreign ids 9 and 55 unregistered")
	assert_equal(outcomes['applied'], 2, "two tags attached")
	assert_equal(db.get_movie('tt0000001').tags, {'Drama'}, "noir at 0.5 not attached")


def test_build_database_end_to_end(tmp_path):
	settings = write_dataset(tmp_path)
	db, report = build_database(settings)

	night_bus = db.find_by_title("Night Bus")
	assert_equal(night_bus.director, "D. Director", "director")
	assert_equal(night_bus.actors, {"A. Actor", "B. Actress"}, "actors and actresses")
	assert_equal(night_bus.tags, {"Drama"}, "tags")
	assert_equal(night_bus.rating, 8.5, "rating")

	harbor = db.find_by_title("Harbor")
	assert_equal(harbor.tags, {"harbor"}, "alias with unpadded number resolves")
	assert_equal([m.title for m in db.find_by_person("A. Actor")], ["Night Bus", "Harbor"], "person across movies")
	assert_equal(db.find_by_person("F. Foreign"), None, "cast of filtered movie ignored")

	assert_equal(report.counts['people']['missing_movie'], 1, "foreign cast row reported")
	assert_equal(report.counts['ratings']['missing_movie'], 1, "foreign rating row reported")
	assert_equal(report.counts['links']['applied'], 3, "every alias registered")
	assert_equal(report.counts['tag_scores']['missing_movie'], 1, "alias to filtered movie")


def test_build_database_stops_on_malformed_rating(tmp_path):
	settings = write_dataset(tmp_path, ratings="tconst\taverageRating\ntt0000001\tabc\n")
	with pytest.raises(RowParseError):
		build_database(settings)


def test_build_database_missing_column(tmp_path):
	settings = write_dataset(tmp_path, people="tconst\tordering\nshort\trow\n")
	with pytest.raises(RowParseError):
		build_database(settings)


def test_settings_validation(tmp_path):
	with pytest.raises(ValueError):
		Settings(data_dir=tmp_path, relevance_threshold=1.5)
	assert_equal(Settings(data_dir=tmp_path, log_level='debug').log_level, 'DEBUG', "log level normalized")
	assert_equal(Settings(data_dir=tmp_path).ratings_path, tmp_path / 'Ratings_IMDB.tsv', "default file name")


def test_build_database_rejects_empty_person_name(tmp_path):
	settings = write_dataset(tmp_path, people=PEOPLE + "tt0000001\t4\t\tactor\n")
	with pytest.raises(RowParseError) as exc_info:
		build_database(settings)
	assert_equal(exc_info.value.line_num, 7, "header plus five rows, then the empty name")
	assert_equal(exc_info.value.filepath, settings.people_path, "cast/crew file named")


def test_empty_key_fields_are_malformed(tmp_path):
	cases = {
		'titles': "titleId\tordering\ttitle\tregion\ntt0000001\t1\t\tEN\n",
		'links': "movieId,imdbId,tmdbId\n7,,100\n",
		'tag_names': "tagId,tag\n1,\n",
	}
	for dataset, text in cases.items():
		settings = write_dataset(tmp_path, **{dataset: text})
		with pytest.raises(RowParseError) as exc_info:
			build_database(settings)
		assert_equal(exc_info.value.line_num, 2, f"{dataset} first data row")
