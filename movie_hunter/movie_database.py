"""
Movie database module.
Owns every Movie entity and the person/tag indices built on top of them,
and answers exact lookups by title, person and tag.
"""

# Typing hints for clarity of public API
from typing import Dict, List, Optional, Set

# Import our models: the entity, merge outcomes and id helper
from .models import Movie, MergeStatus, make_title_id

# Console logging
from loguru import logger  # console logger


class MovieDatabase:
	"""
	In-memory entity store.
	The primary table is the only owner of Movie objects; the person and tag
	indices and the alias table store title ids that point back into it.
	Single writer: the ingestion driver mutates it, everything else only reads.
	"""

	def __init__(self):
		self._movies: Dict[str, Movie] = {}  # title_id -> Movie, insertion ordered
		self._person_index: Dict[str, Set[str]] = {}  # person name -> title ids (actor or director)
		self._tag_index: Dict[str, Set[str]] = {}  # tag name -> title ids
		self._aliases: Dict[str, str] = {}  # foreign movie id -> title_id

	# ------------------------------------------------------------------
	# Mutations
	# ------------------------------------------------------------------

	def add_movie(self, title_id: str, title: str) -> MergeStatus:
		"""
		Create the movie if its title_id is new.
		A repeated title_id is a no-op: the first title and all merged data stay.
		"""
		_require(title_id, 'title_id')
		_require(title, 'title')
		if title_id in self._movies:
			logger.debug(f"[Store] Duplicate movie {title_id} ignored")
			return MergeStatus.DUPLICATE
		self._movies[title_id] = Movie(title_id=title_id, title=title)
		return MergeStatus.CREATED

	def add_person_to_movie(self, person_name: str, title_id: str, is_director: bool = False) -> MergeStatus:
		"""
		Attach a person to a movie as director or actor and index the pair.
		A second director replaces the first on the movie, but the person index
		keeps both names pointing at it.
		"""
		_require(person_name, 'person_name')
		movie = self._movies.get(title_id)
		if movie is None:
			return MergeStatus.MISSING_MOVIE

		if is_director:
			movie.director = person_name  # last write wins
		else:
			movie.actors.add(person_name)

		self._person_index.setdefault(person_name, set()).add(title_id)
		return MergeStatus.APPLIED

	def add_tag_to_movie(self, tag_name: str, foreign_movie_id: str) -> MergeStatus:
		"""
		Attach a tag to the movie a foreign id resolves to.
		Relevance filtering happens before this call; the store takes every tag it is given.
		"""
		_require(tag_name, 'tag_name')
		title_id = self.resolve_alias(foreign_movie_id)
		if title_id is None:
			return MergeStatus.MISSING_ALIAS
		movie = self._movies.get(title_id)
		if movie is None:
			return MergeStatus.MISSING_MOVIE

		# Movie tag set and tag index are updated together
		movie.tags.add(tag_name)
		self._tag_index.setdefault(tag_name, set()).add(title_id)
		return MergeStatus.APPLIED

	def set_rating(self, title_id: str, rating: float) -> MergeStatus:
		"""Overwrite a movie's rating. Values are stored as given, with no range check."""
		movie = self._movies.get(title_id)
		if movie is None:
			return MergeStatus.MISSING_MOVIE
		movie.rating = rating
		return MergeStatus.APPLIED

	def add_alias(self, foreign_movie_id: str, numeric_title_id: str) -> MergeStatus:
		"""
		Map a foreign movie id to a canonical title id built from its bare number.
		Last mapping for a foreign id wins. The movie does not need to exist yet.
		"""
		_require(foreign_movie_id, 'foreign_movie_id')
		self._aliases[foreign_movie_id] = make_title_id(numeric_title_id)
		return MergeStatus.APPLIED

	# ------------------------------------------------------------------
	# Queries
	# ------------------------------------------------------------------

	def find_by_title(self, title: str) -> Optional[Movie]:
		"""
		Return the first movie, in insertion order, whose title equals `title` exactly.
		Titles are not unique; later movies with the same title are never returned.
		"""
		for movie in self._movies.values():
			if movie.title == title:
				return movie
		return None

	def find_by_person(self, person_name: str) -> Optional[List[Movie]]:
		"""Movies a person acted in or directed, or None if the name was never attached."""
		return self._resolve(self._person_index.get(person_name))

	def find_by_tag(self, tag_name: str) -> Optional[List[Movie]]:
		"""Movies carrying a tag, or None if the tag was never attached."""
		return self._resolve(self._tag_index.get(tag_name))

	def get_movie(self, title_id: str) -> Optional[Movie]:
		"""Return the movie stored under a title id, or None."""
		return self._movies.get(title_id)

	def resolve_alias(self, foreign_movie_id: str) -> Optional[str]:
		"""Translate a foreign movie id into its title id, or None if unregistered."""
		return self._aliases.get(foreign_movie_id)

	def stats(self) -> Dict[str, int]:
		"""Sizes of the primary table, indices and alias table."""
		return {
			'movies': len(self._movies),
			'persons': len(self._person_index),
			'tags': len(self._tag_index),
			'aliases': len(self._aliases),
		}

	def __len__(self) -> int:
		return len(self._movies)

	def __contains__(self, title_id: object) -> bool:
		return title_id in self._movies

	def _resolve(self, title_ids: Optional[Set[str]]) -> Optional[List[Movie]]:
		# None means the key was never indexed; an empty set still yields []
		if title_ids is None:
			return None
		return [self._movies[title_id] for title_id in sorted(title_ids)]


def _require(value: str, name: str) -> None:
	if not value:
		raise ValueError(f"{name} cannot be empty")
