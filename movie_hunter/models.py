"""
Data models for Movie Hunter.
Defines the movie entity and the outcome of every merge into the store.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__
# Enum gives each merge outcome a stable, comparable name
from enum import Enum
# Import typing helpers for precise and self-documenting types
from typing import Optional, Set  # optional values and unordered name sets


TITLE_ID_PREFIX = 'tt'  # prefix of every canonical title id
TITLE_ID_DIGITS = 7  # numeric part is zero-padded to this width


@dataclass(eq=False)
class Movie:
	"""
	Represents a single movie and everything merged into it from the datasets.
	One instance exists per title_id; indices refer to it, never copy it.
	"""
	title_id: str  # canonical id, e.g. "tt0012345"; never changes
	title: str  # display name, set once at creation
	director: Optional[str] = None  # last director row wins
	actors: Set[str] = field(default_factory=set)  # unique actor names
	tags: Set[str] = field(default_factory=set)  # unique tag names above the relevance cut
	rating: float = 0.0  # last rating row wins; 0.0 until set

	def __str__(self) -> str:
		return (
			f"Title: {self.title}, Director: {self.director or ''}, Rating: {self.rating}, "
			f"Actors: {', '.join(sorted(self.actors))}, Tags: {', '.join(sorted(self.tags))}"
		)


class MergeStatus(Enum):
	"""
	Result of a mutation on the store.
	Missing references are reported here instead of raised, so ingestion keeps going.
	"""
	CREATED = 'created'  # new movie inserted
	APPLIED = 'applied'  # attribute or index updated
	DUPLICATE = 'duplicate'  # movie already existed; nothing changed
	MISSING_MOVIE = 'missing_movie'  # no movie with that title id
	MISSING_ALIAS = 'missing_alias'  # foreign id never registered


def make_title_id(numeric_id: str) -> str:
	"""
	Build a canonical title id from its bare number: "12345" -> "tt0012345".
	The number is padded as given; callers pass fields already split from a row.
	"""
	return TITLE_ID_PREFIX + numeric_id.zfill(TITLE_ID_DIGITS)
