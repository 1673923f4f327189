"""
Movie Hunter: merges IMDb and MovieLens exports into an in-memory movie index
searchable by title, person and tag.
"""

from .models import Movie, MergeStatus
from .movie_database import MovieDatabase

__all__ = ["Movie", "MergeStatus", "MovieDatabase"]
