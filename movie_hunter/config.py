"""
Application configuration using Pydantic Settings.
Defaults reproduce the fixed dataset layout under resources/ml-latest.
"""

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	"""Settings loaded from MOVIE_HUNTER_* environment variables or a .env file."""

	model_config = SettingsConfigDict(
		env_prefix="MOVIE_HUNTER_",
		env_file=".env",
		env_file_encoding="utf-8",
		case_sensitive=False,
		extra="ignore",
	)

	# Dataset location
	data_dir: Path = Path("resources/ml-latest")
	titles_file: str = "MovieCodes_IMDB.tsv"
	people_file: str = "ActorsDirectorsCodes_IMDB.tsv"
	links_file: str = "links_IMDB_MovieLens.csv"
	ratings_file: str = "Ratings_IMDB.tsv"
	tag_names_file: str = "TagCodes_MovieLens.csv"
	tag_scores_file: str = "TagScores_MovieLens.csv"

	# Ingestion filters
	languages: List[str] = ["EN", "RU"]  # title catalog language allow-list
	relevance_threshold: float = 0.5  # tag scores must be strictly above this

	# Logging
	log_level: str = "INFO"

	@field_validator("relevance_threshold")
	@classmethod
	def validate_relevance_threshold(cls, v: float) -> float:
		"""Relevance scores are fractions, so the cut must be one too."""
		if not 0.0 <= v <= 1.0:
			raise ValueError("relevance_threshold must be between 0 and 1")
		return v

	@field_validator("log_level")
	@classmethod
	def validate_log_level(cls, v: str) -> str:
		level = v.upper()
		if level not in ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"):
			raise ValueError(f"Unknown log level: {v}")
		return level

	@property
	def titles_path(self) -> Path:
		return self.data_dir / self.titles_file

	@property
	def people_path(self) -> Path:
		return self.data_dir / self.people_file

	@property
	def links_path(self) -> Path:
		return self.data_dir / self.links_file

	@property
	def ratings_path(self) -> Path:
		return self.data_dir / self.ratings_file

	@property
	def tag_names_path(self) -> Path:
		return self.data_dir / self.tag_names_file

	@property
	def tag_scores_path(self) -> Path:
		return self.data_dir / self.tag_scores_file


@lru_cache
def get_settings() -> Settings:
	"""Get cached settings instance."""
	return Settings()
