"""
FastAPI server exposing read-only movie lookups.
Endpoints:
- GET /health: basic health check
- GET /movies/by-title?title=...: first movie with exactly that title
- GET /movies/by-person?name=...: movies a person acted in or directed
- GET /movies/by-tag?tag=...: movies carrying a tag

Startup ingests every dataset once; afterwards the database is only read.
"""

# Import standard libraries for timing
import time  # measure startup latency
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, HTTPException, Query  # FastAPI primitives
from pydantic import BaseModel  # response schema definitions

# Import our internal modules for configuration, ingestion and lookups
from movie_hunter.config import get_settings  # dataset paths and filters
from movie_hunter.ingest import build_database  # ingestion driver
from movie_hunter.logging_config import setup_logging  # loguru sink setup
from movie_hunter.models import Movie  # entity type
from movie_hunter.movie_database import MovieDatabase  # entity store

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Movie Hunter API", version="1.0.0")  # web app

# Globals that hold the loaded database and measured startup time
DATABASE: Optional[MovieDatabase] = None  # populated at startup
STARTUP_TIME_S: float = 0.0  # how long ingestion took


# Pydantic model that describes the shape of a single movie in responses
class MovieOut(BaseModel):
	title_id: str  # canonical id
	title: str  # display name
	director: Optional[str] = None  # director name if present
	actors: List[str]  # sorted actor names
	tags: List[str]  # sorted tag names
	rating: float  # rating, 0.0 when never set

	@classmethod
	def from_movie(cls, movie: Movie) -> "MovieOut":
		return cls(
			title_id=movie.title_id,
			title=movie.title,
			director=movie.director,
			actors=sorted(movie.actors),
			tags=sorted(movie.tags),
			rating=movie.rating,
		)


# FastAPI startup hook to build the database once
@app.on_event("startup")
async def startup_event():
	"""Ingest all datasets and log how long it took."""
	global DATABASE, STARTUP_TIME_S  # refer to module-level globals
	start = time.time()  # start timer

	settings = get_settings()  # env/.env driven configuration
	setup_logging(settings.log_level)
	logger.info("[API] Startup: ingesting datasets...")

	DATABASE, _ = build_database(settings)

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s with {len(DATABASE)} movies.")


def _database() -> MovieDatabase:
	if DATABASE is None:  # database must be ready to serve
		logger.warning("[API] Lookup requested but database not loaded")
		raise HTTPException(status_code=503, detail="Movie database not loaded")
	return DATABASE


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",
		"database_ready": DATABASE is not None,
		"stats": DATABASE.stats() if DATABASE is not None else {},  # table sizes
		"startup_seconds": round(STARTUP_TIME_S, 2),
	}


@app.get("/movies/by-title", response_model=MovieOut)
async def movie_by_title(title: str = Query(..., description="Exact movie title")):
	"""Exact, case-sensitive title lookup."""
	movie = _database().find_by_title(title)
	if movie is None:
		raise HTTPException(status_code=404, detail=f"No movie titled '{title}'")
	return MovieOut.from_movie(movie)


@app.get("/movies/by-person", response_model=List[MovieOut])
async def movies_by_person(name: str = Query(..., description="Exact actor or director name")):
	"""Movies a person acted in or directed."""
	movies = _database().find_by_person(name)
	if movies is None:
		raise HTTPException(status_code=404, detail=f"Unknown person '{name}'")
	logger.debug(f"[API] /movies/by-person name='{name}' -> {len(movies)} movies")
	return [MovieOut.from_movie(m) for m in movies]


@app.get("/movies/by-tag", response_model=List[MovieOut])
async def movies_by_tag(tag: str = Query(..., description="Exact tag name")):
	"""Movies carrying a tag."""
	movies = _database().find_by_tag(tag)
	if movies is None:
		raise HTTPException(status_code=404, detail=f"Unknown tag '{tag}'")
	logger.debug(f"[API] /movies/by-tag tag='{tag}' -> {len(movies)} movies")
	return [MovieOut.from_movie(m) for m in movies]
