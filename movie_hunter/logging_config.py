"""
Logging setup.
Every module logs through loguru's shared logger; this only picks the sink and level.
"""

import sys

from loguru import logger


def setup_logging(level: str = "INFO") -> None:
	"""Replace loguru's default sink with a stderr sink at `level`."""
	logger.remove()
	logger.add(
		sys.stderr,
		level=level,
		format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
	)
	logger.debug(f"[Logging] Configured stderr sink at {level}")
