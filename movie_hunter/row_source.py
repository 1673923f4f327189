"""
Row source module.
Reads delimited text files (TSV/CSV) row by row and maps each row's fields.
"""

# Standard libs for paths and typing
from pathlib import Path  # filesystem-safe paths
from typing import Callable, Iterator, List, Optional, TypeVar, Union  # type hints

# Console logging
from loguru import logger  # console logger


T = TypeVar('T')

RowMapper = Callable[[List[str]], Optional[T]]  # fields -> record, or None to drop the row


class RowParseError(ValueError):
	"""A row could not be mapped: missing column or unparsable value."""

	def __init__(self, filepath: Path, line_num: int, cause: Exception):
		self.filepath = filepath
		self.line_num = line_num
		super().__init__(f"Malformed row at {filepath}:{line_num}: {cause}")


def read_rows(filepath: Union[str, Path], separator: str, map_row: RowMapper) -> Iterator[T]:
	"""
	Yield mapped records from a delimited file, skipping its header line.
	Rows the mapper returns None for are dropped. Mapping errors are fatal.
	"""
	filepath = Path(filepath)  # normalize path

	# Validate the file presence early to give clear error messages
	if not filepath.exists():
		raise FileNotFoundError(f"Data file not found: {filepath}")

	logger.info(f"[RowSource] Reading {filepath.name} (separator={separator!r})")

	rows = 0  # mapped rows yielded
	dropped = 0  # rows the mapper filtered out
	# Read line-by-line so large datasets never sit in memory at once
	with open(filepath, 'r', encoding='utf-8') as f:
		next(f, None)  # header
		for line_num, line in enumerate(f, 2):  # line 1 was the header
			line = line.rstrip('\r\n')
			if not line:  # trailing blank lines
				continue
			fields = line.split(separator)
			try:
				record = map_row(fields)
			except (IndexError, ValueError) as e:
				raise RowParseError(filepath, line_num, e) from e
			if record is None:
				dropped += 1
				continue
			rows += 1
			yield record

	logger.info(f"[RowSource] {filepath.name}: {rows} rows mapped, {dropped} dropped")
