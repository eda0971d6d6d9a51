"""
Title list ingestion module.
Turns an uploaded plain-text resource into an ordered list of title queries.
"""

# Standard libs for paths and typing
from pathlib import Path  # filesystem-safe paths
from typing import List, Union  # type hints

# Console logging
from loguru import logger  # console logger


def parse_titles(text: str) -> List[str]:
	"""
	Split raw text into title queries: one per line, trimmed, blanks dropped.
	Order is preserved; no plausibility check is done on the titles.
	"""
	titles = []  # accumulator for cleaned lines
	for line in text.split("\n"):  # strip() below drops a trailing \r
		title = line.strip()  # remove surrounding whitespace
		if title:  # skip empty and whitespace-only lines
			titles.append(title)
	return titles


class TitleListLoader:
	"""
	Loads title lists from uploads (bytes) or from files on disk.
	"""

	def __init__(self, encoding: str = "utf-8"):
		"""Remember which text encoding uploads are decoded with."""
		self.encoding = encoding  # default decoding for raw bytes

	def load_titles_from_text(self, text: str) -> List[str]:
		"""Parse already-decoded text and log how many titles were found."""
		titles = parse_titles(text)  # split/trim/filter
		logger.info(f"[Ingestion] Loaded {len(titles)} titles")  # summary
		return titles

	def load_titles_from_bytes(self, data: bytes) -> List[str]:
		"""
		Decode an uploaded resource and parse it.
		A leading byte-order mark is dropped; undecodable bytes are replaced rather than rejected.
		"""
		encoding = "utf-8-sig" if self.encoding.lower().replace("_", "-") == "utf-8" else self.encoding
		text = data.decode(encoding, errors="replace")  # lenient decoding
		return self.load_titles_from_text(text)

	def load_titles(self, content: Union[str, bytes]) -> List[str]:
		"""Accept either raw bytes (upload widgets) or text (API bodies)."""
		if isinstance(content, bytes):
			return self.load_titles_from_bytes(content)
		return self.load_titles_from_text(content)

	def load_titles_from_file(self, filepath: Union[str, Path]) -> List[str]:
		"""Read a .txt file of titles, one per line."""
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"Title list file not found: {filepath}")

		logger.info(f"[Ingestion] Reading titles from {filepath}...")  # log action
		return self.load_titles_from_bytes(filepath.read_bytes())
