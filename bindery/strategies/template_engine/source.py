"""File-backed template source.

The canonical template is parsed once per modification time. Callers get
a copy of the parsed tree, so the cached tree is never bound into.
"""

import copy
import logging
from pathlib import Path

from bs4 import BeautifulSoup

from bindery.interfaces.template import BaseTemplateSource, MissingTemplateError
from bindery.strategies.template_engine.dom import DEFAULT_PARSER, parse_document

logger = logging.getLogger(__name__)


class FileTemplateSource(BaseTemplateSource):
    """Loads an HTML template from disk."""

    def __init__(
        self,
        path: str | Path,
        parser: str = DEFAULT_PARSER,
        encoding: str = "utf-8",
        cache: bool = True,
    ) -> None:
        """Initialize the source.

        Args:
            path: Path to the HTML template.
            parser: BeautifulSoup parser backend.
            encoding: Character encoding of the template file.
            cache: Reuse the parsed tree while the file's mtime is unchanged.
        """
        self._path = Path(path)
        self._parser = parser
        self._encoding = encoding
        self._cache = cache
        self._cached: BeautifulSoup | None = None
        self._cached_mtime: int | None = None

    @property
    def location(self) -> str:
        return str(self._path)

    def load(self) -> BeautifulSoup:
        try:
            mtime = self._path.stat().st_mtime_ns
        except FileNotFoundError as e:
            logger.error(f"Template file not found: {self._path}")
            raise MissingTemplateError(str(self._path)) from e

        if self._cache and self._cached is not None and self._cached_mtime == mtime:
            return copy.copy(self._cached)

        try:
            html = self._path.read_text(encoding=self._encoding)
        except FileNotFoundError as e:
            raise MissingTemplateError(str(self._path)) from e

        document = parse_document(html, self._parser)
        logger.info(f"Parsed template {self._path} ({len(html)} characters)")

        if not self._cache:
            return document
        self._cached = document
        self._cached_mtime = mtime
        return copy.copy(document)
