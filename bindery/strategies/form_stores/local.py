"""Local directory form store.

Saves each input as ``<8 hex digits>.json`` in a configured directory.
"""

import logging
import secrets
from pathlib import Path

from bindery.interfaces.form_store import (
    LATEST,
    BaseFormStore,
    FormNotFoundError,
    InvalidFormNameError,
)

logger = logging.getLogger(__name__)

SUFFIX = ".json"


def _generate_form_id() -> str:
    """Generate a random 8 character hex ID."""
    return secrets.token_hex(4)


class LocalFormStore(BaseFormStore):
    """Stores saved inputs as JSON files on disk."""

    def __init__(self, directory: str | Path, encoding: str = "utf-8") -> None:
        """Initialize the store.

        Args:
            directory: Folder holding the saved inputs. Created on first save.
            encoding: Character encoding of the files.
        """
        self._directory = Path(directory)
        self._encoding = encoding

    @property
    def directory(self) -> Path:
        return self._directory

    def save(self, content: str) -> str:
        if not self._directory.exists():
            self._directory.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created forms directory: {self._directory}")

        path = self._directory / f"{_generate_form_id()}{SUFFIX}"
        while path.exists():
            path = self._directory / f"{_generate_form_id()}{SUFFIX}"

        path.write_text(content, encoding=self._encoding)
        logger.info(f"Saved form data to: {path.resolve()}")
        return path.name

    def list_names(self) -> list[str]:
        return sorted(path.name for path in self._files())

    def load(self, name: str) -> str:
        return self._resolve(name).read_text(encoding=self._encoding)

    def _files(self) -> list[Path]:
        if not self._directory.exists():
            return []
        return [
            path
            for path in self._directory.iterdir()
            if path.is_file() and path.suffix.lower() == SUFFIX
        ]

    def _resolve(self, name: str) -> Path:
        if name == LATEST:
            files = self._files()
            if not files:
                raise FormNotFoundError("No files found in forms directory")
            return max(files, key=lambda path: path.stat().st_mtime_ns)

        if not name or ".." in name or "/" in name or "\\" in name:
            raise InvalidFormNameError(f"Invalid filename: {name}")

        path = self._directory / name
        if not path.is_file():
            raise FormNotFoundError(f"File not found: {name}")
        return path
