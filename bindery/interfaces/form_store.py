"""Saved input storage interface.

Inputs entered in the form UI can be saved and rendered again later.
"""

from abc import ABC, abstractmethod

LATEST = "latest"


class FormNotFoundError(Exception):
    """Raised when a saved input does not exist."""


class InvalidFormNameError(ValueError):
    """Raised when a saved input name could escape the storage directory."""


class BaseFormStore(ABC):
    """Abstract base class for saved input stores."""

    @abstractmethod
    def save(self, content: str) -> str:
        """Store a JSON document.

        Args:
            content: The JSON text, already validated.

        Returns:
            The generated name of the stored document.
        """

    @abstractmethod
    def list_names(self) -> list[str]:
        """Return stored document names, sorted."""

    @abstractmethod
    def load(self, name: str) -> str:
        """Return a stored document's text.

        Args:
            name: A name returned by ``save``, or ``"latest"`` for the most
                recently modified document.

        Raises:
            InvalidFormNameError: If the name contains path components.
            FormNotFoundError: If nothing is stored under the name.
        """
