"""Template binding interfaces.

Defines abstract base classes for the template binding engine and the
errors it raises. Templates are HTML documents carrying ``data-*``
binding annotations; the engine either infers the data schema a template
expects or binds a data instance into it.
"""

from abc import ABC, abstractmethod
from typing import Any

from bs4 import BeautifulSoup

# =============================================================================
# Annotation Vocabulary
# =============================================================================

COMPONENT_ATTR = "data-component"
TEXT_CONTENT_ATTR = "data-text-content"
ATTRIBUTE_PREFIX = "data-attribute-"
COLLECTION_ATTR = "data-collection"
COLLECTION_ITEM_ATTR = "data-collection-item"
TOGGLE_ATTR = "data-toggleable"

ROOT_SCOPE = "root"


# =============================================================================
# Errors
# =============================================================================


class BindingError(Exception):
    """Base class for template binding failures."""


class InputFormatError(BindingError):
    """Raised when supplied data is not parseable as JSON."""


class MissingTemplateError(BindingError):
    """Raised when the template source is unavailable."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Template not found: {path}")


class ResolutionError(BindingError):
    """Raised when a dotted expression cannot be resolved.

    Attributes:
        expression: The expression as written in the template.
        scope: The scope name the expression targets.
    """

    def __init__(self, expression: str, scope: str, reason: str) -> None:
        self.expression = expression
        self.scope = scope
        super().__init__(f"Could not resolve '{expression}': {reason}")


class StructuralMismatchError(BindingError):
    """Raised when template structure and data or schema disagree."""


class ExpressionSyntaxError(BindingError):
    """Raised when an annotation value does not follow the expression grammar."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        super().__init__(f"Invalid expression '{text}': {reason}")


# =============================================================================
# Strategies
# =============================================================================


class BaseTemplateSource(ABC):
    """Abstract base class for template sources.

    A source hands out a freshly parsed (or copied) document per call so
    that callers may mutate it freely.
    """

    @abstractmethod
    def load(self) -> BeautifulSoup:
        """Return a working copy of the template document.

        Raises:
            MissingTemplateError: If the template cannot be read.
        """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human readable location of the template."""


class BaseSchemaExtractor(ABC):
    """Abstract base class for schema inference strategies."""

    @abstractmethod
    def extract(self, document: BeautifulSoup) -> Any:
        """Derive the schema of the data a template expects.

        Args:
            document: Parsed template document.

        Returns:
            An ExtractedSchema, or None if no element declares a component.
        """


class BaseTemplateRenderer(ABC):
    """Abstract base class for data binding strategies."""

    @abstractmethod
    def render(self, document: BeautifulSoup, data: Any) -> str:
        """Bind a data instance into a template document.

        The document is mutated in place; pass a working copy.

        Args:
            document: Parsed template document.
            data: Root data instance (mapping, typed record, list or scalar).

        Returns:
            The bound markup as text.

        Raises:
            ResolutionError: If a dotted expression cannot be resolved.
            StructuralMismatchError: If a collection has no item stencil.
        """
