"""Abstract base classes for template binding strategies."""

from bindery.interfaces.form_store import BaseFormStore, FormNotFoundError, InvalidFormNameError
from bindery.interfaces.template import (
    BaseSchemaExtractor,
    BaseTemplateRenderer,
    BaseTemplateSource,
    BindingError,
    ExpressionSyntaxError,
    InputFormatError,
    MissingTemplateError,
    ResolutionError,
    StructuralMismatchError,
)

__all__ = [
    "BaseFormStore",
    "BaseSchemaExtractor",
    "BaseTemplateRenderer",
    "BaseTemplateSource",
    "BindingError",
    "ExpressionSyntaxError",
    "FormNotFoundError",
    "InputFormatError",
    "InvalidFormNameError",
    "MissingTemplateError",
    "ResolutionError",
    "StructuralMismatchError",
]
