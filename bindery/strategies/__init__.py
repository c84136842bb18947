"""Concrete strategy implementations."""

from bindery.strategies.form_stores import (
    LocalFormStore,
)
from bindery.strategies.template_engine import (
    FileTemplateSource,
    SchemaExtractor,
    TemplateRenderer,
)

__all__ = [
    "LocalFormStore",
    "FileTemplateSource",
    "SchemaExtractor",
    "TemplateRenderer",
]
