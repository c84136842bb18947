"""Template engine strategies.

Implements schema extraction and data binding for annotated HTML templates.
"""

from bindery.strategies.template_engine.context import ContextStack, DataRecord, get_property
from bindery.strategies.template_engine.engine import TemplateEngine, decode_input
from bindery.strategies.template_engine.extractor import SchemaExtractor
from bindery.strategies.template_engine.models import ComponentSchema, ExtractedSchema
from bindery.strategies.template_engine.renderer import TemplateRenderer
from bindery.strategies.template_engine.source import FileTemplateSource
from bindery.strategies.template_engine.toggles import ToggleFilter

__all__ = [
    "ComponentSchema",
    "ContextStack",
    "DataRecord",
    "ExtractedSchema",
    "FileTemplateSource",
    "SchemaExtractor",
    "TemplateEngine",
    "TemplateRenderer",
    "ToggleFilter",
    "decode_input",
    "get_property",
]
