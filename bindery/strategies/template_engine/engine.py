"""Template engine facade.

Ties a template source to the extractor and renderer. Every call works on
its own copy of the template and its own context stack.
"""

import json
import logging
from typing import Any

from bindery.interfaces.template import (
    BaseSchemaExtractor,
    BaseTemplateRenderer,
    BaseTemplateSource,
    InputFormatError,
)
from bindery.strategies.template_engine.extractor import SchemaExtractor
from bindery.strategies.template_engine.models import ExtractedSchema
from bindery.strategies.template_engine.renderer import TemplateRenderer

logger = logging.getLogger(__name__)


def decode_input(text: str) -> Any:
    """Decode a JSON input document.

    Raises:
        InputFormatError: If ``text`` is blank or not valid JSON.
    """
    if not text or not text.strip():
        raise InputFormatError("Missing JSON data")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InputFormatError(f"Invalid JSON format - {e}") from e


class TemplateEngine:
    """Extracts schemas from and renders data into one template source."""

    def __init__(
        self,
        source: BaseTemplateSource,
        extractor: BaseSchemaExtractor | None = None,
        renderer: BaseTemplateRenderer | None = None,
    ) -> None:
        self._source = source
        self._extractor = extractor or SchemaExtractor()
        self._renderer = renderer or TemplateRenderer()

    @property
    def source(self) -> BaseTemplateSource:
        return self._source

    def extract(self) -> ExtractedSchema | None:
        """Infer the schema of the template's expected data."""
        return self._extractor.extract(self._source.load())

    def render(self, data: Any) -> str:
        """Bind ``data`` into a fresh copy of the template."""
        document = self._source.load()
        html = self._renderer.render(document, data)
        logger.info(f"Rendered {self._source.location} ({len(html)} characters)")
        return html

    def render_json(self, text: str) -> str:
        """Decode ``text`` as JSON and render it.

        Raises:
            InputFormatError: If ``text`` is not valid JSON.
        """
        return self.render(decode_input(text))
