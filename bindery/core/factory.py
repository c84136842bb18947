"""Component Factory for strategy instantiation.

The Factory Pattern allows the application to instantiate
different strategy implementations at runtime based on
configuration or environment variables.
"""

import logging
from pathlib import Path

from bindery.core.config import Settings, get_settings
from bindery.interfaces.form_store import BaseFormStore
from bindery.interfaces.template import (
    BaseSchemaExtractor,
    BaseTemplateRenderer,
    BaseTemplateSource,
)
from bindery.strategies.form_stores import LocalFormStore
from bindery.strategies.template_engine import (
    FileTemplateSource,
    SchemaExtractor,
    TemplateEngine,
    TemplateRenderer,
)

logger = logging.getLogger(__name__)

PACKAGE_TEMPLATES = Path(__file__).resolve().parent.parent / "templates"


class ComponentFactory:
    """Factory for creating component instances based on configuration.

    Example:
        ```python
        factory = ComponentFactory(get_settings())

        engine = factory.get_engine()
        schema = engine.extract()
        html = engine.render({"title": "Hi"})
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Application settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()
        self._source_cache: dict[Path, BaseTemplateSource] = {}
        self._extractor_cache: BaseSchemaExtractor | None = None
        self._renderer_cache: BaseTemplateRenderer | None = None
        self._form_store_cache: BaseFormStore | None = None

    def get_template_source(self, path: Path | None = None) -> BaseTemplateSource:
        """Get a template source, one per path.

        Args:
            path: Template file. If None, uses the configured template.

        Returns:
            A BaseTemplateSource implementation instance.
        """
        path = path or self._settings.template_path
        if path not in self._source_cache:
            logger.info(f"Instantiating template source: {path}")
            self._source_cache[path] = FileTemplateSource(
                path,
                parser=self._settings.html_parser,
                cache=self._settings.cache_templates,
            )
        return self._source_cache[path]

    def get_schema_extractor(self) -> BaseSchemaExtractor:
        if self._extractor_cache is None:
            logger.info("Instantiating schema extractor")
            self._extractor_cache = SchemaExtractor(
                include_empty=self._settings.include_empty_components,
            )
        return self._extractor_cache

    def get_renderer(self) -> BaseTemplateRenderer:
        if self._renderer_cache is None:
            logger.info("Instantiating template renderer")
            self._renderer_cache = TemplateRenderer()
        return self._renderer_cache

    def get_engine(self, path: Path | None = None) -> TemplateEngine:
        """Get an engine bound to a template.

        Args:
            path: Template file. If None, uses the configured template.
        """
        return TemplateEngine(
            source=self.get_template_source(path),
            extractor=self.get_schema_extractor(),
            renderer=self.get_renderer(),
        )

    def get_index_engine(self) -> TemplateEngine:
        """Engine for the packaged saved-inputs index page."""
        return self.get_engine(PACKAGE_TEMPLATES / "index.html")

    def get_form_store(self) -> BaseFormStore:
        if self._form_store_cache is None:
            logger.info(f"Instantiating form store: {self._settings.forms_dir}")
            self._form_store_cache = LocalFormStore(self._settings.forms_dir)
        return self._form_store_cache

    def clear_cache(self) -> None:
        """Clear all cached component instances.

        This forces new instances to be created on next access.
        Useful for testing or when settings change.
        """
        self._source_cache.clear()
        self._extractor_cache = None
        self._renderer_cache = None
        self._form_store_cache = None
        logger.debug("Component factory cache cleared")


# Global factory instance
_factory: ComponentFactory | None = None


def get_factory() -> ComponentFactory:
    """Get or create the global ComponentFactory instance.

    Returns:
        The singleton ComponentFactory instance.
    """
    global _factory
    if _factory is None:
        _factory = ComponentFactory()
    return _factory
