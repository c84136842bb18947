"""Schema extractor strategy.

Scans a template's binding annotations and derives the structure of the
data it expects. The walk mirrors the renderer's: component and collection
elements open scopes, and every binding is recorded as a string property on
the scope it resolves to.
"""

import logging

from bs4 import BeautifulSoup, Tag

from bindery.interfaces.template import (
    COLLECTION_ATTR,
    COMPONENT_ATTR,
    TEXT_CONTENT_ATTR,
    BaseSchemaExtractor,
)
from bindery.strategies.template_engine.dom import (
    annotation,
    binding_attributes,
    child_elements,
    find_root_component,
    stencil_of,
)
from bindery.strategies.template_engine.expressions import (
    Path,
    TemplateText,
    parse_binding,
)
from bindery.strategies.template_engine.models import ComponentSchema, ExtractedSchema
from bindery.strategies.template_engine.toggles import ToggleFilter

logger = logging.getLogger(__name__)

# Innermost last; extended by concatenation so each call keeps its own view.
Ancestors = tuple[tuple[str, ComponentSchema], ...]


class SchemaExtractor(BaseSchemaExtractor):
    """Infers a ComponentSchema tree from template annotations.

    Bare properties attach to the innermost ancestor already declaring them,
    otherwise to the innermost ancestor; dotted properties attach to the
    named ancestor or are dropped with a warning.
    """

    def __init__(self, include_empty: bool = True) -> None:
        """Initialize the extractor.

        Args:
            include_empty: Keep components that end up with no properties
                and no nested components.
        """
        self._include_empty = include_empty

    def extract(self, document: BeautifulSoup | Tag) -> ExtractedSchema | None:
        root_element = find_root_component(document)
        if root_element is None:
            logger.info("No data-component element found, nothing to extract")
            return None

        name = annotation(root_element, COMPONENT_ATTR)
        root = ComponentSchema()
        ancestors: Ancestors = ((name, root),)

        self._record_bindings(root_element, ancestors)
        if annotation(root_element, COLLECTION_ATTR):
            self._visit_collection(root_element, ancestors)
        else:
            self._visit_children(root_element, ancestors, None)

        if not self._include_empty:
            root = root.prune_empty()

        schema = ExtractedSchema(
            name=name,
            root=root,
            toggles=ToggleFilter().flag_names(document),
        )
        logger.info(
            f"Extracted schema '{name}': {len(root.properties)} properties, "
            f"{len(root.components)} components"
        )
        return schema

    # =========================================================================
    # Traversal
    # =========================================================================

    def _visit(self, element: Tag, ancestors: Ancestors, skip: Tag | None) -> None:
        if element is skip:
            return

        self._record_bindings(element, ancestors)

        if annotation(element, COLLECTION_ATTR):
            self._visit_collection(element, ancestors)
            return

        component = annotation(element, COMPONENT_ATTR)
        if component:
            node = ancestors[-1][1].add_component(component)
            self._visit_children(element, ancestors + ((component, node),), skip)
        else:
            self._visit_children(element, ancestors, skip)

    def _visit_children(self, element: Tag, ancestors: Ancestors, skip: Tag | None) -> None:
        for child in child_elements(element):
            self._visit(child, ancestors, skip)

    def _visit_collection(self, element: Tag, ancestors: Ancestors) -> None:
        raw = annotation(element, COLLECTION_ATTR)
        path = parse_binding(raw)
        stencil, item_name = stencil_of(element)

        owner = self._owner(path, ancestors, components=True)
        if owner is None:
            logger.warning(
                f"Collection '{raw}' names scope '{path.scope}' which is not an ancestor; "
                "collection dropped"
            )
        else:
            node = owner.add_component(path.name, array=True, item_name=item_name)
            self._visit(stencil, ancestors + ((item_name, node),), None)

        # Everything around the stencil stays in the enclosing scope.
        self._visit_children(element, ancestors, stencil)

    # =========================================================================
    # Bindings
    # =========================================================================

    def _record_bindings(self, element: Tag, ancestors: Ancestors) -> None:
        text_binding = annotation(element, TEXT_CONTENT_ATTR)
        if text_binding:
            self._add_property(parse_binding(text_binding), text_binding, ancestors)

        for _, raw in binding_attributes(element):
            for placeholder in TemplateText.parse(raw).placeholders:
                self._add_property(placeholder.path, raw, ancestors)

    def _add_property(self, path: Path, source: str, ancestors: Ancestors) -> None:
        owner = self._owner(path, ancestors, components=False)
        if owner is None:
            logger.warning(
                f"Scope '{path.scope}' not found among ancestors "
                f"{[name for name, _ in ancestors]} for '{source}'; property dropped"
            )
            return
        if owner.add_property(path.name):
            logger.debug(f"Added property '{path.name}' from '{source}'")

    def _owner(
        self, path: Path, ancestors: Ancestors, *, components: bool
    ) -> ComponentSchema | None:
        """Find the schema node a path belongs to, innermost first."""
        if path.is_dotted:
            for name, node in reversed(ancestors):
                if name == path.scope:
                    return node
            return None

        for _, node in reversed(ancestors):
            declared = node.components if components else node.properties
            if path.name in declared:
                return node
        return ancestors[-1][1]
