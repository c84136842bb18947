"""Template renderer strategy.

Binds a data instance into a template document. The walk is depth-first;
each element is handled in a fixed order:

1. ``data-text-content`` replaces the element's text.
2. Each ``data-attribute-<name>`` sets attribute ``<name>``.
3. ``data-collection`` clones the item stencil once per list item. A value
   that is not a list empties the collection element.
4. Otherwise ``data-component`` opens a scope for its children. A
   ``root`` component directly under the root scope binds the input
   itself and never reads a field called ``root``.

Unresolved dotted expressions abort the render. Unresolved bare
expressions and components without data leave the markup as written.
"""

import copy
import logging
from typing import Any

from bs4 import BeautifulSoup, Tag

from bindery.interfaces.template import (
    COLLECTION_ATTR,
    COLLECTION_ITEM_ATTR,
    COMPONENT_ATTR,
    ROOT_SCOPE,
    TEXT_CONTENT_ATTR,
    BaseTemplateRenderer,
    ResolutionError,
    StructuralMismatchError,
)
from bindery.strategies.template_engine.context import ContextStack, format_value
from bindery.strategies.template_engine.dom import (
    annotation,
    binding_attributes,
    child_elements,
    stencil_of,
)
from bindery.strategies.template_engine.expressions import (
    Path,
    TemplateText,
    apply_template,
    parse_binding,
)
from bindery.strategies.template_engine.toggles import ToggleFilter

logger = logging.getLogger(__name__)


class TemplateRenderer(BaseTemplateRenderer):
    """Materializes data into annotated HTML.

    Uses BeautifulSoup trees; the caller supplies a working copy which is
    filtered by the ToggleFilter and then bound in place.
    """

    def __init__(self, toggle_filter: ToggleFilter | None = None) -> None:
        """Initialize the renderer.

        Args:
            toggle_filter: Filter run before binding. Defaults to ToggleFilter().
        """
        self._toggle_filter = toggle_filter or ToggleFilter()

    def render(self, document: BeautifulSoup, data: Any) -> str:
        return str(self.bind(document, data))

    def bind(self, document: BeautifulSoup | Tag, data: Any) -> BeautifulSoup | Tag:
        """Filter toggles and bind ``data`` into ``document`` in place.

        Returns:
            The same document, for chaining.

        Raises:
            ResolutionError: If a dotted expression cannot be resolved.
            StructuralMismatchError: If a collection has no usable item stencil
                or its clones do not match the item count.
            ExpressionSyntaxError: If an annotation value is malformed.
        """
        self._toggle_filter.apply(document, data)
        try:
            self._visit_children(document, ContextStack.root(data), None)
        except ResolutionError as e:
            logger.error(f"Render aborted: {e}")
            raise
        return document

    # =========================================================================
    # Traversal
    # =========================================================================

    def _visit(self, element: Tag, stack: ContextStack, skip: Tag | None) -> None:
        if element is skip:
            return

        text_binding = annotation(element, TEXT_CONTENT_ATTR)
        if text_binding:
            self._bind_text(element, text_binding, stack)

        for target, raw in binding_attributes(element):
            self._bind_attribute(element, target, raw, stack)

        if annotation(element, COLLECTION_ATTR):
            self._expand_collection(element, stack)
            return

        component = annotation(element, COMPONENT_ATTR)
        # The root scope already holds the input itself.
        if component == ROOT_SCOPE and stack.parent is None:
            component = None
        if component:
            found = stack.find_property(component)
            if found is None:
                logger.debug(f"No data for component '{component}' in {stack.names}")
            else:
                stack = stack.push(component, found[1])

        self._visit_children(element, stack, skip)

    def _visit_children(self, element: Tag, stack: ContextStack, skip: Tag | None) -> None:
        for child in child_elements(element):
            self._visit(child, stack, skip)

    def _expand_collection(self, element: Tag, stack: ContextStack) -> None:
        raw = annotation(element, COLLECTION_ATTR)
        stencil, item_name = stencil_of(element)

        items = self._resolve(parse_binding(raw), raw, stack)
        if items is None:
            items = []
        elif not isinstance(items, (list, tuple)):
            logger.warning(
                f"Collection '{raw}' resolved to {type(items).__name__}, "
                "not a list; removing its content"
            )
            element.clear(decompose=True)
            return

        # Content around the stencil is bound in the enclosing scope.
        self._visit_children(element, stack, stencil)

        parent = stencil.parent
        anchor = stencil
        clones: list[Tag] = []
        for item in items:
            clone = copy.copy(stencil)
            del clone[COLLECTION_ITEM_ATTR]
            self._visit(clone, stack.push(item_name, item), None)
            anchor.insert_after(clone)
            anchor = clone
            clones.append(clone)
        stencil.decompose()

        clone_ids = {id(clone) for clone in clones}
        created = sum(1 for child in parent.children if id(child) in clone_ids)
        if created != len(items):
            raise StructuralMismatchError(
                f"Collection '{raw}' produced {created} elements for {len(items)} items"
            )
        logger.debug(f"Expanded collection '{raw}' into {created} '{item_name}' elements")

    # =========================================================================
    # Bindings
    # =========================================================================

    def _resolve(self, path: Path, source: str, stack: ContextStack) -> Any | None:
        """Resolve ``path``; dotted failures raise, bare failures return None."""
        try:
            value = stack.resolve(path)
        except ResolutionError:
            if path.is_dotted:
                raise
            logger.warning(f"Leaving '{source}' unbound: no scope in {stack.names} has it")
            return None
        logger.debug(f"Resolved '{source}' in context {stack.names}")
        return value

    def _bind_text(self, element: Tag, raw: str, stack: ContextStack) -> None:
        value = self._resolve(parse_binding(raw), raw, stack)
        if value is not None:
            element.string = format_value(value)

    def _bind_attribute(self, element: Tag, target: str, raw: str, stack: ContextStack) -> None:
        values: dict[str, str] = {}
        for placeholder in TemplateText.parse(raw).placeholders:
            value = self._resolve(placeholder.path, raw, stack)
            if value is None:
                return
            values[str(placeholder.path)] = format_value(value)
        element[target] = apply_template(raw, values)
