"""BeautifulSoup helpers shared by the extractor and the renderer."""

import logging

from bs4 import BeautifulSoup, FeatureNotFound, Tag

from bindery.interfaces.template import (
    ATTRIBUTE_PREFIX,
    COLLECTION_ATTR,
    COLLECTION_ITEM_ATTR,
    COMPONENT_ATTR,
    StructuralMismatchError,
)

logger = logging.getLogger(__name__)

DEFAULT_PARSER = "html.parser"


def parse_document(html: str, parser: str = DEFAULT_PARSER) -> BeautifulSoup:
    """Parse markup, falling back to the built-in parser if ``parser`` is missing."""
    try:
        return BeautifulSoup(html, parser)
    except FeatureNotFound:
        if parser == DEFAULT_PARSER:
            raise
        logger.warning(f"HTML parser '{parser}' unavailable, using '{DEFAULT_PARSER}'")
        return BeautifulSoup(html, DEFAULT_PARSER)


def _has_value(value: str | None) -> bool:
    return bool(value and value.strip())


def annotation(element: Tag, name: str) -> str | None:
    """Return a stripped, non-empty annotation value or None."""
    value = element.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    if not _has_value(value):
        return None
    return value.strip()


def find_root_component(document: BeautifulSoup | Tag) -> Tag | None:
    """First element, in document order, declaring a component."""
    return document.find(attrs={COMPONENT_ATTR: _has_value})


def find_stencil(collection: Tag) -> Tag | None:
    """First item stencil belonging to ``collection``.

    Stencils of collections nested inside ``collection`` are skipped.
    """
    for candidate in collection.find_all(attrs={COLLECTION_ITEM_ATTR: True}):
        owner = candidate.find_parent(attrs={COLLECTION_ATTR: True})
        if owner is collection:
            return candidate
    return None


def stencil_of(collection: Tag) -> tuple[Tag, str]:
    """Return a collection's stencil and its item scope name.

    Raises:
        StructuralMismatchError: If there is no stencil or its item name is blank.
    """
    raw = annotation(collection, COLLECTION_ATTR)
    stencil = find_stencil(collection)
    if stencil is None:
        raise StructuralMismatchError(
            f"Collection '{raw}' has no element marked {COLLECTION_ITEM_ATTR}"
        )
    item_name = annotation(stencil, COLLECTION_ITEM_ATTR)
    if item_name is None:
        raise StructuralMismatchError(
            f"Collection '{raw}' has a stencil with an empty {COLLECTION_ITEM_ATTR}"
        )
    return stencil, item_name


def binding_attributes(element: Tag) -> list[tuple[str, str]]:
    """``(output attribute, raw value)`` pairs in declaration order."""
    bindings = []
    for key, value in list(element.attrs.items()):
        if key.startswith(ATTRIBUTE_PREFIX) and len(key) > len(ATTRIBUTE_PREFIX):
            if isinstance(value, list):
                value = " ".join(value)
            bindings.append((key[len(ATTRIBUTE_PREFIX):], value))
    return bindings


def child_elements(element: Tag) -> list[Tag]:
    """Snapshot of direct child tags, safe to iterate while mutating."""
    return [child for child in element.children if isinstance(child, Tag)]
