"""Unit tests for the toggle filter."""

import pytest

from bindery.strategies.template_engine.dom import parse_document
from bindery.strategies.template_engine.toggles import ToggleFilter

TEMPLATE = """
<main data-component="root">
  <header id="header" data-toggleable="showHeader">
    <nav id="nav" data-toggleable="showNav">Menu</nav>
  </header>
  <section id="body">Body</section>
  <footer id="footer" data-toggleable="showFooter">Footer</footer>
  <aside id="extra" data-toggleable="showHeader">Extra</aside>
</main>
"""


@pytest.fixture
def toggle_filter():
    return ToggleFilter()


@pytest.fixture
def document():
    return parse_document(TEMPLATE)


class TestToggleFilter:
    """Test suite for ToggleFilter.apply."""

    def test_false_removes_element(self, toggle_filter, document):
        """Test that a flag set to false removes every element it marks."""
        removed = toggle_filter.apply(document, {"showHeader": False})
        assert removed == 2
        assert document.find(id="header") is None
        assert document.find(id="extra") is None
        assert document.find(id="body") is not None

    def test_true_keeps_element(self, toggle_filter, document):
        """Test that a flag set to true keeps the element."""
        assert toggle_filter.apply(document, {"showHeader": True}) == 0
        assert document.find(id="header") is not None

    def test_absent_flag_keeps_element(self, toggle_filter, document):
        """Test that missing flags keep the element."""
        assert toggle_filter.apply(document, {}) == 0
        assert document.find(id="footer") is not None

    @pytest.mark.parametrize("value", ["false", 0, None, [], "no"])
    def test_non_boolean_values_keep_element(self, toggle_filter, document, value):
        """Test that only the boolean false removes an element."""
        toggle_filter.apply(document, {"showFooter": value})
        assert document.find(id="footer") is not None

    def test_nested_toggle_removed_with_parent(self, toggle_filter, document):
        """Test that a nested toggled element disappears with its ancestor."""
        removed = toggle_filter.apply(document, {"showHeader": False, "showNav": False})
        assert document.find(id="nav") is None
        # The nav goes with the header and is not counted separately.
        assert removed == 2

    def test_non_object_input_removes_nothing(self, toggle_filter, document):
        """Test that list or scalar input has no flags."""
        assert toggle_filter.apply(document, [False]) == 0
        assert toggle_filter.apply(document, "showHeader") == 0

    def test_idempotent(self, toggle_filter, document):
        """Test that applying the filter twice gives the same document."""
        flags = {"showFooter": False}
        toggle_filter.apply(document, flags)
        once = str(document)
        assert toggle_filter.apply(document, flags) == 0
        assert str(document) == once

    def test_flag_names_in_document_order(self, toggle_filter, document):
        """Test listing the toggle flags a template uses."""
        assert toggle_filter.flag_names(document) == ["showHeader", "showNav", "showFooter"]
