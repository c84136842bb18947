"""Unit tests for the file template source and the engine facade."""

import os
from unittest.mock import patch

import pytest
from bs4 import FeatureNotFound

from bindery.interfaces.template import InputFormatError, MissingTemplateError
from bindery.strategies.template_engine import FileTemplateSource, TemplateEngine, decode_input
from bindery.strategies.template_engine.dom import parse_document

TEMPLATE = '<main data-component="root"><h1 data-text-content="root.title">T</h1></main>'


@pytest.fixture
def template_file(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(TEMPLATE, encoding="utf-8")
    return path


# =============================================================================
# File Template Source Tests
# =============================================================================


class TestFileTemplateSource:
    """Test suite for FileTemplateSource."""

    def test_missing_file(self, tmp_path):
        """Test that a missing template raises MissingTemplateError."""
        source = FileTemplateSource(tmp_path / "absent.html")
        with pytest.raises(MissingTemplateError) as exc_info:
            source.load()
        assert "absent.html" in str(exc_info.value)

    def test_load_returns_independent_copies(self, template_file):
        """Test that mutating one loaded document leaves the next untouched."""
        source = FileTemplateSource(template_file)
        first = source.load()
        first.h1.string = "changed"
        assert source.load().h1.string == "T"

    def test_cache_reused_until_mtime_changes(self, template_file):
        """Test that the file is parsed again only after it changes."""
        source = FileTemplateSource(template_file)
        with patch(
            "bindery.strategies.template_engine.source.parse_document",
            wraps=parse_document,
        ) as parse:
            source.load()
            source.load()
            assert parse.call_count == 1

            template_file.write_text(TEMPLATE.replace(">T<", ">U<"), encoding="utf-8")
            stat = template_file.stat()
            os.utime(template_file, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))
            assert source.load().h1.string == "U"
            assert parse.call_count == 2

    def test_cache_disabled(self, template_file):
        """Test that cache=False parses on every load."""
        source = FileTemplateSource(template_file, cache=False)
        with patch(
            "bindery.strategies.template_engine.source.parse_document",
            wraps=parse_document,
        ) as parse:
            source.load()
            source.load()
            assert parse.call_count == 2

    def test_location(self, template_file):
        """Test that location reports the file path."""
        assert FileTemplateSource(template_file).location == str(template_file)


class TestParseDocument:
    """Test suite for parser selection."""

    def test_unknown_parser_falls_back(self):
        """Test that a missing parser backend falls back to html.parser."""
        document = parse_document(TEMPLATE, parser="no-such-parser")
        assert document.h1.string == "T"

    def test_default_parser_failure_propagates(self):
        """Test that the built-in parser failing is not masked."""
        with patch(
            "bindery.strategies.template_engine.dom.BeautifulSoup",
            side_effect=FeatureNotFound("html.parser"),
        ):
            with pytest.raises(FeatureNotFound):
                parse_document(TEMPLATE)


# =============================================================================
# Engine Tests
# =============================================================================


class TestTemplateEngine:
    """Test suite for TemplateEngine and input decoding."""

    @pytest.mark.parametrize("text", ["", "   ", "\n"])
    def test_blank_input(self, text):
        """Test that blank input is rejected."""
        with pytest.raises(InputFormatError, match="Missing JSON data"):
            decode_input(text)

    def test_invalid_json(self):
        """Test that malformed JSON is rejected."""
        with pytest.raises(InputFormatError, match="Invalid JSON format"):
            decode_input("{not json")

    def test_render_json(self, template_file):
        """Test decoding and rendering in one call."""
        engine = TemplateEngine(FileTemplateSource(template_file))
        html = engine.render_json('{"title": "Hi"}')
        assert ">Hi</h1>" in html

    def test_renders_do_not_leak(self, template_file):
        """Test that each render starts from the pristine template."""
        engine = TemplateEngine(FileTemplateSource(template_file))
        engine.render({"title": "First"})
        assert ">Second</h1>" in engine.render({"title": "Second"})

    def test_extract(self, template_file):
        """Test schema extraction through the engine."""
        schema = TemplateEngine(FileTemplateSource(template_file)).extract()
        assert schema.to_document() == {
            "root": {"properties": {"title": "string"}, "components": {}, "array": False}
        }
