"""Unit tests for typed record generation and the extract/render round trip."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from bindery.strategies.template_engine.codegen import (
    attribute_name,
    build_models,
    class_name,
    collect_records,
    input_model,
    render_models_source,
)
from bindery.strategies.template_engine.context import DataRecord, get_property
from bindery.strategies.template_engine.dom import parse_document
from bindery.strategies.template_engine.extractor import SchemaExtractor
from bindery.strategies.template_engine.renderer import TemplateRenderer

GAME_TEMPLATE = Path(__file__).resolve().parents[2] / "templates" / "game.html"

GAME_DATA = {
    "showHeader": True,
    "showFooter": False,
    "title": "Game Night",
    "subtitle": "Round robin",
    "host": {"name": "Dana", "email": "dana@example.com"},
    "players": [
        {"name": "Ann", "avatar": "/a.png", "rounds": [{"score": "3"}, {"score": 5}]},
        {"name": "Bo", "avatar": "/b.png", "rounds": []},
    ],
    "rulesUrl": "/rules",
}


@pytest.fixture
def game_schema():
    document = parse_document(GAME_TEMPLATE.read_text(encoding="utf-8"))
    return SchemaExtractor().extract(document)


# =============================================================================
# Naming Tests
# =============================================================================


class TestNaming:
    """Test suite for class and attribute naming."""

    @pytest.mark.parametrize(
        "name, expected",
        [("item", "Item"), ("order-line", "OrderLine"), ("rules_url", "RulesUrl"), ("2fa", "R2fa")],
    )
    def test_class_name(self, name, expected):
        """Test conversion of scope names to class names."""
        assert class_name(name) == expected

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("title", "title"),
            ("rules-url", "rules_url"),
            ("class", "class_"),
            ("1st", "field_1st"),
            ("model_name", "model_name_"),
            ("lookup", "lookup_"),
        ],
    )
    def test_attribute_name(self, name, expected):
        """Test Python-safe attribute names for template properties."""
        assert attribute_name(name) == expected


# =============================================================================
# Model Building Tests
# =============================================================================


class TestBuildModels:
    """Test suite for runtime record classes."""

    def test_records_nested_first(self, game_schema):
        """Test that nested records are defined before their users."""
        names = [record.name for record in collect_records(game_schema)]
        assert names == ["Host", "Round", "Player", "Root"]

    def test_models_derive_from_data_record(self, game_schema):
        """Test that every generated class is a DataRecord."""
        models = build_models(game_schema)
        assert all(issubclass(model, DataRecord) for model in models.values())
        assert list(models)[-1] == "Root"

    def test_input_validates_and_coerces(self, game_schema):
        """Test validating JSON input into typed records."""
        record = input_model(game_schema).model_validate(GAME_DATA)
        players = get_property(record, "players")
        assert get_property(players[0], "name") == "Ann"
        assert get_property(get_property(players[0], "rounds")[1], "score") == "5"
        assert get_property(record, "showFooter") is False

    def test_input_rejects_missing_fields(self, game_schema):
        """Test that typed input requires every declared property."""
        with pytest.raises(ValidationError):
            input_model(game_schema).model_validate({"title": "x"})

    def test_hyphenated_property_uses_alias(self):
        """Test that template names that are not identifiers round-trip via aliases."""
        schema = SchemaExtractor().extract(
            parse_document('<div data-component="root"><a data-attribute-href="${root.rules-url}">x</a></div>')
        )
        record = input_model(schema).model_validate({"rules-url": "/r"})
        assert record.rules_url == "/r"
        assert get_property(record, "rules-url") == "/r"

    def test_named_root_wrapped_in_input(self):
        """Test that a root component not named root is a field of the input."""
        schema = SchemaExtractor().extract(
            parse_document('<div data-component="game"><p data-text-content="game.title">x</p></div>')
        )
        model = input_model(schema)
        assert model.__name__ == "Input"
        record = model.model_validate({"game": {"title": "Chess"}})
        assert get_property(get_property(record, "game"), "title") == "Chess"


# =============================================================================
# Source Generation Tests
# =============================================================================


class TestRenderModelsSource:
    """Test suite for emitted Python source."""

    def test_source_defines_every_record(self, game_schema):
        """Test the emitted class definitions and annotations."""
        source = render_models_source(game_schema)
        assert "from bindery.strategies.template_engine.context import DataRecord" in source
        assert "class Host(DataRecord):" in source
        assert "class Root(DataRecord):" in source
        assert "    players: list[Player]" in source
        assert "    host: Host" in source
        assert "    rulesUrl: str" in source
        assert source.index("class Player(") < source.index("class Root(")

    def test_source_uses_field_alias(self):
        """Test that aliased fields import and use pydantic.Field."""
        schema = SchemaExtractor().extract(
            parse_document('<div data-component="root"><b data-text-content="rules-url">x</b></div>')
        )
        source = render_models_source(schema)
        assert "from pydantic import Field" in source
        assert '    rules_url: str = Field(alias="rules-url")' in source

    def test_source_compiles(self, game_schema):
        """Test that the emitted module is valid Python."""
        compile(render_models_source(game_schema), "models.py", "exec")


# =============================================================================
# Round Trip Tests
# =============================================================================


class TestRoundTrip:
    """Test that data shaped like an extracted schema always binds."""

    def test_extracted_schema_binds_its_data(self, game_schema):
        """Test rendering validated typed input into the same template."""
        record = input_model(game_schema).model_validate(GAME_DATA)
        document = parse_document(GAME_TEMPLATE.read_text(encoding="utf-8"))
        html = TemplateRenderer().render(document, record)

        assert "Game Night" in html
        assert 'href="mailto:dana@example.com"' in html
        assert 'alt="Avatar of Ann"' in html
        assert "<footer" not in html
        assert "data-collection-item" not in html

    def test_plain_json_renders_the_same(self, game_schema):
        """Test that untyped and typed input produce the same markup."""
        typed = input_model(game_schema).model_validate(GAME_DATA)
        untyped = dict(GAME_DATA, players=[
            dict(player, rounds=[{"score": str(r["score"])} for r in player["rounds"]])
            for player in GAME_DATA["players"]
        ])
        html = [
            TemplateRenderer().render(parse_document(GAME_TEMPLATE.read_text(encoding="utf-8")), data)
            for data in (typed, untyped)
        ]
        assert html[0] == html[1]
