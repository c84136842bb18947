"""Typed record generation.

Turns an extracted schema into pydantic record classes, either built at
runtime (to validate and bind typed input) or emitted as Python source.
Every generated class derives from DataRecord, so the binder reads it
through the class's declared fields.
"""

import keyword
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from pydantic import Field, create_model

from bindery.interfaces.template import ROOT_SCOPE
from bindery.strategies.template_engine.context import DataRecord
from bindery.strategies.template_engine.models import ComponentSchema, ExtractedSchema

logger = logging.getLogger(__name__)

INPUT_CLASS = "Input"


@dataclass
class FieldSpec:
    """One field of a generated record.

    Attributes:
        name: Python attribute name.
        alias: Name used in templates and JSON when it differs from ``name``.
        target: Record class name for nested fields, None for strings.
        is_list: Whether the field holds a list of ``target`` records.
    """

    name: str
    alias: str | None = None
    target: str | None = None
    is_list: bool = False

    @property
    def annotation(self) -> str:
        if self.target is None:
            return "str"
        return f"list[{self.target}]" if self.is_list else self.target


@dataclass
class RecordSpec:
    name: str
    fields: list[FieldSpec] = field(default_factory=list)


def class_name(name: str) -> str:
    """``order-line`` -> ``OrderLine``, ``item`` -> ``Item``."""
    parts = [part for part in re.split(r"[^A-Za-z0-9]+", name) if part]
    result = "".join(part[0].upper() + part[1:] for part in parts) or "Record"
    if result[0].isdigit():
        result = f"R{result}"
    return result


def attribute_name(name: str) -> str:
    """Python-safe attribute name for a template property."""
    result = re.sub(r"\W", "_", name).lstrip("_") or "field"
    if result[0].isdigit():
        result = f"field_{result}"
    if keyword.iskeyword(result) or result.startswith("model_") or hasattr(DataRecord, result):
        result = f"{result}_"
    return result


def collect_records(schema: ExtractedSchema) -> list[RecordSpec]:
    """Flatten a schema into record specs, nested records first."""
    records: list[RecordSpec] = []
    taken: set[str] = {INPUT_CLASS}

    def unique(name: str) -> str:
        candidate = class_name(name)
        base, counter = candidate, 2
        while candidate in taken:
            candidate = f"{base}{counter}"
            counter += 1
        taken.add(candidate)
        return candidate

    def visit(name: str, node: ComponentSchema) -> str:
        spec = RecordSpec(name=unique(name))
        for component, child in node.components.items():
            child_name = child.item_name if child.array and child.item_name else component
            target = visit(child_name, child)
            spec.fields.append(_field(component, target=target, is_list=child.array))
        for prop in node.properties:
            spec.fields.append(_field(prop))
        records.append(spec)
        return spec.name

    visit(schema.name, schema.root)
    return records


def _field(name: str, target: str | None = None, is_list: bool = False) -> FieldSpec:
    attribute = attribute_name(name)
    return FieldSpec(
        name=attribute,
        alias=None if attribute == name else name,
        target=target,
        is_list=is_list,
    )


def build_models(schema: ExtractedSchema) -> dict[str, type[DataRecord]]:
    """Create record classes for ``schema``.

    Returns:
        Classes by name, in definition order; the last one is the root
        component's record.
    """
    models: dict[str, type[DataRecord]] = {}
    for spec in collect_records(schema):
        definitions: dict[str, Any] = {}
        for spec_field in spec.fields:
            annotation: Any = str
            if spec_field.target is not None:
                annotation = models[spec_field.target]
                if spec_field.is_list:
                    annotation = list[annotation]
            if spec_field.alias:
                definitions[spec_field.name] = (annotation, Field(alias=spec_field.alias))
            else:
                definitions[spec_field.name] = (annotation, ...)
        models[spec.name] = create_model(spec.name, __base__=DataRecord, **definitions)
        logger.debug(f"Built record {spec.name} with {len(spec.fields)} fields")
    return models


def input_model(schema: ExtractedSchema) -> type[DataRecord]:
    """Record class for the whole input document of a render.

    A root component named ``root`` binds the input itself; any other name
    is read as a field of the input. Toggle flags become optional booleans
    on the input record.
    """
    models = build_models(schema)
    root_model = list(models.values())[-1]

    definitions: dict[str, Any] = {}
    if schema.name != ROOT_SCOPE:
        spec_field = _field(schema.name)
        if spec_field.alias:
            definitions[spec_field.name] = (root_model, Field(alias=spec_field.alias))
        else:
            definitions[spec_field.name] = (root_model, ...)
    for flag in schema.toggles:
        spec_field = _field(flag)
        if spec_field.name in definitions or spec_field.name in root_model.model_fields:
            continue
        definitions[spec_field.name] = (bool | None, Field(default=None, alias=spec_field.alias))

    if not definitions:
        return root_model
    base = root_model if schema.name == ROOT_SCOPE else DataRecord
    return create_model(INPUT_CLASS, __base__=base, **definitions)


def render_models_source(schema: ExtractedSchema) -> str:
    """Emit a Python module defining the record classes for ``schema``."""
    records = collect_records(schema)
    uses_alias = any(f.alias for record in records for f in record.fields)

    lines = [
        f'"""Typed records for the \'{schema.name}\' template."""',
        "",
    ]
    if uses_alias:
        lines.append("from pydantic import Field")
        lines.append("")
    lines.append("from bindery.strategies.template_engine.context import DataRecord")

    for record in records:
        lines.extend(["", "", f"class {record.name}(DataRecord):"])
        if not record.fields:
            lines.append("    pass")
        for spec_field in record.fields:
            if spec_field.alias:
                lines.append(
                    f'    {spec_field.name}: {spec_field.annotation} = Field(alias="{spec_field.alias}")'
                )
            else:
                lines.append(f"    {spec_field.name}: {spec_field.annotation}")
    lines.append("")
    return "\n".join(lines)
