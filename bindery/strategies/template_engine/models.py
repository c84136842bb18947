"""Template engine domain models.

Pydantic models describing the data shape a template expects. A schema
document looks like::

    {"root": {"properties": {"title": "string"},
              "components": {"items": {"properties": {...},
                                       "components": {},
                                       "array": true,
                                       "itemName": "item"}},
              "array": false}}
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from bindery.interfaces.template import StructuralMismatchError

STRING_TYPE = "string"


class ComponentSchema(BaseModel):
    """One node of an extracted schema."""

    model_config = ConfigDict(populate_by_name=True)

    properties: dict[str, str] = Field(
        default_factory=dict, description="Scalar properties by name"
    )
    components: dict[str, "ComponentSchema"] = Field(
        default_factory=dict, description="Nested components by property name"
    )
    array: bool = Field(default=False, description="Whether the property holds a list")
    item_name: str | None = Field(
        default=None,
        alias="itemName",
        description="Scope name of each list item (arrays only)",
    )

    def add_property(self, name: str) -> bool:
        """Record a string property. The first declaration wins.

        Returns:
            True if the property was new.
        """
        if name in self.properties:
            return False
        self.properties[name] = STRING_TYPE
        return True

    def add_component(
        self, name: str, *, array: bool = False, item_name: str | None = None
    ) -> "ComponentSchema":
        """Register a nested component, reusing an existing one of the same kind.

        Raises:
            StructuralMismatchError: If ``name`` is already registered as the
                other kind (list versus single object) or with another item name.
        """
        existing = self.components.get(name)
        if existing is None:
            existing = ComponentSchema(array=array, item_name=item_name)
            self.components[name] = existing
            return existing

        if existing.array != array or existing.item_name != item_name:
            raise StructuralMismatchError(
                f"Component '{name}' is declared both as "
                f"{'a list' if existing.array else 'an object'} and as "
                f"{'a list' if array else 'an object'}"
            )
        return existing

    @property
    def is_empty(self) -> bool:
        return not self.properties and not self.components

    def prune_empty(self) -> "ComponentSchema":
        """Return a copy without empty nested components, recursively."""
        components = {}
        for name, child in self.components.items():
            pruned = child.prune_empty()
            if not pruned.is_empty:
                components[name] = pruned
        return self.model_copy(update={"components": components})

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ExtractedSchema(BaseModel):
    """Schema rooted at the outermost component of a template.

    Attributes:
        name: Name of the outermost component.
        root: The component tree.
        toggles: Toggle flag names found in the template, in document order.
    """

    name: str
    root: ComponentSchema
    toggles: list[str] = Field(default_factory=list)

    def to_document(self) -> dict[str, Any]:
        document = self.root.to_document()
        if self.toggles:
            document["toggles"] = list(self.toggles)
        return {self.name: document}

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "ExtractedSchema":
        """Parse a schema document produced by ``to_document``.

        Raises:
            ValueError: If the document does not hold exactly one root component.
        """
        if len(document) != 1:
            raise ValueError(
                f"Schema document must have exactly one root component, got {list(document)}"
            )
        name, body = next(iter(document.items()))
        body = dict(body)
        toggles = body.pop("toggles", [])
        return cls(name=name, root=ComponentSchema.model_validate(body), toggles=toggles)
