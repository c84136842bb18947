"""Scoped name resolution for the binder.

Every data instance, whether a decoded JSON value or a typed record, is
read through one capability: look up a field by name and get the value or
None. The context stack is a persistent list of named scopes; pushing
returns a new stack and leaves the old one untouched, so each recursive
call simply holds the stack it was given.
"""

import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from bindery.interfaces.template import ROOT_SCOPE, ResolutionError
from bindery.strategies.template_engine.expressions import Path, parse_binding

logger = logging.getLogger(__name__)


@runtime_checkable
class Record(Protocol):
    """Anything that can look up a field by name."""

    def lookup(self, name: str) -> Any | None: ...


class DataRecord(BaseModel):
    """Base class for typed records.

    Field access goes through the class's declared field table rather than
    arbitrary attribute introspection, so helper attributes and methods are
    never visible to templates.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    def lookup(self, name: str) -> Any | None:
        fields = type(self).model_fields
        if name in fields:
            return getattr(self, name)
        for field_name, info in fields.items():
            if info.alias == name:
                return getattr(self, field_name)
        return None


def get_property(value: Any, name: str) -> Any | None:
    """Look up ``name`` on a data instance.

    Mappings, records and pydantic models expose named fields; scalars and
    lists expose none. JSON ``null`` is treated as absent.
    """
    if isinstance(value, Record):
        return value.lookup(name)
    if isinstance(value, BaseModel):
        if name in type(value).model_fields:
            return getattr(value, name)
        return None
    if isinstance(value, Mapping):
        return value.get(name)
    return None


def format_value(value: Any) -> str:
    """Render a resolved value as markup text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump_json()
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)


@dataclass(frozen=True)
class Scope:
    name: str
    value: Any


@dataclass(frozen=True)
class ContextStack:
    """Immutable stack of named scopes, innermost first.

    Attributes:
        top: The innermost scope.
        parent: The stack below it, None for the root frame.
    """

    top: Scope
    parent: "ContextStack | None" = None

    @classmethod
    def root(cls, data: Any) -> "ContextStack":
        """Create a stack holding only the ``root`` scope."""
        return cls(Scope(ROOT_SCOPE, data))

    def push(self, name: str, value: Any) -> "ContextStack":
        return ContextStack(Scope(name, value), self)

    def pop(self) -> "ContextStack":
        if self.parent is None:
            raise IndexError("Cannot pop the root scope")
        return self.parent

    def __iter__(self) -> Iterator[Scope]:
        frame: ContextStack | None = self
        while frame is not None:
            yield frame.top
            frame = frame.parent

    def __len__(self) -> int:
        return sum(1 for _ in self)

    @property
    def names(self) -> list[str]:
        """Scope names from outermost to innermost."""
        return [scope.name for scope in self][::-1]

    def lookup(self, name: str) -> Scope | None:
        """Return the innermost scope called ``name``."""
        for scope in self:
            if scope.name == name:
                return scope
        return None

    def find_property(self, name: str) -> tuple[Scope, Any] | None:
        """Return the innermost scope exposing ``name`` and the value found."""
        for scope in self:
            value = get_property(scope.value, name)
            if value is not None:
                return scope, value
        return None

    def resolve(self, path: Path) -> Any:
        """Resolve a parsed path against the stack.

        Dotted paths must name a scope on the stack whose value has the
        property. Bare paths take the first scope, innermost first, that
        exposes the property.

        Raises:
            ResolutionError: If the path cannot be resolved.
        """
        if path.scope is not None:
            scope = self.lookup(path.scope)
            if scope is None:
                raise ResolutionError(
                    str(path),
                    path.scope,
                    f"scope '{path.scope}' not in context {self.names}",
                )
            value = get_property(scope.value, path.name)
            if value is None:
                raise ResolutionError(
                    str(path),
                    path.scope,
                    f"scope '{path.scope}' has no property '{path.name}'",
                )
            return value

        found = self.find_property(path.name)
        if found is None:
            raise ResolutionError(
                str(path),
                "",
                f"no scope in {self.names} has property '{path.name}'",
            )
        scope, value = found
        logger.debug(f"Resolved bare '{path.name}' in scope '{scope.name}'")
        return value

    def resolve_expression(self, expression: str) -> Any:
        """Parse and resolve an annotation value such as ``item.name``."""
        return self.resolve(parse_binding(expression))
