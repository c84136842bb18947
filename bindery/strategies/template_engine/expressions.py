"""Binding expression grammar.

Annotation values follow a small grammar::

    path ::= IDENT ("." IDENT)?
    text ::= (LITERAL | "${" path "}")*

A dotted path names a scope and a property on it; a bare path names a
property looked up in whichever scope exposes it. ``$${`` writes a literal
``${`` in text.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from bindery.interfaces.template import ExpressionSyntaxError

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_\-]*")
_TOKEN_RE = re.compile(r"\$\$\{|\$\{|\}|[^$}]+|\$")

ESCAPED_OPEN = "$${"
OPEN = "${"
CLOSE = "}"


@dataclass(frozen=True)
class Path:
    """A parsed binding path.

    Attributes:
        name: The property name.
        scope: The scope name for dotted paths, None for bare ones.
    """

    name: str
    scope: str | None = None

    @property
    def is_dotted(self) -> bool:
        return self.scope is not None

    def __str__(self) -> str:
        return f"{self.scope}.{self.name}" if self.scope else self.name


@dataclass(frozen=True)
class LiteralRun:
    text: str


@dataclass(frozen=True)
class Placeholder:
    path: Path
    source: str


Segment = LiteralRun | Placeholder


def parse_path(text: str) -> Path:
    """Parse ``IDENT ("." IDENT)?`` with surrounding whitespace ignored.

    Raises:
        ExpressionSyntaxError: If the text is not a valid path.
    """
    parts = [part.strip() for part in text.strip().split(".")]
    if len(parts) > 2:
        raise ExpressionSyntaxError(text, "at most one '.' is allowed")
    for part in parts:
        if not _IDENT_RE.fullmatch(part):
            raise ExpressionSyntaxError(text, f"'{part}' is not an identifier")
    if len(parts) == 2:
        return Path(name=parts[1], scope=parts[0])
    return Path(name=parts[0])


def tokenize(text: str) -> list[str]:
    """Split template text into ``${``, ``$${``, ``}`` and literal runs."""
    return _TOKEN_RE.findall(text)


@dataclass(frozen=True)
class TemplateText:
    """Attribute or text value split into literal and placeholder segments."""

    raw: str
    segments: tuple[Segment, ...]

    @classmethod
    def parse(cls, raw: str) -> "TemplateText":
        """Parse ``raw`` against the text grammar.

        Raises:
            ExpressionSyntaxError: On nested or unterminated placeholders.
        """
        segments: list[Segment] = []
        literal: list[str] = []
        inner: list[str] | None = None

        for token in tokenize(raw):
            if inner is not None:
                if token == CLOSE:
                    source = "".join(inner)
                    segments.append(Placeholder(parse_path(source), source))
                    inner = None
                elif token in (OPEN, ESCAPED_OPEN):
                    raise ExpressionSyntaxError(raw, "nested '${' inside a placeholder")
                else:
                    inner.append(token)
                continue

            if token == OPEN:
                if literal:
                    segments.append(LiteralRun("".join(literal)))
                    literal = []
                inner = []
            elif token == ESCAPED_OPEN:
                literal.append(OPEN)
            else:
                literal.append(token)

        if inner is not None:
            raise ExpressionSyntaxError(raw, "unterminated '${'")
        if literal:
            segments.append(LiteralRun("".join(literal)))
        return cls(raw=raw, segments=tuple(segments))

    @property
    def placeholders(self) -> list[Placeholder]:
        return [s for s in self.segments if isinstance(s, Placeholder)]

    @property
    def is_literal(self) -> bool:
        """True when the value contains no placeholder."""
        return not self.placeholders

    @property
    def is_pure(self) -> bool:
        """True when the value is exactly one ``${path}``."""
        return len(self.segments) == 1 and isinstance(self.segments[0], Placeholder)

    def render(self, resolve: Callable[[Path], str]) -> str:
        """Substitute placeholders left to right using ``resolve``."""
        out = []
        for segment in self.segments:
            if isinstance(segment, Placeholder):
                out.append(resolve(segment.path))
            else:
                out.append(segment.text)
        return "".join(out)


def extract_expression(raw: str) -> str:
    """Return the inner path of a pure ``${path}`` value, else ``raw``."""
    parsed = TemplateText.parse(raw)
    if parsed.is_pure:
        return parsed.placeholders[0].source.strip()
    return raw


def parse_binding(raw: str) -> Path:
    """Parse a binding annotation value, with or without a ``${...}`` wrapper."""
    return parse_path(extract_expression(raw))


def apply_template(raw: str, resolved: str | Mapping[str, str]) -> str:
    """Substitute resolved values into ``raw``.

    Args:
        raw: The annotation value as written.
        resolved: Either one value used for every placeholder, or a mapping
            from placeholder path (``"item.url"``) to value.

    Returns:
        ``resolved`` verbatim for a pure ``${path}`` value; otherwise ``raw``
        with each placeholder replaced and literal text preserved.
    """
    parsed = TemplateText.parse(raw)

    def lookup(path: Path) -> str:
        if isinstance(resolved, str):
            return resolved
        return resolved[str(path)]

    if parsed.is_pure:
        return lookup(parsed.placeholders[0].path)
    return parsed.render(lookup)
