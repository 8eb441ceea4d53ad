"""Syntax-level value types produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Relationship:
    """A directed, optionally labelled arrow between two entities.

    ``label`` is None when the arrow carries no inline name (``a --> b``).
    """

    source: str
    label: str | None
    target: str


@dataclass(frozen=True)
class NameAssignment:
    """``ident.name = value`` statement giving an entity a display name."""

    identifier: str
    value: str


@dataclass
class Document:
    """A fully parsed source document."""

    relationships: list[Relationship] = field(default_factory=list)
    display_names: dict[str, str] = field(default_factory=dict)
