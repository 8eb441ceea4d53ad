"""Grammar parser for the c4layout relationship language."""

from __future__ import annotations

from c4layout.syntax.parser import (
    parse,
    parse_arrow,
    parse_document,
    parse_identifier,
    parse_name_assignment,
    parse_relationship,
    parse_string,
)
from c4layout.syntax.types import Document, NameAssignment, Relationship

__all__ = [
    "Document",
    "NameAssignment",
    "Relationship",
    "parse",
    "parse_arrow",
    "parse_document",
    "parse_identifier",
    "parse_name_assignment",
    "parse_relationship",
    "parse_string",
]
