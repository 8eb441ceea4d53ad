"""Recursive-descent parser for the relationship language.

Grammar (PEG, ordered choice, no backtracking inside a repetition):

    identifier    = head tail*          head: not a digit, whitespace, - < > "
                                        tail: [0-9A-Za-z_]
    string        = '"' [^"]+ '"' / [^ \\t\\n]+
    ws            = ' '*
    all_ws        = [ \\n\\t]*
    arrow         = '-'+ identifier '-'+ '>' / '-'+ '>'
    relationship  = ws identifier ws arrow ws identifier ws
    name_assign   = ws identifier '.name' ws '=' ws string ws
    statement     = relationship / name_assign
    document      = all_ws statement ('\\n' all_ws statement)* all_ws EOF

Every public entry point must consume its whole input. Any mismatch raises a
single ``ParseError`` positioned at the furthest offset the parser reached.
"""

from __future__ import annotations

import logging
import string as _string
from typing import Callable, TypeVar

from c4layout.errors import ParseError
from c4layout.syntax.types import Document, NameAssignment, Relationship

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ─── Character classes ────────────────────────────────────────────────────────

SPACE: str = " "
STATEMENT_WHITESPACE: str = " \n\t"
DIGITS: str = _string.digits
IDENTIFIER_TAIL: frozenset[str] = frozenset(_string.ascii_letters + _string.digits + "_")
# Characters that would make arrows and quoted strings ambiguous as an identifier head.
IDENTIFIER_HEAD_EXCLUDED: frozenset[str] = frozenset(DIGITS + '-<>"')


class _NoMatch(Exception):
    """Backtracking signal; converted to ``ParseError`` at the entry point."""


# ─── Parser ───────────────────────────────────────────────────────────────────


class _Parser:
    """Cursor over the source text with furthest-failure tracking."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self._furthest = 0
        self._expected: set[str] = set()

    # ── primitives ──

    def _fail(self, expected: str) -> _NoMatch:
        if self.pos > self._furthest:
            self._furthest = self.pos
            self._expected = {expected}
        elif self.pos == self._furthest:
            self._expected.add(expected)
        return _NoMatch()

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _skip(self, chars: str | frozenset[str]) -> str:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in chars:
            self.pos += 1
        return self.text[start : self.pos]

    def _literal(self, token: str) -> str:
        if self.text.startswith(token, self.pos):
            self.pos += len(token)
            return token
        raise self._fail(repr(token))

    def _dashes(self) -> None:
        if not self._skip("-"):
            raise self._fail("'-'")

    def end(self) -> None:
        if self.pos != len(self.text):
            raise self._fail("end of input")

    def error(self) -> ParseError:
        pos = self._furthest
        line = self.text.count("\n", 0, pos) + 1
        column = pos - (self.text.rfind("\n", 0, pos) + 1) + 1
        eol = self.text.find("\n", pos)
        found = self.text[pos:] if eol == -1 else self.text[pos:eol]
        return ParseError(
            position=pos,
            line=line,
            column=column,
            expected=tuple(sorted(self._expected)),
            found=found,
        )

    # ── grammar rules ──

    def identifier(self) -> str:
        start = self.pos
        head = self._peek()
        if not head or head.isspace() or head in IDENTIFIER_HEAD_EXCLUDED:
            raise self._fail("identifier")
        self.pos += 1
        self._skip(IDENTIFIER_TAIL)
        return self.text[start : self.pos]

    def string(self) -> str:
        if self._peek() == '"':
            close = self.text.find('"', self.pos + 1)
            if close > self.pos + 1:
                value = self.text[self.pos + 1 : close]
                self.pos = close + 1
                return value
        start = self.pos
        while self.pos < len(self.text) and not self.text[self.pos].isspace():
            self.pos += 1
        if self.pos == start:
            raise self._fail("string")
        return self.text[start : self.pos]

    def arrow(self) -> str | None:
        start = self.pos
        try:
            self._dashes()
            label = self.identifier()
            self._dashes()
            self._literal(">")
            return label
        except _NoMatch:
            self.pos = start
        self._dashes()
        self._literal(">")
        return None

    def relationship(self) -> Relationship:
        self._skip(SPACE)
        source = self.identifier()
        self._skip(SPACE)
        label = self.arrow()
        self._skip(SPACE)
        target = self.identifier()
        self._skip(SPACE)
        return Relationship(source=source, label=label, target=target)

    def name_assignment(self) -> NameAssignment:
        self._skip(SPACE)
        identifier = self.identifier()
        self._literal(".name")
        self._skip(SPACE)
        self._literal("=")
        self._skip(SPACE)
        value = self.string()
        self._skip(SPACE)
        return NameAssignment(identifier=identifier, value=value)

    def statement(self) -> Relationship | NameAssignment:
        start = self.pos
        try:
            return self.relationship()
        except _NoMatch:
            self.pos = start
        return self.name_assignment()

    def document(self) -> Document:
        doc = Document()
        self._skip(STATEMENT_WHITESPACE)
        _add_statement(doc, self.statement())
        while True:
            start = self.pos
            try:
                self._literal("\n")
                self._skip(STATEMENT_WHITESPACE)
                stmt = self.statement()
            except _NoMatch:
                self.pos = start
                break
            _add_statement(doc, stmt)
        self._skip(STATEMENT_WHITESPACE)
        return doc


def _add_statement(doc: Document, stmt: Relationship | NameAssignment) -> None:
    if isinstance(stmt, Relationship):
        doc.relationships.append(stmt)
    else:
        doc.display_names[stmt.identifier] = stmt.value


def _run(text: str, rule: Callable[[_Parser], T]) -> T:
    parser = _Parser(text)
    try:
        value = rule(parser)
        parser.end()
    except _NoMatch:
        raise parser.error() from None
    return value


# ─── Public API ───────────────────────────────────────────────────────────────


def parse_identifier(text: str) -> str:
    """Parse a whole string as one identifier."""
    return _run(text, _Parser.identifier)


def parse_string(text: str) -> str:
    """Parse a quoted or bare string; quotes are stripped."""
    return _run(text, _Parser.string)


def parse_arrow(text: str) -> str | None:
    """Parse an arrow and return its embedded label, or None if unlabelled."""
    return _run(text, _Parser.arrow)


def parse_relationship(text: str) -> Relationship:
    return _run(text, _Parser.relationship)


def parse_name_assignment(text: str) -> NameAssignment:
    return _run(text, _Parser.name_assignment)


def parse_document(text: str) -> Document:
    """Parse a full source document.

    A document without any relationship (only name assignments) is rejected:
    there would be nothing to lay out.
    """
    doc = _run(text, _Parser.document)
    if not doc.relationships:
        raise ParseError(
            position=0,
            line=1,
            column=1,
            expected=("relationship",),
            found=text.split("\n", 1)[0],
        )
    logger.debug(
        "parsed %d relationships, %d display names",
        len(doc.relationships),
        len(doc.display_names),
    )
    return doc


def parse(text: str) -> list[Relationship]:
    """Parse source text into its ordered relationship list."""
    return parse_document(text).relationships
