"""Exception types raised by the c4layout pipeline."""

from __future__ import annotations


class C4LayoutError(Exception):
    """Base class for every error raised by c4layout."""


class ParseError(C4LayoutError):
    """The document grammar did not match.

    Carries the furthest position the parser reached, so callers can point a
    user at the offending text.

    Attributes:
        position: 0-based character offset of the failure.
        line: 1-based line number of ``position``.
        column: 1-based column number of ``position``.
        expected: Sorted tuple of token descriptions that would have matched.
        found: Offending text from ``position`` up to the end of its line.
    """

    def __init__(
        self,
        position: int,
        line: int,
        column: int,
        expected: tuple[str, ...],
        found: str,
    ) -> None:
        self.position = position
        self.line = line
        self.column = column
        self.expected = expected
        self.found = found
        super().__init__(self._message())

    def _message(self) -> str:
        found = repr(self.found) if self.found else "end of input"
        expected = ", ".join(self.expected) if self.expected else "nothing"
        return f"line {self.line}, column {self.column}: expected {expected}, found {found}"


class InternalInvariantViolation(C4LayoutError):
    """A cycle survived cycle removal. Indicates a bug, never retried."""
