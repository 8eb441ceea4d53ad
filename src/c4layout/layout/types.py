"""Layout types shared between the layout engine and renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Placeholder:
    """Pass-through of one long edge at one intermediate layer.

    ``(source, target, key)`` is the multigraph edge in acyclic (post cycle
    removal) orientation. Two placeholders are equal only if they stand for
    the same edge at the same layer; a placeholder never equals a real node,
    which is always a ``str``.
    """

    source: str
    target: str
    key: int
    layer: int


# Real nodes are referenced by their identifier.
NodeRef = Union[str, Placeholder]


def is_placeholder(node: NodeRef) -> bool:
    return isinstance(node, Placeholder)


@dataclass
class LayoutNode:
    """One occupied slot of the layered graph, as handed to a renderer."""

    node: NodeRef
    layer: int
    slot: int
    label: str
    is_placeholder: bool
