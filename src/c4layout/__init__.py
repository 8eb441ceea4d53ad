"""c4layout: parse a relationship diagram and arrange it into layers."""

from __future__ import annotations

from c4layout.api import layout_text, render_listing
from c4layout.errors import C4LayoutError, InternalInvariantViolation, ParseError
from c4layout.graph import EdgeData, GraphIR, NodeData, build_graph, parse_to_graph
from c4layout.layout import LayeredGraph, LayoutNode, Placeholder, sugiyama_layout
from c4layout.syntax import Relationship, parse

__all__ = [
    "C4LayoutError",
    "EdgeData",
    "GraphIR",
    "InternalInvariantViolation",
    "LayeredGraph",
    "LayoutNode",
    "NodeData",
    "ParseError",
    "Placeholder",
    "Relationship",
    "build_graph",
    "layout_text",
    "parse",
    "parse_to_graph",
    "render_listing",
    "sugiyama_layout",
]
