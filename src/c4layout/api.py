"""Text-in entry points for the whole pipeline."""

from __future__ import annotations

from c4layout.graph import parse_to_graph
from c4layout.layout import LayeredGraph, sugiyama_layout
from c4layout.renderers import ListingRenderer


def layout_text(src: str, minimise: bool = True) -> LayeredGraph:
    """Parse ``src``, build its graph and lay it out.

    Raises ``ParseError`` before any layout work if ``src`` does not parse.
    """
    return sugiyama_layout(parse_to_graph(src), minimise=minimise)


def render_listing(src: str) -> str:
    """Lay out ``src`` and return its layer/slot listing."""
    return ListingRenderer().render(layout_text(src))
