"""Base renderer protocol."""

from __future__ import annotations

from typing import Protocol

from c4layout.layout.sugiyama import LayeredGraph


class Renderer(Protocol):
    """Protocol for collaborators that turn a layered graph into output.

    Renderers own every screen-space concern: (layer, slot) → coordinates,
    camera transforms and hit-testing.
    """

    def render(self, layered: LayeredGraph) -> str:
        """Render a layered graph to an output string."""
        ...
