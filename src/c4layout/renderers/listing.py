"""Listing renderer: a plain-text dump of layers and slots.

One line per layer, entries in slot order:

    layer 0: a@0
    layer 1: b@0 ·@1
    layer 2: c@0

Real nodes show their display label, placeholders show ``PLACEHOLDER_GLYPH``.
"""

from __future__ import annotations

from c4layout.layout.sugiyama import LayeredGraph

PLACEHOLDER_GLYPH = "·"


class ListingRenderer:
    def __init__(self, placeholder_glyph: str = PLACEHOLDER_GLYPH) -> None:
        self.placeholder_glyph = placeholder_glyph

    def render(self, layered: LayeredGraph) -> str:
        lines: list[str] = [f"layer {i}:" for i in range(layered.layer_count)]
        for ln in layered.nodes():
            name = self.placeholder_glyph if ln.is_placeholder else ln.label
            lines[ln.layer] += f" {name}@{ln.slot}"
        return "\n".join(lines) + "\n"
