"""Renderers consuming the layered-graph output surface."""

from __future__ import annotations

from c4layout.renderers.base import Renderer
from c4layout.renderers.listing import PLACEHOLDER_GLYPH, ListingRenderer

__all__ = ["PLACEHOLDER_GLYPH", "ListingRenderer", "Renderer"]
