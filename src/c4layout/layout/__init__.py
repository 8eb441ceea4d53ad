"""Layout engine public API."""

from __future__ import annotations

from c4layout.layout.sugiyama import (
    CycleRemovalResult,
    LayeredGraph,
    SugiyamaLayout,
    assign_layers,
    count_crossings,
    greedy_fas_ordering,
    remove_cycles,
    sugiyama_layout,
)
from c4layout.layout.types import LayoutNode, NodeRef, Placeholder, is_placeholder

__all__ = [
    "CycleRemovalResult",
    "LayeredGraph",
    "LayoutNode",
    "NodeRef",
    "Placeholder",
    "SugiyamaLayout",
    "assign_layers",
    "count_crossings",
    "greedy_fas_ordering",
    "is_placeholder",
    "remove_cycles",
    "sugiyama_layout",
]
