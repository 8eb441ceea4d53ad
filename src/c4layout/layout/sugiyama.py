"""Sugiyama-style layered graph layout.

Phases:
  1. Cycle removal  (greedy-FAS, back-edges reversed in place)
  2. Layer assignment (topological pass, placeholder chains for long edges)
  3. Crossing minimization (median heuristic, single top-down pass)

Coordinates, edge routing and painting belong to the renderer. Both
heuristics are best-effort: the FAS is not minimum and the median pass is
not crossing-minimal.
"""

from __future__ import annotations

import logging
import math
import statistics
from dataclasses import dataclass, field, replace

import networkx as nx

from c4layout.errors import InternalInvariantViolation
from c4layout.graph import EdgeData, GraphIR
from c4layout.layout.types import LayoutNode, NodeRef, Placeholder, is_placeholder

logger = logging.getLogger(__name__)

# ─── Cycle Removal (Greedy-FAS) ───────────────────────────────────────────────


@dataclass
class CycleRemovalResult:
    """Edges touched by cycle removal, identified by their ORIGINAL direction.

    reversed_edges: (src, tgt) pairs whose edges were flipped to tgt → src.
        Parallel edges share one entry; all of them are flipped together.
    self_loops: nodes whose self-loops were dropped. A self-loop stays a
        cycle whichever way it points, so it cannot be reversed away.
    """

    reversed_edges: set[tuple[str, str]] = field(default_factory=set)
    self_loops: set[str] = field(default_factory=set)


def greedy_fas_ordering(graph: nx.MultiDiGraph) -> list[str]:
    """Compute a node ordering using the greedy-FAS heuristic.

    Edges pointing backwards in the returned ordering form the feedback arc
    set.

    Algorithm (Eades, Lin, Smyth 1993):
    - Maintain dynamic in/out degree counters updated as nodes are removed.
      Parallel edges each count; self-loops are ignored.
    - Repeatedly:
        1. Move all sinks (out_deg == 0) to s2.
        2. Move all sources (in_deg == 0) to s1.
        3. Of remaining nodes in cycles, pick max (out - in) and add to s1.
    - Final ordering: s1 + reversed(s2).

    ``active`` is an insertion-ordered dict so that ties always break towards
    the node created first.
    """
    active: dict[str, None] = dict.fromkeys(graph.nodes)

    out_deg: dict[str, int] = dict.fromkeys(graph.nodes, 0)
    in_deg: dict[str, int] = dict.fromkeys(graph.nodes, 0)
    for src, tgt in graph.edges():
        if src != tgt:
            out_deg[src] += 1
            in_deg[tgt] += 1

    def retire(node: str) -> None:
        del active[node]
        for pred, _ in graph.in_edges(node):
            if pred in active:
                out_deg[pred] -= 1
        for _, succ in graph.out_edges(node):
            if succ in active:
                in_deg[succ] -= 1

    s1: list[str] = []
    s2: list[str] = []

    while active:
        # Step 1: Pull all sinks into s2.
        sinks = [n for n in active if out_deg[n] == 0]
        while sinks:
            for sink in sinks:
                retire(sink)
                s2.append(sink)
            sinks = [n for n in active if out_deg[n] == 0]

        # Step 2: Pull all sources into s1.
        sources = [n for n in active if in_deg[n] == 0]
        while sources:
            for source in sources:
                retire(source)
                s1.append(source)
            sources = [n for n in active if in_deg[n] == 0]

        # Step 3: Only cycles remain; pick max (out - in).
        if active:
            best = max(active, key=lambda n: out_deg[n] - in_deg[n])
            retire(best)
            s1.append(best)

    s2.reverse()
    s1.extend(s2)
    return s1


def remove_cycles(graph: nx.MultiDiGraph) -> tuple[nx.MultiDiGraph, CycleRemovalResult]:
    """Return an acyclic copy of ``graph`` plus what had to change.

    Back-edges (source after target in the greedy-FAS ordering) are reversed
    in the copy, keeping their label and marking ``EdgeData.reversed``.
    Self-loops are left out of the copy. ``graph`` itself is not modified.
    """
    result = CycleRemovalResult()
    new_graph: nx.MultiDiGraph = nx.MultiDiGraph()
    if graph.number_of_nodes() == 0:
        return new_graph, result

    position: dict[str, int] = {node: pos for pos, node in enumerate(greedy_fas_ordering(graph))}

    for node_id in graph.nodes:
        new_graph.add_node(node_id, **graph.nodes[node_id])

    for src, tgt, attrs in graph.edges(data=True):
        if src == tgt:
            result.self_loops.add(src)
            continue
        if position[src] > position[tgt]:
            result.reversed_edges.add((src, tgt))
            new_graph.add_edge(tgt, src, data=replace(attrs["data"], reversed=True))
        else:
            new_graph.add_edge(src, tgt, **attrs)

    if result.self_loops:
        logger.warning("dropped self-loops on %s", ", ".join(sorted(result.self_loops)))
    logger.debug("cycle removal reversed %d edge pair(s)", len(result.reversed_edges))
    return new_graph, result


# ─── Layered Graph ────────────────────────────────────────────────────────────


class LayeredGraph:
    """Nodes arranged in layers, each layer a slot → node map.

    Attributes:
        graph: The caller's graph the layout was computed from (read-only).
        working: Acyclic working graph; long edges are replaced by chains
            through their placeholders, so every edge joins adjacent layers.
        cycles: What cycle removal reversed or dropped.
        layers: One dict per layer mapping slot → node, iterated in slot order.
            Slots are unique within a layer and may be sparse.
        node_to_layer: Layer index of every real node and placeholder.
    """

    def __init__(self, graph: GraphIR, working: nx.MultiDiGraph, cycles: CycleRemovalResult) -> None:
        self.graph = graph
        self.working = working
        self.cycles = cycles
        self.layers: list[dict[int, NodeRef]] = []
        self.node_to_layer: dict[NodeRef, int] = {}

    def add_node_to_layer(self, node: NodeRef, layer: int) -> None:
        """Append ``node`` after the right-most occupied slot of ``layer``."""
        self.node_to_layer[node] = layer
        while len(self.layers) <= layer:
            self.layers.append({})
        slots = self.layers[layer]
        slots[max(slots) + 1 if slots else 0] = node

    # ── queries ──

    @property
    def layer_count(self) -> int:
        return len(self.layers)

    @property
    def reversed_edges(self) -> set[tuple[str, str]]:
        return self.cycles.reversed_edges

    def layer_of(self, node: NodeRef) -> int:
        return self.node_to_layer[node]

    def slot_of(self, node: NodeRef) -> int:
        for slot, occupant in self.layers[self.node_to_layer[node]].items():
            if occupant == node:
                return slot
        raise KeyError(node)

    def ordering(self) -> list[list[NodeRef]]:
        """Per-layer node lists in slot order, gaps closed."""
        return [list(slots.values()) for slots in self.layers]

    def placeholders(self) -> list[Placeholder]:
        return [n for slots in self.layers for n in slots.values() if isinstance(n, Placeholder)]

    def nodes(self) -> list[LayoutNode]:
        """The output surface: one entry per occupied slot, layer by layer."""
        result: list[LayoutNode] = []
        for layer_idx, slots in enumerate(self.layers):
            for slot, node in slots.items():
                dummy = is_placeholder(node)
                result.append(
                    LayoutNode(
                        node=node,
                        layer=layer_idx,
                        slot=slot,
                        label="" if dummy else self.graph.label_of(node),
                        is_placeholder=dummy,
                    )
                )
        return result

    # ── crossing minimization ──

    def minimise_crossings(self) -> None:
        """Reorder layers 1..N-1 with the median heuristic, top-down, once.

        Layer 0 is the anchor and the previous layer is never revisited. Each
        node goes to floor(median slot of its predecessors); a taken slot is
        resolved by probing right to the next free one. Nodes without
        predecessors use median 0.
        """
        for layer_idx in range(1, len(self.layers)):
            prev_slot: dict[NodeRef, int] = {node: slot for slot, node in self.layers[layer_idx - 1].items()}

            placed: dict[int, NodeRef] = {}
            for node in self.layers[layer_idx].values():
                positions = sorted({prev_slot[p] for p in self.working.predecessors(node) if p in prev_slot})
                slot = math.floor(_median(positions))
                while slot in placed:
                    slot += 1
                placed[slot] = node

            self.layers[layer_idx] = dict(sorted(placed.items()))

    def __repr__(self) -> str:
        return f"LayeredGraph(layers={self.layers!r})"


def _median(positions: list[int]) -> float:
    """Median slot position; 0.0 when there are no connected predecessors."""
    if not positions:
        return 0.0
    return float(statistics.median(positions))


def count_crossings(ordering: list[list[NodeRef]], graph: nx.MultiDiGraph) -> int:
    """Count edge crossings between consecutive layers (inversion count heuristic)."""
    total = 0
    for l_idx in range(len(ordering) - 1):
        tgt_pos: dict[NodeRef, int] = {nid: i for i, nid in enumerate(ordering[l_idx + 1])}
        edges: list[tuple[int, int]] = []
        for sp, src_id in enumerate(ordering[l_idx]):
            if src_id in graph:
                for nb in graph.successors(src_id):
                    if nb in tgt_pos:
                        edges.append((sp, tgt_pos[nb]))
        for i in range(len(edges)):
            for j in range(i + 1, len(edges)):
                ei, ej = edges[i], edges[j]
                if (ei[0] < ej[0] and ei[1] > ej[1]) or (ei[0] > ej[0] and ei[1] < ej[1]):
                    total += 1
    return total


# ─── Layer Assignment ─────────────────────────────────────────────────────────


def assign_layers(graph: GraphIR, dag: nx.MultiDiGraph, cycles: CycleRemovalResult) -> LayeredGraph:
    """Assign every node of ``dag`` to a layer in one topological pass.

    A node without incoming edges goes to layer 0, any other node to one
    below its deepest predecessor. For each incoming edge u → v that skips
    layers, one placeholder is appended to every layer strictly between them
    and the edge in ``dag`` is replaced by the chain u → p₁ → … → pₖ → v.

    ``dag`` becomes the returned graph's working graph and is modified.

    Raises:
        InternalInvariantViolation: ``dag`` still contains a cycle.
    """
    layered = LayeredGraph(graph, dag, cycles)

    try:
        order: list[str] = list(nx.topological_sort(dag))
    except nx.NetworkXUnfeasible as exc:
        raise InternalInvariantViolation("graph still contains a cycle after cycle removal") from exc

    for node_id in order:
        incoming = list(dag.in_edges(node_id, keys=True))
        if not incoming:
            layered.add_node_to_layer(node_id, 0)
            continue

        layer = max(layered.node_to_layer[src] for src, _, _ in incoming) + 1

        for src, tgt, key in incoming:
            src_layer = layered.node_to_layer[src]
            if src_layer + 1 < layer:
                chain = [Placeholder(src, tgt, key, i) for i in range(src_layer + 1, layer)]
                for placeholder in chain:
                    layered.add_node_to_layer(placeholder, placeholder.layer)
                _splice_chain(dag, src, tgt, key, chain)

        layered.add_node_to_layer(node_id, layer)

    logger.debug(
        "assigned %d layer(s), %d placeholder(s)",
        layered.layer_count,
        len(layered.node_to_layer) - graph.node_count,
    )
    return layered


def _splice_chain(dag: nx.MultiDiGraph, src: str, tgt: str, key: int, chain: list[Placeholder]) -> None:
    """Replace edge (src, tgt, key) by src → chain… → tgt. The label rides on the last segment."""
    edge_data: EdgeData = dag.edges[src, tgt, key]["data"]
    dag.remove_edge(src, tgt, key)

    chain_prev: NodeRef = src
    for placeholder in chain:
        dag.add_node(placeholder)
        dag.add_edge(chain_prev, placeholder, data=EdgeData(label=None, reversed=edge_data.reversed))
        chain_prev = placeholder
    dag.add_edge(chain_prev, tgt, data=edge_data)


# ─── Full Layout Pipeline ─────────────────────────────────────────────────────


class SugiyamaLayout:
    """Layout engine. One ``layout`` call per graph; calls share no state.

    Args:
        minimise: Run the crossing-minimization pass. When False, slots keep
            the order in which layer assignment appended nodes.
    """

    def __init__(self, minimise: bool = True) -> None:
        self.minimise = minimise

    def layout(self, gir: GraphIR) -> LayeredGraph:
        snapshot = gir.snapshot()
        dag, cycles = remove_cycles(snapshot.digraph)
        layered = assign_layers(gir, dag, cycles)

        if self.minimise:
            before = count_crossings(layered.ordering(), layered.working)
            layered.minimise_crossings()
            after = count_crossings(layered.ordering(), layered.working)
            logger.debug("crossings: %d before minimization, %d after", before, after)

        return layered


def sugiyama_layout(gir: GraphIR, minimise: bool = True) -> LayeredGraph:
    """Run cycle removal, layer assignment and crossing minimization on ``gir``.

    ``gir`` is never modified.
    """
    return SugiyamaLayout(minimise=minimise).layout(gir)
