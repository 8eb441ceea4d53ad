"""Graph IR: relationships materialized as a networkx multigraph.

Node keys are entity identifiers. Each node carries ``data=NodeData`` and each
edge ``data=EdgeData``. Parallel edges between the same pair are kept as
separate multigraph edges, never merged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import networkx as nx

from c4layout.syntax import Document, Relationship, parse_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeData:
    """Payload of a real node.

    ``index`` is the creation order (first occurrence in the document);
    ``label`` is the display name, defaulting to the identifier.
    """

    id: str
    index: int
    label: str


@dataclass(frozen=True)
class EdgeData:
    """Payload of an edge. ``reversed`` is set on edges flipped by cycle removal."""

    label: str | None
    reversed: bool = False


@dataclass
class GraphIR:
    digraph: nx.MultiDiGraph

    @classmethod
    def from_relationships(
        cls,
        relationships: Iterable[Relationship],
        display_names: dict[str, str] | None = None,
    ) -> GraphIR:
        """Build the graph, creating each node at its first occurrence."""
        g: nx.MultiDiGraph = nx.MultiDiGraph()
        names = display_names or {}

        def node_for(identifier: str) -> str:
            if identifier not in g:
                g.add_node(
                    identifier,
                    data=NodeData(
                        id=identifier,
                        index=g.number_of_nodes(),
                        label=names.get(identifier, identifier),
                    ),
                )
            return identifier

        for rel in relationships:
            g.add_edge(node_for(rel.source), node_for(rel.target), data=EdgeData(label=rel.label))

        for identifier in names:
            if identifier not in g:
                logger.warning("display name for %r ignored: identifier is not used in any relationship", identifier)

        logger.debug("built graph: %d nodes, %d edges", g.number_of_nodes(), g.number_of_edges())
        return cls(digraph=g)

    @classmethod
    def from_document(cls, document: Document) -> GraphIR:
        return cls.from_relationships(document.relationships, document.display_names)

    def snapshot(self) -> GraphIR:
        """Independent copy; edits to the copy's structure never reach this graph."""
        return GraphIR(digraph=self.digraph.copy())

    @property
    def node_count(self) -> int:
        return self.digraph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self.digraph.number_of_edges()

    def node_ids(self) -> list[str]:
        """Identifiers in creation order."""
        return list(self.digraph.nodes)

    def label_of(self, node_id: str) -> str:
        return self.digraph.nodes[node_id]["data"].label

    def edge_labels(self, source: str, target: str) -> list[str | None]:
        """Labels of every parallel edge source → target, in insertion order."""
        if not self.digraph.has_edge(source, target):
            return []
        return [attrs["data"].label for attrs in self.digraph[source][target].values()]


def build_graph(
    relationships: Iterable[Relationship],
    display_names: dict[str, str] | None = None,
) -> GraphIR:
    """Materialize a relationship list as a GraphIR."""
    return GraphIR.from_relationships(relationships, display_names)


def parse_to_graph(text: str) -> GraphIR:
    """Parse source text and build its graph. Raises ``ParseError`` on bad input."""
    return GraphIR.from_document(parse_document(text))
