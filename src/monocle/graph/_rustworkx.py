"""SchemaIndex — rustworkx-backed dependency index built once per loaded schema."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

import rustworkx

from monocle.graph.edges import build_base_edges, build_name_lookup, resolve_view_column_sources

if TYPE_CHECKING:
    from monocle.graph.edges import EdgeMeta, ViewColumnSource
    from monocle.schema.types import SchemaGraph

logger = logging.getLogger(__name__)


class SchemaIndex:
    """Directed dependency graph over schema object ids.

    Wraps a ``rustworkx.PyDiGraph`` with string-id-keyed nodes.  Every
    schema object becomes a node; every base edge becomes a directed edge
    carrying its ``EdgeMeta``.  Parallel edges are kept (a node-level and a
    column-level edge may join the same pair).

    The index is derived data: build it once per ``SchemaGraph`` and
    discard it when the schema is reloaded.
    """

    def __init__(self, schema: SchemaGraph, edges: tuple[EdgeMeta, ...] | None = None) -> None:
        self._graph: rustworkx.PyDiGraph = rustworkx.PyDiGraph()
        self._id_to_idx: dict[str, int] = {}
        self._idx_to_id: dict[int, str] = {}

        self._name_to_id = MappingProxyType(build_name_lookup(schema))
        self._view_column_sources = MappingProxyType(
            resolve_view_column_sources(schema, dict(self._name_to_id))
        )
        if edges is None:
            edges = build_base_edges(schema, dict(self._view_column_sources))
        self._edges = edges
        self._columns_by_node_id = MappingProxyType(schema.columns_by_node_id())

        for node_id in schema.node_ids():
            idx = self._graph.add_node(node_id)
            self._id_to_idx[node_id] = idx
            self._idx_to_id[idx] = node_id

        for edge in edges:
            src_idx = self._id_to_idx.get(edge.source)
            tgt_idx = self._id_to_idx.get(edge.target)
            if src_idx is None or tgt_idx is None:
                logger.debug("Dangling edge %s not indexed: %s -> %s", edge.id, edge.source, edge.target)
                continue
            self._graph.add_edge(src_idx, tgt_idx, edge)

        logger.debug("Built %r", self)

    # ------------------------------------------------------------------
    # Node queries
    # ------------------------------------------------------------------

    def has_node(self, node_id: str) -> bool:
        """Return whether *node_id* is in the index."""
        return node_id in self._id_to_idx

    def nodes(self) -> list[str]:
        """Return all node ids."""
        return list(self._id_to_idx.keys())

    def neighbors(self, node_id: str) -> list[str]:
        """Direct neighbours in either direction, sorted by id.

        The node itself is never its own neighbour.  Unknown ids have no
        neighbours.
        """
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return []
        found: set[str] = set()
        for n_idx in (*self._graph.successor_indices(idx), *self._graph.predecessor_indices(idx)):
            if n_idx != idx:
                found.add(self._idx_to_id[n_idx])
        return sorted(found)

    # ------------------------------------------------------------------
    # Derived lookups
    # ------------------------------------------------------------------

    @property
    def edges(self) -> tuple[EdgeMeta, ...]:
        """All base edges, including any with endpoints outside the graph."""
        return self._edges

    @property
    def columns_by_node_id(self) -> MappingProxyType[str, frozenset[str]]:
        """Column names per table/view id."""
        return self._columns_by_node_id

    @property
    def view_column_sources(self) -> MappingProxyType[str, tuple[ViewColumnSource, ...]]:
        """Resolved column lineage per view id."""
        return self._view_column_sources

    @property
    def name_to_id(self) -> MappingProxyType[str, str]:
        """Lower-cased table/view name or id → id."""
        return self._name_to_id

    # ------------------------------------------------------------------
    # Graph-level
    # ------------------------------------------------------------------

    @property
    def node_count(self) -> int:
        """Number of nodes in the index."""
        return self._graph.num_nodes()

    @property
    def edge_count(self) -> int:
        """Number of indexed (non-dangling) edges."""
        return self._graph.num_edges()

    def __repr__(self) -> str:
        return f"SchemaIndex(nodes={self.node_count}, edges={self.edge_count})"
