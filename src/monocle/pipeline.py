"""SchemaView — derives render output for a loaded schema.

A ``SchemaView`` owns everything computed once per schema (the kind index
inside ``SchemaGraph``, the rustworkx neighbour index and the base edge
list) and turns ``ViewState`` snapshots into ``RenderOutput``.  Results are
memoised on the snapshot itself, so equal snapshots share one derivation.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import TYPE_CHECKING

from monocle.config import GraphSettings
from monocle.graph._rustworkx import SchemaIndex
from monocle.graph.edge_state import derive_edge_state
from monocle.graph.hover import build_edge_hover_card
from monocle.graph.types import RenderOutput
from monocle.graph.visibility import (
    count_visible,
    resolve_node_emphasis,
    resolve_visible_nodes,
)
from monocle.state import ViewState, available_schemas

if TYPE_CHECKING:
    from types import MappingProxyType

    from monocle.graph.edges import EdgeMeta
    from monocle.graph.hover import EdgeHoverCard
    from monocle.graph.types import FilteredCount, FocusState, GraphFilters
    from monocle.schema.types import NodeKind, SchemaGraph

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 32


class SchemaView:
    """Render derivation over one immutable schema.

    Usage::

        view = SchemaView(graph)
        state = view.initial_state()
        output = view.render(state.focus_on("dbo.orders"))
    """

    def __init__(
        self,
        graph: SchemaGraph,
        settings: GraphSettings | None = None,
        *,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ) -> None:
        self._graph = graph
        self._settings = settings or GraphSettings()
        self._index = SchemaIndex(graph)
        self._edges: tuple[EdgeMeta, ...] = self._index.edges
        self._edges_by_id: dict[str, EdgeMeta] = {e.id: e for e in self._edges}
        self._cache_size = max(cache_size, 1)
        self._visible_cache: OrderedDict[tuple[GraphFilters, FocusState], frozenset[str]] = (
            OrderedDict()
        )
        self._render_cache: OrderedDict[ViewState, RenderOutput] = OrderedDict()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def graph(self) -> SchemaGraph:
        return self._graph

    @property
    def index(self) -> SchemaIndex:
        return self._index

    @property
    def settings(self) -> GraphSettings:
        return self._settings

    @property
    def edges(self) -> tuple[EdgeMeta, ...]:
        """Base edges before any filtering."""
        return self._edges

    @property
    def schemas(self) -> list[str]:
        return available_schemas(self._graph)

    def initial_state(self) -> ViewState:
        return ViewState.for_schema(self._graph, self._settings)

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def visible_nodes(self, filters: GraphFilters, focus: FocusState) -> frozenset[str]:
        """Node ids eligible to render, memoised on the filter/focus pair."""
        key = (filters, focus)
        cached = self._visible_cache.get(key)
        if cached is not None:
            self._visible_cache.move_to_end(key)
            return cached
        logger.debug("Visibility cache miss: %s", key)
        result = resolve_visible_nodes(self._graph, filters, focus, index=self._index)
        self._remember(self._visible_cache, key, result)
        return result

    def render(self, state: ViewState) -> RenderOutput:
        """Derive node ids, emphasis and edge records for *state*."""
        cached = self._render_cache.get(state)
        if cached is not None:
            self._render_cache.move_to_end(state)
            return cached

        logger.debug("Render cache miss")
        node_ids = self.visible_nodes(state.filters, state.focus)
        emphasis = resolve_node_emphasis(
            self._graph, node_ids, state.focus, index=self._index,
        )
        edge_state = derive_edge_state(
            self._edges,
            state.filters.edge_types,
            node_ids,
            self._index.columns_by_node_id,
            focused_node_id=emphasis.focused_id,
            selected_edge_ids=state.selected_edge_ids,
            hovered_edge_id=state.hovered_edge_id,
            show_labels=state.show_labels,
            show_inline_label_on_hover=state.show_inline_label_on_hover,
        )
        output = RenderOutput(node_ids=node_ids, emphasis=emphasis, edge_state=edge_state)
        self._remember(self._render_cache, state, output)
        return output

    def counts(self, state: ViewState) -> MappingProxyType[NodeKind, FilteredCount]:
        """Visible vs. total objects per kind for *state*."""
        return count_visible(self._graph, self.visible_nodes(state.filters, state.focus))

    def hover_card(self, edge_id: str) -> EdgeHoverCard | None:
        """Hover card for a base edge, or ``None`` if the id is unknown."""
        edge = self._edges_by_id.get(edge_id)
        if edge is None:
            return None
        return build_edge_hover_card(edge)

    def clear_cache(self) -> None:
        self._visible_cache.clear()
        self._render_cache.clear()

    def __repr__(self) -> str:
        return (
            f"SchemaView(nodes={self._graph.node_count}, edges={len(self._edges)})"
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _remember[K, V](self, cache: OrderedDict[K, V], key: K, value: V) -> None:
        cache[key] = value
        if len(cache) > self._cache_size:
            cache.popitem(last=False)
