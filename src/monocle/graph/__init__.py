"""Graph layer — edge building, visibility resolution and edge-state derivation."""

from monocle.graph._rustworkx import SchemaIndex
from monocle.graph.edge_kinds import allowed_edge_kinds, allowed_edge_kinds_for
from monocle.graph.edge_state import derive_edge_state, edges_equivalent
from monocle.graph.edges import EdgeMeta, build_base_edges
from monocle.graph.focus import FocusTransition, get_focus_transition
from monocle.graph.handles import (
    HandleDirection,
    HandleKey,
    build_column_handle_base,
    build_node_handle_base,
    parse_handle,
)
from monocle.graph.hover import EdgeHoverCard, build_edge_hover_card
from monocle.graph.types import (
    EdgeRecord,
    EdgeStateResult,
    EdgeStyle,
    FocusMode,
    FocusState,
    GraphFilters,
    NodeEmphasis,
    RenderOutput,
)
from monocle.graph.visibility import resolve_node_emphasis, resolve_visible_nodes

__all__ = [
    "EdgeHoverCard",
    "EdgeMeta",
    "EdgeRecord",
    "EdgeStateResult",
    "EdgeStyle",
    "FocusMode",
    "FocusState",
    "FocusTransition",
    "GraphFilters",
    "HandleDirection",
    "HandleKey",
    "NodeEmphasis",
    "RenderOutput",
    "SchemaIndex",
    "allowed_edge_kinds",
    "allowed_edge_kinds_for",
    "build_base_edges",
    "build_column_handle_base",
    "build_edge_hover_card",
    "build_node_handle_base",
    "derive_edge_state",
    "edges_equivalent",
    "get_focus_transition",
    "parse_handle",
    "resolve_node_emphasis",
    "resolve_visible_nodes",
]
