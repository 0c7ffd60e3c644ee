"""Monocle: schema-graph visibility core.

Decides which database objects and dependency edges a schema diagram should
render for a given filter, search and focus snapshot.
"""

__version__ = "0.1.0"

from monocle.config import EdgeLabelMode, GraphSettings
from monocle.exceptions import (
    DuplicateObjectIdError,
    FilterError,
    MonocleError,
    SchemaError,
    UnknownEdgeTypeError,
    UnknownObjectTypeError,
)
from monocle.graph.edge_kinds import allowed_edge_kinds
from monocle.graph.edge_state import derive_edge_state
from monocle.graph.edges import EdgeMeta, build_base_edges
from monocle.graph.handles import build_column_handle_base, build_node_handle_base
from monocle.graph.types import (
    EdgeRecord,
    EdgeStateResult,
    FocusMode,
    FocusState,
    GraphFilters,
    RenderOutput,
)
from monocle.graph.visibility import resolve_visible_nodes
from monocle.pipeline import SchemaView
from monocle.schema.serialization import export_schema_json, schema_from_dict
from monocle.schema.types import EdgeType, NodeKind, SchemaGraph, classify
from monocle.state import ViewState

__all__ = [
    "DuplicateObjectIdError",
    "EdgeLabelMode",
    "EdgeMeta",
    "EdgeRecord",
    "EdgeStateResult",
    "EdgeType",
    "FilterError",
    "FocusMode",
    "FocusState",
    "GraphFilters",
    "GraphSettings",
    "MonocleError",
    "NodeKind",
    "RenderOutput",
    "SchemaError",
    "SchemaGraph",
    "SchemaView",
    "UnknownEdgeTypeError",
    "UnknownObjectTypeError",
    "ViewState",
    "__version__",
    "allowed_edge_kinds",
    "build_base_edges",
    "build_column_handle_base",
    "build_node_handle_base",
    "classify",
    "derive_edge_state",
    "export_schema_json",
    "resolve_visible_nodes",
    "schema_from_dict",
]
