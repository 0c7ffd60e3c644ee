"""Edge-kind policy — which edge types are legal between two node kinds.

The rule table encodes the dependency direction of the domain: data flows
out of tables and views into the objects that read them, and back into
tables from the objects that write them.  A view is never shown upstream of
a plain table.  Rules are checked in order and the first match wins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from monocle.schema.types import TABLE_LIKE_KINDS, EdgeType, NodeKind

if TYPE_CHECKING:
    from monocle.schema.types import SchemaGraph


def allowed_edge_kinds_for(source_kind: NodeKind, target_kind: NodeKind) -> tuple[EdgeType, ...]:
    """Edge types legal from a *source_kind* node to a *target_kind* node."""
    source_is_table_like = source_kind in TABLE_LIKE_KINDS
    target_is_table_like = target_kind in TABLE_LIKE_KINDS

    if source_is_table_like and target_kind is NodeKind.VIEW:
        return (EdgeType.VIEW_DEPENDENCIES,)
    if source_kind is NodeKind.VIEW and target_is_table_like:
        return ()
    if source_is_table_like and target_is_table_like:
        return (EdgeType.RELATIONSHIPS,)
    if source_is_table_like and target_kind is NodeKind.TRIGGER:
        return (EdgeType.TRIGGER_DEPENDENCIES,)
    if source_kind is NodeKind.TRIGGER and target_is_table_like:
        return (EdgeType.TRIGGER_DEPENDENCIES, EdgeType.TRIGGER_WRITES)
    if source_is_table_like and target_kind is NodeKind.PROCEDURE:
        return (EdgeType.PROCEDURE_READS,)
    if source_kind is NodeKind.PROCEDURE and target_is_table_like:
        return (EdgeType.PROCEDURE_WRITES,)
    if source_is_table_like and target_kind is NodeKind.FUNCTION:
        return (EdgeType.FUNCTION_READS,)
    return ()


def allowed_edge_kinds(graph: SchemaGraph, source_id: str, target_id: str) -> tuple[EdgeType, ...]:
    """Classify both endpoints and return the edge types legal between them.

    Returns an empty tuple when either endpoint is unknown or the direction
    is not permitted.
    """
    return allowed_edge_kinds_for(graph.kind_of(source_id), graph.kind_of(target_id))


def is_edge_kind_allowed(
    graph: SchemaGraph, source_id: str, target_id: str, edge_type: EdgeType | str,
) -> bool:
    """Return whether an edge of *edge_type* may connect *source_id* to *target_id*."""
    return edge_type in allowed_edge_kinds(graph, source_id, target_id)
