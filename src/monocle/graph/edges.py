"""Raw dependency edges derived from a loaded schema."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from monocle.graph.edge_kinds import is_edge_kind_allowed
from monocle.graph.handles import HandleDirection, column_handle, node_handle, parse_handle
from monocle.schema.types import EdgeType

if TYPE_CHECKING:
    from monocle.schema.types import SchemaGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EdgeMeta:
    """One dependency edge before filtering and styling.

    Attributes:
        id: Stable edge identifier.
        edge_type: Why the endpoints are connected.
        source: Upstream node id.
        target: Downstream node id.
        source_handle: Anchor on the source node (node- or column-level).
        target_handle: Anchor on the target node (node- or column-level).
        source_column: Source column name for column-level edges.
        target_column: Target column name for column-level edges.
        label: Optional display label.
    """

    id: str
    edge_type: EdgeType
    source: str
    target: str
    source_handle: str | None = None
    target_handle: str | None = None
    source_column: str | None = None
    target_column: str | None = None
    label: str | None = None

    def is_consistent(self) -> bool:
        """Check that handles agree with the endpoint and column fields.

        A declared column requires a column-level handle for the same
        node and column; every handle must sit on its own endpoint.
        """
        return _handle_matches(
            self.source_handle, self.source, self.source_column, HandleDirection.SOURCE,
        ) and _handle_matches(
            self.target_handle, self.target, self.target_column, HandleDirection.TARGET,
        )


def _handle_matches(
    handle: str | None, node_id: str, column: str | None, direction: HandleDirection,
) -> bool:
    if handle is None:
        return column is None
    key = parse_handle(handle)
    if key.node_id != node_id or key.direction not in (None, direction):
        return False
    if column is not None:
        return key.column == column
    return True


@dataclass(frozen=True, slots=True)
class ViewColumnSource:
    """A view column and the table column its value is read from."""

    column_name: str
    source_table_id: str
    source_column: str


# ------------------------------------------------------------------
# View lineage
# ------------------------------------------------------------------


def build_name_lookup(graph: SchemaGraph) -> dict[str, str]:
    """Case-insensitive name/id → id lookup over tables and views."""
    lookup: dict[str, str] = {}
    for obj in (*graph.tables, *graph.views):
        lookup[obj.name.lower()] = obj.id
        lookup[obj.id.lower()] = obj.id
    return lookup


def resolve_table_reference(name_to_id: dict[str, str], reference: str) -> str | None:
    """Resolve a possibly bracketed, possibly unqualified table name to an id."""
    key = reference.replace("[", "").replace("]", "").lower()
    resolved = name_to_id.get(key)
    if resolved is None and "." in key:
        resolved = name_to_id.get(key.rsplit(".", 1)[-1])
    return resolved


def resolve_view_column_sources(
    graph: SchemaGraph, name_to_id: dict[str, str] | None = None,
) -> dict[str, tuple[ViewColumnSource, ...]]:
    """Map each view id to the resolved lineage of its columns.

    Columns whose source table cannot be resolved are skipped.  Duplicate
    (column, table, source column) triples are collapsed.
    """
    if name_to_id is None:
        name_to_id = build_name_lookup(graph)
    result: dict[str, tuple[ViewColumnSource, ...]] = {}
    for view in graph.views:
        seen: set[ViewColumnSource] = set()
        sources: list[ViewColumnSource] = []
        for col in view.columns:
            if not col.source_table or not col.source_column:
                continue
            table_id = resolve_table_reference(name_to_id, col.source_table)
            if table_id is None:
                logger.debug(
                    "Unresolved lineage for %s.%s: %r", view.id, col.name, col.source_table,
                )
                continue
            source = ViewColumnSource(col.name, table_id, col.source_column)
            if source not in seen:
                seen.add(source)
                sources.append(source)
        if sources:
            result[view.id] = tuple(sources)
    return result


# ------------------------------------------------------------------
# Edge builder
# ------------------------------------------------------------------


def _node_edge(
    edge_id: str, edge_type: EdgeType, source: str, target: str, label: str | None,
) -> EdgeMeta:
    return EdgeMeta(
        id=edge_id,
        edge_type=edge_type,
        source=source,
        target=target,
        source_handle=node_handle(source, HandleDirection.SOURCE),
        target_handle=node_handle(target, HandleDirection.TARGET),
        label=label,
    )


def build_base_edges(
    graph: SchemaGraph,
    view_column_sources: dict[str, tuple[ViewColumnSource, ...]] | None = None,
) -> tuple[EdgeMeta, ...]:
    """Build the raw edge list for *graph*, in a stable order.

    Order: foreign keys, trigger edges, procedure edges, function edges,
    view edges.  Edges the edge-kind policy rejects (including any with an
    endpoint missing from the graph) are skipped.
    """
    if view_column_sources is None:
        view_column_sources = resolve_view_column_sources(graph)

    edges: list[EdgeMeta] = []

    def push(edge: EdgeMeta) -> None:
        if is_edge_kind_allowed(graph, edge.source, edge.target, edge.edge_type):
            edges.append(edge)
        else:
            logger.debug(
                "Skipping %s edge %s: %s -> %s not allowed",
                edge.edge_type.value, edge.id, edge.source, edge.target,
            )

    for rel in graph.relationships:
        source_handle = (
            column_handle(rel.from_table, rel.from_column, HandleDirection.SOURCE)
            if rel.from_column
            else node_handle(rel.from_table, HandleDirection.SOURCE)
        )
        target_handle = (
            column_handle(rel.to_table, rel.to_column, HandleDirection.TARGET)
            if rel.to_column
            else node_handle(rel.to_table, HandleDirection.TARGET)
        )
        push(EdgeMeta(
            id=rel.id,
            edge_type=EdgeType.RELATIONSHIPS,
            source=rel.from_table,
            target=rel.to_table,
            source_handle=source_handle,
            target_handle=target_handle,
            source_column=rel.from_column or None,
            target_column=rel.to_column or None,
            label=(
                f"{rel.from_column} → {rel.to_column}"
                if rel.from_column and rel.to_column
                else None
            ),
        ))

    for trigger in graph.triggers:
        push(_node_edge(
            f"trigger-edge-{trigger.id}", EdgeType.TRIGGER_DEPENDENCIES,
            trigger.table_id, trigger.id, trigger.name,
        ))
        for table_id in trigger.referenced_tables:
            if table_id == trigger.table_id:
                continue
            push(_node_edge(
                f"trigger-ref-edge-{trigger.id}-{table_id}", EdgeType.TRIGGER_DEPENDENCIES,
                trigger.id, table_id, trigger.name,
            ))
        for table_id in trigger.affected_tables:
            if table_id == trigger.table_id:
                continue
            push(_node_edge(
                f"trigger-affects-{trigger.id}-{table_id}", EdgeType.TRIGGER_WRITES,
                trigger.id, table_id, f"{trigger.name} (writes)",
            ))

    for proc in graph.stored_procedures:
        for table_id in proc.referenced_tables:
            push(_node_edge(
                f"proc-edge-{proc.id}-{table_id}", EdgeType.PROCEDURE_READS,
                table_id, proc.id, proc.name,
            ))
        for table_id in proc.affected_tables:
            push(_node_edge(
                f"proc-affects-{proc.id}-{table_id}", EdgeType.PROCEDURE_WRITES,
                proc.id, table_id, f"{proc.name} (writes)",
            ))

    for fn in graph.scalar_functions:
        for table_id in fn.referenced_tables:
            push(_node_edge(
                f"func-edge-{fn.id}-{table_id}", EdgeType.FUNCTION_READS,
                table_id, fn.id, fn.name,
            ))

    for view in graph.views:
        represented: set[str] = set()
        for source in view_column_sources.get(view.id, ()):
            represented.add(source.source_table_id)
            push(EdgeMeta(
                id=(
                    f"view-col-edge-{view.id}-{source.column_name}-"
                    f"{source.source_table_id}-{source.source_column}"
                ),
                edge_type=EdgeType.VIEW_DEPENDENCIES,
                source=source.source_table_id,
                target=view.id,
                source_handle=column_handle(
                    source.source_table_id, source.source_column, HandleDirection.SOURCE,
                ),
                target_handle=column_handle(view.id, source.column_name, HandleDirection.TARGET),
                source_column=source.source_column,
                target_column=source.column_name,
                label=view.name,
            ))
        for source_id in view.referenced_tables:
            if not source_id or source_id == view.id or source_id in represented:
                continue
            represented.add(source_id)
            push(_node_edge(
                f"view-ref-edge-{view.id}-{source_id}", EdgeType.VIEW_DEPENDENCIES,
                source_id, view.id, view.name,
            ))

    return tuple(edges)
