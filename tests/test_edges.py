"""Tests for the base edge builder and view column lineage."""

from __future__ import annotations

import pytest

from monocle.graph.edges import (
    EdgeMeta,
    ViewColumnSource,
    build_base_edges,
    build_name_lookup,
    resolve_table_reference,
    resolve_view_column_sources,
)
from monocle.graph.handles import HandleDirection, column_handle, node_handle
from monocle.schema.types import (
    Column,
    EdgeType,
    RelationshipEdge,
    SchemaGraph,
    Table,
    Trigger,
    View,
)

AUDIT = "dbo.orders.trg_orders_audit"


def _by_id(edges: tuple[EdgeMeta, ...]) -> dict[str, EdgeMeta]:
    return {e.id: e for e in edges}


# ======================================================================
# TestBuildBaseEdges
# ======================================================================


class TestBuildBaseEdges:
    def test_edge_ids_in_order(self, schema: SchemaGraph) -> None:
        assert [e.id for e in build_base_edges(schema)] == [
            "FK_orders_customers",
            "FK_invoices_orders",
            f"trigger-edge-{AUDIT}",
            f"trigger-ref-edge-{AUDIT}-dbo.customers",
            f"trigger-affects-{AUDIT}-dbo.invoices",
            "proc-edge-dbo.usp_close_order-dbo.orders",
            "proc-affects-dbo.usp_close_order-dbo.invoices",
            "func-edge-dbo.fn_order_total-dbo.orders",
            "view-col-edge-dbo.vw_order_summary-order_id-dbo.orders-id",
            "view-col-edge-dbo.vw_order_summary-customer_name-dbo.customers-name",
            "view-ref-edge-dbo.vw_order_summary-sales.regions",
        ]

    def test_deterministic(self, schema: SchemaGraph) -> None:
        assert build_base_edges(schema) == build_base_edges(schema)

    def test_all_edges_consistent(self, schema: SchemaGraph) -> None:
        assert all(e.is_consistent() for e in build_base_edges(schema))

    def test_foreign_key_is_column_level(self, schema: SchemaGraph) -> None:
        fk = _by_id(build_base_edges(schema))["FK_orders_customers"]
        assert fk.edge_type is EdgeType.RELATIONSHIPS
        assert fk.source_column == "customer_id"
        assert fk.target_column == "id"
        assert fk.source_handle == column_handle("dbo.orders", "customer_id", HandleDirection.SOURCE)
        assert fk.target_handle == column_handle("dbo.customers", "id", HandleDirection.TARGET)
        assert fk.label == "customer_id → id"

    def test_foreign_key_without_columns_is_node_level(self) -> None:
        g = SchemaGraph(
            tables=(Table("dbo.a", "a", "dbo"), Table("dbo.b", "b", "dbo")),
            relationships=(RelationshipEdge("FK_a_b", "dbo.a", "dbo.b"),),
        )
        (fk,) = build_base_edges(g)
        assert fk.source_handle == node_handle("dbo.a", HandleDirection.SOURCE)
        assert fk.source_column is None
        assert fk.label is None

    def test_trigger_edges(self, schema: SchemaGraph) -> None:
        edges = _by_id(build_base_edges(schema))
        parent = edges[f"trigger-edge-{AUDIT}"]
        assert (parent.source, parent.target) == ("dbo.orders", AUDIT)
        assert parent.label == "trg_orders_audit"
        writes = edges[f"trigger-affects-{AUDIT}-dbo.invoices"]
        assert writes.edge_type is EdgeType.TRIGGER_WRITES
        assert writes.label == "trg_orders_audit (writes)"

    def test_trigger_parent_not_repeated_as_reference(self) -> None:
        g = SchemaGraph(
            tables=(Table("dbo.a", "a", "dbo"),),
            triggers=(Trigger("dbo.a.t", "t", "dbo", "dbo.a", referenced_tables=("dbo.a",)),),
        )
        assert [e.id for e in build_base_edges(g)] == ["trigger-edge-dbo.a.t"]

    def test_procedure_direction(self, schema: SchemaGraph) -> None:
        edges = _by_id(build_base_edges(schema))
        reads = edges["proc-edge-dbo.usp_close_order-dbo.orders"]
        assert (reads.source, reads.target) == ("dbo.orders", "dbo.usp_close_order")
        writes = edges["proc-affects-dbo.usp_close_order-dbo.invoices"]
        assert (writes.source, writes.target) == ("dbo.usp_close_order", "dbo.invoices")

    def test_view_reference_skips_lineage_sources(self, schema: SchemaGraph) -> None:
        view_edges = [
            e for e in build_base_edges(schema) if e.edge_type is EdgeType.VIEW_DEPENDENCIES
        ]
        node_level = [e for e in view_edges if e.source_column is None]
        assert [e.source for e in node_level] == ["sales.regions"]
        assert all(e.label == "vw_order_summary" for e in view_edges)

    def test_dangling_reference_skipped(self) -> None:
        g = SchemaGraph(
            tables=(Table("dbo.a", "a", "dbo"),),
            relationships=(RelationshipEdge("FK_a_gone", "dbo.a", "dbo.gone"),),
        )
        assert build_base_edges(g) == ()

    def test_policy_violation_skipped(self) -> None:
        # A view can never feed a plain table
        g = SchemaGraph(
            tables=(Table("dbo.a", "a", "dbo"),),
            views=(View("dbo.v", "v", "dbo"),),
            relationships=(RelationshipEdge("FK_v_a", "dbo.v", "dbo.a"),),
        )
        assert [e.id for e in build_base_edges(g)] == []


# ======================================================================
# TestEdgeMetaConsistency
# ======================================================================


class TestEdgeMetaConsistency:
    def test_node_level(self) -> None:
        edge = EdgeMeta(
            "e", EdgeType.RELATIONSHIPS, "a", "b",
            node_handle("a", HandleDirection.SOURCE), node_handle("b", HandleDirection.TARGET),
        )
        assert edge.is_consistent()

    def test_column_without_column_handle(self) -> None:
        edge = EdgeMeta(
            "e", EdgeType.RELATIONSHIPS, "a", "b",
            node_handle("a", HandleDirection.SOURCE), node_handle("b", HandleDirection.TARGET),
            source_column="x",
        )
        assert not edge.is_consistent()

    def test_column_handle_on_wrong_node(self) -> None:
        edge = EdgeMeta(
            "e", EdgeType.RELATIONSHIPS, "a", "b",
            column_handle("c", "x", HandleDirection.SOURCE), None,
            source_column="x",
        )
        assert not edge.is_consistent()

    def test_wrong_direction(self) -> None:
        edge = EdgeMeta(
            "e", EdgeType.RELATIONSHIPS, "a", "b",
            node_handle("a", HandleDirection.TARGET), None,
        )
        assert not edge.is_consistent()

    def test_no_handles(self) -> None:
        assert EdgeMeta("e", EdgeType.RELATIONSHIPS, "a", "b").is_consistent()


# ======================================================================
# TestViewLineage
# ======================================================================


class TestViewLineage:
    @pytest.mark.parametrize(
        ("reference", "expected"),
        [
            pytest.param("dbo.orders", "dbo.orders", id="id"),
            pytest.param("[dbo].[Orders]", "dbo.orders", id="bracketed-mixed-case"),
            pytest.param("orders", "dbo.orders", id="short-name"),
            pytest.param("otherdb.dbo.orders", "dbo.orders", id="qualified-fallback"),
            pytest.param("dbo.nothing", None, id="unresolved"),
        ],
    )
    def test_resolve_table_reference(
        self, schema: SchemaGraph, reference: str, expected: str | None,
    ) -> None:
        assert resolve_table_reference(build_name_lookup(schema), reference) == expected

    def test_view_column_sources(self, schema: SchemaGraph) -> None:
        assert resolve_view_column_sources(schema) == {
            "dbo.vw_order_summary": (
                ViewColumnSource("order_id", "dbo.orders", "id"),
                ViewColumnSource("customer_name", "dbo.customers", "name"),
            ),
        }

    def test_unresolved_lineage_skipped(self) -> None:
        g = SchemaGraph(
            views=(
                View("dbo.v", "v", "dbo", columns=(Column("x", source_table="t", source_column="y"),)),
            ),
        )
        assert resolve_view_column_sources(g) == {}
