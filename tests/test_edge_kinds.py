"""Tests for the edge-kind policy."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from monocle.graph.edge_kinds import (
    allowed_edge_kinds,
    allowed_edge_kinds_for,
    is_edge_kind_allowed,
)
from monocle.schema.types import EdgeType, NodeKind

if TYPE_CHECKING:
    from monocle.schema.types import SchemaGraph


T = NodeKind.TABLE
V = NodeKind.VIEW
TR = NodeKind.TRIGGER
P = NodeKind.PROCEDURE
F = NodeKind.FUNCTION
U = NodeKind.UNKNOWN


# ======================================================================
# TestRuleTable
# ======================================================================


class TestRuleTable:
    @pytest.mark.parametrize(
        ("source", "target", "expected"),
        [
            pytest.param(T, V, (EdgeType.VIEW_DEPENDENCIES,), id="table-view"),
            pytest.param(V, V, (EdgeType.VIEW_DEPENDENCIES,), id="view-view"),
            pytest.param(V, T, (), id="view-table"),
            pytest.param(T, T, (EdgeType.RELATIONSHIPS,), id="table-table"),
            pytest.param(T, TR, (EdgeType.TRIGGER_DEPENDENCIES,), id="table-trigger"),
            pytest.param(V, TR, (EdgeType.TRIGGER_DEPENDENCIES,), id="view-trigger"),
            pytest.param(
                TR, T, (EdgeType.TRIGGER_DEPENDENCIES, EdgeType.TRIGGER_WRITES), id="trigger-table",
            ),
            pytest.param(T, P, (EdgeType.PROCEDURE_READS,), id="table-procedure"),
            pytest.param(P, T, (EdgeType.PROCEDURE_WRITES,), id="procedure-table"),
            pytest.param(P, V, (EdgeType.PROCEDURE_WRITES,), id="procedure-view"),
            pytest.param(T, F, (EdgeType.FUNCTION_READS,), id="table-function"),
            pytest.param(F, T, (), id="function-table"),
            pytest.param(TR, P, (), id="trigger-procedure"),
            pytest.param(P, F, (), id="procedure-function"),
            pytest.param(U, T, (), id="unknown-source"),
            pytest.param(T, U, (), id="unknown-target"),
        ],
    )
    def test_rules(
        self, source: NodeKind, target: NodeKind, expected: tuple[EdgeType, ...],
    ) -> None:
        assert allowed_edge_kinds_for(source, target) == expected

    def test_view_to_view_beats_view_to_table(self) -> None:
        # View -> view matches the earlier table-like -> view rule
        assert allowed_edge_kinds_for(V, V) != ()


# ======================================================================
# TestGraphLookup
# ======================================================================


class TestGraphLookup:
    def test_table_to_view(self, schema: SchemaGraph) -> None:
        assert allowed_edge_kinds(schema, "dbo.orders", "dbo.vw_order_summary") == (
            EdgeType.VIEW_DEPENDENCIES,
        )

    def test_view_to_table_is_empty(self, schema: SchemaGraph) -> None:
        assert allowed_edge_kinds(schema, "dbo.vw_order_summary", "dbo.orders") == ()

    def test_unknown_endpoint(self, schema: SchemaGraph) -> None:
        assert allowed_edge_kinds(schema, "dbo.orders", "dbo.gone") == ()
        assert allowed_edge_kinds(schema, "dbo.gone", "dbo.orders") == ()

    def test_is_allowed_accepts_tags(self, schema: SchemaGraph) -> None:
        assert is_edge_kind_allowed(schema, "dbo.orders", "dbo.customers", "relationships")
        assert not is_edge_kind_allowed(
            schema, "dbo.orders", "dbo.customers", EdgeType.VIEW_DEPENDENCIES,
        )
