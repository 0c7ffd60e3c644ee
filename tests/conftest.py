"""Shared fixtures for monocle tests."""

from __future__ import annotations

import pytest

from monocle.graph._rustworkx import SchemaIndex
from monocle.schema.types import (
    Column,
    ProcedureParameter,
    RelationshipEdge,
    ScalarFunction,
    SchemaGraph,
    StoredProcedure,
    Table,
    Trigger,
    View,
)

ORDERS = "dbo.orders"
CUSTOMERS = "dbo.customers"
INVOICES = "dbo.invoices"
REGIONS = "sales.regions"
ORDER_SUMMARY = "dbo.vw_order_summary"
AUDIT_TRIGGER = "dbo.orders.trg_orders_audit"
CLOSE_ORDER = "dbo.usp_close_order"
ORDER_TOTAL = "dbo.fn_order_total"


def make_schema() -> SchemaGraph:
    """A small schema exercising every object kind and edge type.

    ``dbo.orders`` has six direct neighbours; ``sales.regions`` is the only
    object outside ``dbo``.
    """
    return SchemaGraph(
        tables=(
            Table(
                id=CUSTOMERS,
                name="customers",
                schema="dbo",
                columns=(
                    Column("id", "int", is_nullable=False, is_primary_key=True),
                    Column("name", "nvarchar(100)"),
                ),
            ),
            Table(
                id=ORDERS,
                name="orders",
                schema="dbo",
                columns=(
                    Column("id", "int", is_nullable=False, is_primary_key=True),
                    Column("customer_id", "int", is_nullable=False),
                    Column("total", "decimal(10,2)"),
                ),
            ),
            Table(
                id=INVOICES,
                name="invoices",
                schema="dbo",
                columns=(
                    Column("id", "int", is_nullable=False, is_primary_key=True),
                    Column("order_id", "int"),
                ),
            ),
            Table(
                id=REGIONS,
                name="regions",
                schema="sales",
                columns=(Column("id", "int", is_primary_key=True), Column("name", "nvarchar(50)")),
            ),
        ),
        views=(
            View(
                id=ORDER_SUMMARY,
                name="vw_order_summary",
                schema="dbo",
                columns=(
                    Column("order_id", "int", source_table="dbo.orders", source_column="id"),
                    Column(
                        "customer_name",
                        "nvarchar(100)",
                        source_table="[dbo].[customers]",
                        source_column="name",
                    ),
                ),
                definition="SELECT o.id AS order_id, c.name AS customer_name FROM ...",
                referenced_tables=(ORDERS, CUSTOMERS, REGIONS),
            ),
        ),
        triggers=(
            Trigger(
                id=AUDIT_TRIGGER,
                name="trg_orders_audit",
                schema="dbo",
                table_id=ORDERS,
                trigger_type="AFTER",
                fires_on_insert=True,
                fires_on_update=True,
                referenced_tables=(CUSTOMERS,),
                affected_tables=(INVOICES,),
            ),
        ),
        stored_procedures=(
            StoredProcedure(
                id=CLOSE_ORDER,
                name="usp_close_order",
                schema="dbo",
                procedure_type="SQL_STORED_PROCEDURE",
                parameters=(ProcedureParameter("@order_id", "int"),),
                referenced_tables=(ORDERS,),
                affected_tables=(INVOICES,),
            ),
        ),
        scalar_functions=(
            ScalarFunction(
                id=ORDER_TOTAL,
                name="fn_order_total",
                schema="dbo",
                function_type="SQL_SCALAR_FUNCTION",
                parameters=(ProcedureParameter("@order_id", "int"),),
                return_type="decimal(10,2)",
                referenced_tables=(ORDERS,),
            ),
        ),
        relationships=(
            RelationshipEdge("FK_orders_customers", ORDERS, CUSTOMERS, "customer_id", "id"),
            RelationshipEdge("FK_invoices_orders", INVOICES, ORDERS, "order_id", "id"),
        ),
    )


@pytest.fixture
def schema() -> SchemaGraph:
    """The shared sample schema."""
    return make_schema()


@pytest.fixture
def index(schema: SchemaGraph) -> SchemaIndex:
    """A ``SchemaIndex`` over the sample schema."""
    return SchemaIndex(schema)
