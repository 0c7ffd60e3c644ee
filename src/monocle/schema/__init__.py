"""Schema layer — typed database objects and the JSON document codec."""

from monocle.schema.serialization import (
    ConnectionInfo,
    export_schema_json,
    schema_from_dict,
    schema_from_json,
    schema_to_dict,
)
from monocle.schema.types import (
    ALL_EDGE_TYPES,
    OBJECT_KINDS,
    Column,
    EdgeType,
    NodeKind,
    ProcedureParameter,
    RelationshipEdge,
    ScalarFunction,
    SchemaGraph,
    SchemaObject,
    StoredProcedure,
    Table,
    Trigger,
    View,
    classify,
)

__all__ = [
    "ALL_EDGE_TYPES",
    "OBJECT_KINDS",
    "Column",
    "ConnectionInfo",
    "EdgeType",
    "NodeKind",
    "ProcedureParameter",
    "RelationshipEdge",
    "ScalarFunction",
    "SchemaGraph",
    "SchemaObject",
    "StoredProcedure",
    "Table",
    "Trigger",
    "View",
    "classify",
    "export_schema_json",
    "schema_from_dict",
    "schema_from_json",
    "schema_to_dict",
]
