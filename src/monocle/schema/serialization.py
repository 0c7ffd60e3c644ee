"""Schema document codec — camelCase JSON in, camelCase JSON out.

The loader hands the schema over as a JSON document whose keys are
camelCase (``storedProcedures``, ``isPrimaryKey``, ``from``/``to`` on
relationships).  :func:`schema_from_dict` turns that document into a
:class:`~monocle.schema.types.SchemaGraph`; :func:`schema_to_dict` and
:func:`export_schema_json` go the other way.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from monocle.exceptions import SchemaError
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

if TYPE_CHECKING:
    from collections.abc import Mapping

EXPORT_FORMAT_VERSION = "1.0"


@dataclass(frozen=True, slots=True)
class ConnectionInfo:
    """Server and database recorded in an export's metadata envelope."""

    server: str
    database: str | None = None


# ------------------------------------------------------------------
# Decoding
# ------------------------------------------------------------------


def _require(data: Mapping[str, Any], key: str, kind: str) -> Any:
    try:
        return data[key]
    except KeyError:
        msg = f"{kind} is missing required key {key!r}"
        raise SchemaError(msg) from None


def _strings(data: Mapping[str, Any], key: str) -> tuple[str, ...]:
    return tuple(data.get(key) or ())


def _column(data: Mapping[str, Any]) -> Column:
    return Column(
        name=_require(data, "name", "column"),
        data_type=data.get("dataType", ""),
        is_nullable=bool(data.get("isNullable", True)),
        is_primary_key=bool(data.get("isPrimaryKey", False)),
        source_table=data.get("sourceTable"),
        source_column=data.get("sourceColumn"),
    )


def _parameter(data: Mapping[str, Any]) -> ProcedureParameter:
    return ProcedureParameter(
        name=_require(data, "name", "parameter"),
        data_type=data.get("dataType", ""),
        is_output=bool(data.get("isOutput", False)),
    )


def _columns(data: Mapping[str, Any]) -> tuple[Column, ...]:
    return tuple(_column(c) for c in data.get("columns") or ())


def _parameters(data: Mapping[str, Any]) -> tuple[ProcedureParameter, ...]:
    return tuple(_parameter(p) for p in data.get("parameters") or ())


def _table(data: Mapping[str, Any]) -> Table:
    return Table(
        id=_require(data, "id", "table"),
        name=_require(data, "name", "table"),
        schema=_require(data, "schema", "table"),
        columns=_columns(data),
    )


def _view(data: Mapping[str, Any]) -> View:
    return View(
        id=_require(data, "id", "view"),
        name=_require(data, "name", "view"),
        schema=_require(data, "schema", "view"),
        columns=_columns(data),
        definition=data.get("definition", ""),
        referenced_tables=_strings(data, "referencedTables"),
    )


def _trigger(data: Mapping[str, Any]) -> Trigger:
    return Trigger(
        id=_require(data, "id", "trigger"),
        name=_require(data, "name", "trigger"),
        schema=_require(data, "schema", "trigger"),
        table_id=_require(data, "tableId", "trigger"),
        trigger_type=data.get("triggerType", ""),
        is_disabled=bool(data.get("isDisabled", False)),
        fires_on_insert=bool(data.get("firesOnInsert", False)),
        fires_on_update=bool(data.get("firesOnUpdate", False)),
        fires_on_delete=bool(data.get("firesOnDelete", False)),
        definition=data.get("definition", ""),
        referenced_tables=_strings(data, "referencedTables"),
        affected_tables=_strings(data, "affectedTables"),
    )


def _procedure(data: Mapping[str, Any]) -> StoredProcedure:
    return StoredProcedure(
        id=_require(data, "id", "stored procedure"),
        name=_require(data, "name", "stored procedure"),
        schema=_require(data, "schema", "stored procedure"),
        procedure_type=data.get("procedureType", ""),
        parameters=_parameters(data),
        definition=data.get("definition", ""),
        referenced_tables=_strings(data, "referencedTables"),
        affected_tables=_strings(data, "affectedTables"),
    )


def _function(data: Mapping[str, Any]) -> ScalarFunction:
    return ScalarFunction(
        id=_require(data, "id", "scalar function"),
        name=_require(data, "name", "scalar function"),
        schema=_require(data, "schema", "scalar function"),
        function_type=data.get("functionType", ""),
        parameters=_parameters(data),
        return_type=data.get("returnType", ""),
        definition=data.get("definition", ""),
        referenced_tables=_strings(data, "referencedTables"),
    )


def _relationship(data: Mapping[str, Any]) -> RelationshipEdge:
    return RelationshipEdge(
        id=_require(data, "id", "relationship"),
        from_table=_require(data, "from", "relationship"),
        to_table=_require(data, "to", "relationship"),
        from_column=data.get("fromColumn") or None,
        to_column=data.get("toColumn") or None,
    )


def schema_from_dict(data: Mapping[str, Any]) -> SchemaGraph:
    """Build a ``SchemaGraph`` from a camelCase schema document.

    Missing collections are treated as empty.  A document wrapped in an
    export envelope (``{"metadata": ..., "schema": ...}``) is unwrapped.

    Raises:
        SchemaError: An object lacks a required key.
        DuplicateObjectIdError: Two objects share an id.
    """
    if "schema" in data and "metadata" in data:
        data = data["schema"]
    return SchemaGraph(
        tables=tuple(_table(t) for t in data.get("tables") or ()),
        views=tuple(_view(v) for v in data.get("views") or ()),
        triggers=tuple(_trigger(t) for t in data.get("triggers") or ()),
        stored_procedures=tuple(_procedure(p) for p in data.get("storedProcedures") or ()),
        scalar_functions=tuple(_function(f) for f in data.get("scalarFunctions") or ()),
        relationships=tuple(_relationship(r) for r in data.get("relationships") or ()),
    )


def schema_from_json(text: str) -> SchemaGraph:
    """Parse *text* and build a ``SchemaGraph``."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        msg = f"Invalid schema JSON: {e}"
        raise SchemaError(msg) from e
    if not isinstance(data, dict):
        msg = f"Schema document must be an object, got {type(data).__name__}"
        raise SchemaError(msg)
    return schema_from_dict(data)


# ------------------------------------------------------------------
# Encoding
# ------------------------------------------------------------------


def _column_to_dict(col: Column) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": col.name,
        "dataType": col.data_type,
        "isNullable": col.is_nullable,
        "isPrimaryKey": col.is_primary_key,
    }
    if col.source_table is not None:
        data["sourceTable"] = col.source_table
    if col.source_column is not None:
        data["sourceColumn"] = col.source_column
    return data


def _parameter_to_dict(param: ProcedureParameter) -> dict[str, Any]:
    return {"name": param.name, "dataType": param.data_type, "isOutput": param.is_output}


def schema_to_dict(graph: SchemaGraph) -> dict[str, Any]:
    """Inverse of :func:`schema_from_dict`."""
    return {
        "tables": [
            {
                "id": t.id,
                "name": t.name,
                "schema": t.schema,
                "columns": [_column_to_dict(c) for c in t.columns],
            }
            for t in graph.tables
        ],
        "views": [
            {
                "id": v.id,
                "name": v.name,
                "schema": v.schema,
                "columns": [_column_to_dict(c) for c in v.columns],
                "definition": v.definition,
                "referencedTables": list(v.referenced_tables),
            }
            for v in graph.views
        ],
        "relationships": [
            {
                "id": r.id,
                "from": r.from_table,
                "to": r.to_table,
                "fromColumn": r.from_column or "",
                "toColumn": r.to_column or "",
            }
            for r in graph.relationships
        ],
        "triggers": [
            {
                "id": t.id,
                "name": t.name,
                "schema": t.schema,
                "tableId": t.table_id,
                "triggerType": t.trigger_type,
                "isDisabled": t.is_disabled,
                "firesOnInsert": t.fires_on_insert,
                "firesOnUpdate": t.fires_on_update,
                "firesOnDelete": t.fires_on_delete,
                "definition": t.definition,
                "referencedTables": list(t.referenced_tables),
                "affectedTables": list(t.affected_tables),
            }
            for t in graph.triggers
        ],
        "storedProcedures": [
            {
                "id": p.id,
                "name": p.name,
                "schema": p.schema,
                "procedureType": p.procedure_type,
                "parameters": [_parameter_to_dict(x) for x in p.parameters],
                "definition": p.definition,
                "referencedTables": list(p.referenced_tables),
                "affectedTables": list(p.affected_tables),
            }
            for p in graph.stored_procedures
        ],
        "scalarFunctions": [
            {
                "id": f.id,
                "name": f.name,
                "schema": f.schema,
                "functionType": f.function_type,
                "parameters": [_parameter_to_dict(x) for x in f.parameters],
                "returnType": f.return_type,
                "definition": f.definition,
                "referencedTables": list(f.referenced_tables),
                "affectedTables": [],
            }
            for f in graph.scalar_functions
        ],
    }


def export_schema_json(
    graph: SchemaGraph,
    *,
    pretty: bool = True,
    include_metadata: bool = True,
    connection: ConnectionInfo | None = None,
) -> str:
    """Serialize *graph* for download.

    With *include_metadata* the schema is wrapped as
    ``{"metadata": {...}, "schema": {...}}``; metadata carries the export
    time (UTC, ISO 8601), the format version and, when given, the server
    and database the schema was loaded from.
    """
    payload: dict[str, Any] = schema_to_dict(graph)
    if include_metadata:
        metadata: dict[str, Any] = {
            "exportedAt": datetime.now(UTC).isoformat(),
            "version": EXPORT_FORMAT_VERSION,
        }
        if connection is not None:
            metadata["server"] = connection.server
            if connection.database is not None:
                metadata["database"] = connection.database
        payload = {"metadata": metadata, "schema": payload}
    if pretty:
        return json.dumps(payload, indent=2, ensure_ascii=False)
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
