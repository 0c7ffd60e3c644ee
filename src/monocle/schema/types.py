"""Schema object types — immutable data containers for a loaded database schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, StrEnum

from monocle.exceptions import DuplicateObjectIdError

# ------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------


class NodeKind(Enum):
    """Kind of schema object a node identifier refers to."""

    TABLE = "table"
    VIEW = "view"
    TRIGGER = "trigger"
    PROCEDURE = "procedure"
    FUNCTION = "function"
    UNKNOWN = "unknown"


TABLE_LIKE_KINDS: frozenset[NodeKind] = frozenset({NodeKind.TABLE, NodeKind.VIEW})
"""Kinds that own columns and act as data sources."""

OBJECT_KINDS: frozenset[NodeKind] = frozenset(NodeKind) - {NodeKind.UNKNOWN}
"""Every kind an object-type filter can name."""


class EdgeType(StrEnum):
    """Why two nodes are connected.

    Members compare and hash equal to their string tags, so filter sets may
    hold either ``EdgeType`` members or the raw tags.
    """

    RELATIONSHIPS = "relationships"
    VIEW_DEPENDENCIES = "viewDependencies"
    TRIGGER_DEPENDENCIES = "triggerDependencies"
    TRIGGER_WRITES = "triggerWrites"
    PROCEDURE_READS = "procedureReads"
    PROCEDURE_WRITES = "procedureWrites"
    FUNCTION_READS = "functionReads"


ALL_EDGE_TYPES: frozenset[EdgeType] = frozenset(EdgeType)


# ------------------------------------------------------------------
# Schema objects
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Column:
    """A column owned by a table or view.

    Attributes:
        name: Column name, unique within its owner.
        data_type: Declared SQL type, e.g. ``"nvarchar(50)"``.
        is_nullable: Whether the column accepts NULL.
        is_primary_key: Whether the column is part of the primary key.
        source_table: For view columns, the table the value is read from.
        source_column: For view columns, the column the value is read from.
    """

    name: str
    data_type: str = ""
    is_nullable: bool = True
    is_primary_key: bool = False
    source_table: str | None = None
    source_column: str | None = None


@dataclass(frozen=True, slots=True)
class ProcedureParameter:
    """A parameter of a stored procedure or scalar function."""

    name: str
    data_type: str = ""
    is_output: bool = False


@dataclass(frozen=True, slots=True)
class Table:
    """A base table.  ``id`` has the form ``"schema.table"``."""

    id: str
    name: str
    schema: str
    columns: tuple[Column, ...] = ()


@dataclass(frozen=True, slots=True)
class View:
    """A view and the table/view ids its definition references."""

    id: str
    name: str
    schema: str
    columns: tuple[Column, ...] = ()
    definition: str = ""
    referenced_tables: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Trigger:
    """A trigger attached to ``table_id``.

    ``referenced_tables`` are read by the trigger body, ``affected_tables``
    are written by it.
    """

    id: str
    name: str
    schema: str
    table_id: str
    trigger_type: str = ""
    is_disabled: bool = False
    fires_on_insert: bool = False
    fires_on_update: bool = False
    fires_on_delete: bool = False
    definition: str = ""
    referenced_tables: tuple[str, ...] = ()
    affected_tables: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class StoredProcedure:
    """A stored procedure with the tables it reads and writes."""

    id: str
    name: str
    schema: str
    procedure_type: str = ""
    parameters: tuple[ProcedureParameter, ...] = ()
    definition: str = ""
    referenced_tables: tuple[str, ...] = ()
    affected_tables: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ScalarFunction:
    """A scalar function with the tables it reads."""

    id: str
    name: str
    schema: str
    function_type: str = ""
    parameters: tuple[ProcedureParameter, ...] = ()
    return_type: str = ""
    definition: str = ""
    referenced_tables: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RelationshipEdge:
    """A foreign key from ``from_table`` to ``to_table``.

    Column names are optional; without them the relationship is drawn
    between whole nodes.
    """

    id: str
    from_table: str
    to_table: str
    from_column: str | None = None
    to_column: str | None = None


type SchemaObject = Table | View | Trigger | StoredProcedure | ScalarFunction


# ------------------------------------------------------------------
# SchemaGraph
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SchemaGraph:
    """A loaded schema: disjoint typed object collections plus foreign keys.

    Immutable for the lifetime of one load and replaced wholesale on reload.
    A single id → kind index is built on construction, so classification is
    a dict lookup rather than a scan of each collection.

    Raises ``DuplicateObjectIdError`` if two objects share an id.
    """

    tables: tuple[Table, ...] = ()
    views: tuple[View, ...] = ()
    triggers: tuple[Trigger, ...] = ()
    stored_procedures: tuple[StoredProcedure, ...] = ()
    scalar_functions: tuple[ScalarFunction, ...] = ()
    relationships: tuple[RelationshipEdge, ...] = ()
    _kinds: dict[str, NodeKind] = field(
        init=False, repr=False, compare=False, hash=False, default_factory=dict,
    )
    _objects: dict[str, SchemaObject] = field(
        init=False, repr=False, compare=False, hash=False, default_factory=dict,
    )

    def __post_init__(self) -> None:
        for name in (
            "tables", "views", "triggers", "stored_procedures",
            "scalar_functions", "relationships",
        ):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

        buckets: tuple[tuple[NodeKind, tuple[SchemaObject, ...]], ...] = (
            (NodeKind.TABLE, self.tables),
            (NodeKind.VIEW, self.views),
            (NodeKind.TRIGGER, self.triggers),
            (NodeKind.PROCEDURE, self.stored_procedures),
            (NodeKind.FUNCTION, self.scalar_functions),
        )
        for kind, objects in buckets:
            for obj in objects:
                existing = self._kinds.get(obj.id)
                if existing is not None:
                    msg = (
                        f"Duplicate object id {obj.id!r}: "
                        f"already registered as {existing.value}, found again as {kind.value}"
                    )
                    raise DuplicateObjectIdError(msg)
                self._kinds[obj.id] = kind
                self._objects[obj.id] = obj

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def kind_of(self, node_id: str) -> NodeKind:
        """Return the kind of *node_id*, or ``NodeKind.UNKNOWN``."""
        return self._kinds.get(node_id, NodeKind.UNKNOWN)

    def has_node(self, node_id: str) -> bool:
        """Return whether *node_id* names an object in this graph."""
        return node_id in self._kinds

    def get_node(self, node_id: str) -> SchemaObject | None:
        """Return the object for *node_id*, or ``None``."""
        return self._objects.get(node_id)

    def node_ids(self) -> list[str]:
        """All object ids in collection order (tables first)."""
        return list(self._kinds)

    def objects(self) -> list[SchemaObject]:
        """All objects in collection order (tables first)."""
        return list(self._objects.values())

    def columns_by_node_id(self) -> dict[str, frozenset[str]]:
        """Column names for every table and view."""
        return {
            obj.id: frozenset(col.name for col in obj.columns)
            for obj in (*self.tables, *self.views)
        }

    @property
    def node_count(self) -> int:
        """Number of schema objects."""
        return len(self._kinds)

    def __repr__(self) -> str:
        return (
            f"SchemaGraph(tables={len(self.tables)}, views={len(self.views)}, "
            f"triggers={len(self.triggers)}, procedures={len(self.stored_procedures)}, "
            f"functions={len(self.scalar_functions)}, relationships={len(self.relationships)})"
        )


def classify(graph: SchemaGraph, node_id: str) -> NodeKind:
    """Map *node_id* to its kind.

    Priority follows collection order (tables, views, triggers, procedures,
    functions); ids are unique across collections so at most one matches.
    """
    return graph.kind_of(node_id)
