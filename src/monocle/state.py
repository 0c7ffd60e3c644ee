"""ViewState — one immutable snapshot of filter, focus and interaction state.

Every transition returns a new snapshot; nothing is mutated in place.  This
module is also the boundary where filter input is validated before it
reaches the derivation functions.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from monocle.exceptions import UnknownEdgeTypeError, UnknownObjectTypeError
from monocle.graph.types import ALL_SCHEMAS, FocusMode, FocusState, GraphFilters
from monocle.schema.types import ALL_EDGE_TYPES, OBJECT_KINDS, EdgeType, NodeKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from monocle.config import GraphSettings
    from monocle.schema.types import SchemaGraph


# ------------------------------------------------------------------
# Boundary validation
# ------------------------------------------------------------------


def validate_edge_types(values: Iterable[EdgeType | str]) -> frozenset[EdgeType]:
    """Coerce *values* to ``EdgeType`` members.

    Raises ``UnknownEdgeTypeError`` for any tag outside the vocabulary.
    """
    result: set[EdgeType] = set()
    for value in values:
        try:
            result.add(EdgeType(value))
        except ValueError:
            msg = f"Unknown edge type: {value!r}"
            raise UnknownEdgeTypeError(msg) from None
    return frozenset(result)


def validate_object_types(values: Iterable[NodeKind | str]) -> frozenset[NodeKind]:
    """Coerce *values* to filterable ``NodeKind`` members.

    Raises ``UnknownObjectTypeError`` for unknown names and for
    ``NodeKind.UNKNOWN`` itself.
    """
    result: set[NodeKind] = set()
    for value in values:
        try:
            kind = NodeKind(value)
        except ValueError:
            kind = NodeKind.UNKNOWN
        if kind not in OBJECT_KINDS:
            msg = f"Unknown object type: {value!r}"
            raise UnknownObjectTypeError(msg)
        result.add(kind)
    return frozenset(result)


# ------------------------------------------------------------------
# Schema-derived helpers
# ------------------------------------------------------------------


def available_schemas(graph: SchemaGraph) -> list[str]:
    """Distinct schema names in first-seen order."""
    return list(dict.fromkeys(obj.schema for obj in graph.objects()))


def resolve_schema_filter(preferred: str, available: Iterable[str]) -> str:
    """Use *preferred* if the loaded schema has it, else ``"all"``."""
    if preferred == ALL_SCHEMAS or preferred in set(available):
        return preferred
    return ALL_SCHEMAS


def _toggled[T](values: frozenset[T], item: T) -> frozenset[T]:
    return values - {item} if item in values else values | {item}


# ------------------------------------------------------------------
# ViewState
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ViewState:
    """Immutable UI state snapshot consumed by the derivation pipeline.

    Attributes:
        filters: Schema, object-type, edge-type and search filters.
        focus: Focus mode, focused node and expansion threshold.
        selected_edge_ids: Edges the user has selected.
        hovered_edge_id: Edge under the pointer, if any.
        show_labels: Draw every edge label.
        show_inline_label_on_hover: Draw the hovered edge's label.
    """

    filters: GraphFilters = field(default_factory=GraphFilters)
    focus: FocusState = field(default_factory=FocusState)
    selected_edge_ids: frozenset[str] = frozenset()
    hovered_edge_id: str | None = None
    show_labels: bool = False
    show_inline_label_on_hover: bool = False

    @classmethod
    def for_schema(cls, graph: SchemaGraph, settings: GraphSettings) -> ViewState:
        """Fresh state for a newly loaded schema, seeded from *settings*."""
        return cls(
            filters=GraphFilters(
                schema_filter=resolve_schema_filter(
                    settings.schema_filter, available_schemas(graph),
                ),
            ),
            focus=FocusState(
                mode=settings.focus_mode,
                expand_threshold=settings.focus_expand_threshold,
            ),
        )

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def with_search(self, search: str) -> ViewState:
        return replace(self, filters=replace(self.filters, search=search))

    def with_schema_filter(self, schema: str) -> ViewState:
        return replace(self, filters=replace(self.filters, schema_filter=schema))

    def with_object_types(self, kinds: Iterable[NodeKind | str]) -> ViewState:
        return replace(
            self, filters=replace(self.filters, object_types=validate_object_types(kinds)),
        )

    def toggle_object_type(self, kind: NodeKind | str) -> ViewState:
        (member,) = validate_object_types([kind])
        types = _toggled(self.filters.object_types, member)
        return replace(self, filters=replace(self.filters, object_types=types))

    def select_all_object_types(self) -> ViewState:
        return replace(self, filters=replace(self.filters, object_types=OBJECT_KINDS))

    def with_edge_types(self, edge_types: Iterable[EdgeType | str]) -> ViewState:
        return replace(
            self, filters=replace(self.filters, edge_types=validate_edge_types(edge_types)),
        )

    def toggle_edge_type(self, edge_type: EdgeType | str) -> ViewState:
        (member,) = validate_edge_types([edge_type])
        types = _toggled(self.filters.edge_types, member)
        return replace(self, filters=replace(self.filters, edge_types=types))

    def select_all_edge_types(self) -> ViewState:
        return replace(self, filters=replace(self.filters, edge_types=ALL_EDGE_TYPES))

    def exclude_object(self, node_id: str) -> ViewState:
        excluded = self.filters.excluded_ids | {node_id}
        return replace(self, filters=replace(self.filters, excluded_ids=excluded))

    def include_object(self, node_id: str) -> ViewState:
        excluded = self.filters.excluded_ids - {node_id}
        return replace(self, filters=replace(self.filters, excluded_ids=excluded))

    def include_all_objects(self) -> ViewState:
        return replace(self, filters=replace(self.filters, excluded_ids=frozenset()))

    # ------------------------------------------------------------------
    # Focus
    # ------------------------------------------------------------------

    def focus_on(self, node_id: str | None) -> ViewState:
        return replace(self, focus=replace(self.focus, node_id=node_id or None))

    def clear_focus(self) -> ViewState:
        return self.focus_on(None)

    def with_focus_mode(self, mode: FocusMode | str) -> ViewState:
        return replace(self, focus=replace(self.focus, mode=FocusMode(mode)))

    def with_expand_threshold(self, threshold: int) -> ViewState:
        return replace(self, focus=replace(self.focus, expand_threshold=max(threshold, 0)))

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def toggle_edge_selection(self, edge_id: str) -> ViewState:
        return replace(self, selected_edge_ids=_toggled(self.selected_edge_ids, edge_id))

    def clear_edge_selection(self) -> ViewState:
        return replace(self, selected_edge_ids=frozenset())

    def hover_edge(self, edge_id: str | None) -> ViewState:
        return replace(self, hovered_edge_id=edge_id)

    def with_labels(self, *, show_labels: bool, show_inline_label_on_hover: bool) -> ViewState:
        return replace(
            self,
            show_labels=show_labels,
            show_inline_label_on_hover=show_inline_label_on_hover,
        )
