"""Edge-state derivation — the exact, ordered edge records to render."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from monocle.graph.hover import normalize_text
from monocle.graph.types import EdgeRecord, EdgeStateResult, EdgeStyle
from monocle.schema.types import EdgeType

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Mapping, Sequence
    from collections.abc import Set as AbstractSet

    from monocle.graph.edges import EdgeMeta


@dataclass(frozen=True, slots=True)
class EdgePalette:
    """Colours for one edge type in each emphasis state."""

    base: str
    dimmed: str
    selected: str
    label: str
    label_dimmed: str
    label_selected: str


EDGE_PALETTES: MappingProxyType[EdgeType, EdgePalette] = MappingProxyType({
    EdgeType.RELATIONSHIPS: EdgePalette(
        "#3b82f6", "#93c5fd", "#2563eb", "#2563eb", "#93c5fd", "#1d4ed8",
    ),
    EdgeType.TRIGGER_DEPENDENCIES: EdgePalette(
        "#f59e0b", "#fcd34d", "#d97706", "#b45309", "#fcd34d", "#92400e",
    ),
    EdgeType.TRIGGER_WRITES: EdgePalette(
        "#ef4444", "#fca5a5", "#dc2626", "#dc2626", "#fca5a5", "#991b1b",
    ),
    EdgeType.PROCEDURE_READS: EdgePalette(
        "#8b5cf6", "#c4b5fd", "#7c3aed", "#7c3aed", "#c4b5fd", "#5b21b6",
    ),
    EdgeType.PROCEDURE_WRITES: EdgePalette(
        "#ef4444", "#fca5a5", "#dc2626", "#dc2626", "#fca5a5", "#991b1b",
    ),
    EdgeType.VIEW_DEPENDENCIES: EdgePalette(
        "#10b981", "#6ee7b7", "#059669", "#047857", "#6ee7b7", "#065f46",
    ),
    EdgeType.FUNCTION_READS: EdgePalette(
        "#06b6d4", "#67e8f9", "#0891b2", "#0891b2", "#67e8f9", "#155e75",
    ),
})

SELECTED_STROKE_WIDTH = 4
FOCUSED_STROKE_WIDTH = 3
DEFAULT_STROKE_WIDTH = 2
DIMMED_STROKE_WIDTH = 1
DIMMED_OPACITY = 0.4


def _column_exists(
    columns_by_node_id: Mapping[str, AbstractSet[str]], node_id: str, column: str | None,
) -> bool:
    if column is None:
        return True
    known = columns_by_node_id.get(node_id)
    return known is not None and column in known


def is_edge_renderable(
    edge: EdgeMeta,
    renderable_node_ids: AbstractSet[str],
    columns_by_node_id: Mapping[str, AbstractSet[str]],
) -> bool:
    """Both endpoints renderable and every declared column still present."""
    return (
        edge.source in renderable_node_ids
        and edge.target in renderable_node_ids
        and _column_exists(columns_by_node_id, edge.source, edge.source_column)
        and _column_exists(columns_by_node_id, edge.target, edge.target_column)
    )


def _coerce_edge_type(tag: EdgeType | str) -> EdgeType | None:
    try:
        return EdgeType(tag)
    except ValueError:
        return None


def _visible_text(text: str | None) -> str | None:
    if text is None or not text.strip():
        return None
    return text


def derive_edge_state(
    edges: Sequence[EdgeMeta],
    edge_type_filter: Collection[EdgeType | str] | None,
    renderable_node_ids: AbstractSet[str],
    columns_by_node_id: Mapping[str, AbstractSet[str]],
    focused_node_id: str | None = None,
    selected_edge_ids: AbstractSet[str] = frozenset(),
    hovered_edge_id: str | None = None,
    show_labels: bool = False,
    show_inline_label_on_hover: bool = False,
) -> EdgeStateResult:
    """Filter *edges* and attach style and label decisions.

    An edge is kept, in input order, only when its type is in
    *edge_type_filter* (``None`` keeps every type), both endpoints are in
    *renderable_node_ids*, and each declared column exists on its node.
    Tags outside the ``EdgeType`` vocabulary are dropped; records always
    carry an ``EdgeType`` member.

    While a focus session is active, edges touching the focused node are
    emphasised, the rest are dimmed, and selection styling is suspended.
    Labels appear when *show_labels* is set, or on the hovered edge when
    *show_inline_label_on_hover* is set (trimmed), and never on a dimmed
    edge.

    Pure: identical arguments always give an equal result.
    """
    records: list[EdgeRecord] = []
    visible_ids: set[str] = set()
    handle_types: dict[str, set[EdgeType]] = {}
    focus_active = bool(focused_node_id)

    for edge in edges:
        edge_type = _coerce_edge_type(edge.edge_type)
        if edge_type is None:
            continue
        if edge_type_filter is not None and edge_type not in edge_type_filter:
            continue
        if not is_edge_renderable(edge, renderable_node_ids, columns_by_node_id):
            continue

        visible_ids.add(edge.id)
        for handle in (edge.source_handle, edge.target_handle):
            if handle:
                handle_types.setdefault(handle, set()).add(edge_type)

        is_dimmed = focus_active and focused_node_id not in (edge.source, edge.target)
        is_focused = focus_active and not is_dimmed
        is_selected = not focus_active and edge.id in selected_edge_ids

        palette = EDGE_PALETTES[edge_type]
        if is_selected:
            stroke, label_color, width = palette.selected, palette.label_selected, SELECTED_STROKE_WIDTH
        elif is_dimmed:
            stroke, label_color, width = palette.dimmed, palette.label_dimmed, DIMMED_STROKE_WIDTH
        elif is_focused:
            stroke, label_color, width = palette.base, palette.label, FOCUSED_STROKE_WIDTH
        else:
            stroke, label_color, width = palette.base, palette.label, DEFAULT_STROKE_WIDTH

        label: str | None = None
        if not is_dimmed:
            if show_labels:
                label = _visible_text(edge.label)
            elif show_inline_label_on_hover and edge.id == hovered_edge_id:
                label = normalize_text(edge.label)

        records.append(EdgeRecord(
            id=edge.id,
            edge_type=edge_type,
            source=edge.source,
            target=edge.target,
            style=EdgeStyle(
                stroke=stroke,
                stroke_width=width,
                opacity=DIMMED_OPACITY if is_dimmed else 1.0,
                marker_color=stroke,
                label_color=label_color,
            ),
            source_handle=edge.source_handle,
            target_handle=edge.target_handle,
            source_column=edge.source_column,
            target_column=edge.target_column,
            label=label,
        ))

    return EdgeStateResult(
        edges=tuple(records),
        visible_edge_ids=frozenset(visible_ids),
        handle_edge_types=MappingProxyType(
            {handle: frozenset(types) for handle, types in handle_types.items()}
        ),
    )


def edges_equivalent(current: Iterable[EdgeRecord], nxt: Iterable[EdgeRecord]) -> bool:
    """Return whether two record sequences would render identically."""
    return tuple(current) == tuple(nxt)
