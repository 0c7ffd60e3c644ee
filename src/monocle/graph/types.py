"""Graph view types — immutable filter snapshots and render results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from monocle.schema.types import ALL_EDGE_TYPES, OBJECT_KINDS, EdgeType, NodeKind

ALL_SCHEMAS = "all"
"""Schema-filter sentinel meaning "every schema"."""

DEFAULT_FOCUS_EXPAND_THRESHOLD = 15


class FocusMode(Enum):
    """How nodes outside a focus session are treated."""

    FADE = "fade"
    HIDE = "hide"


# ------------------------------------------------------------------
# Inputs
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GraphFilters:
    """Filter snapshot applied before focus.

    Attributes:
        schema_filter: ``ALL_SCHEMAS`` or one schema name.
        object_types: Node kinds to include.
        edge_types: Edge types to include.
        search: Free-text filter; blank means no filter.
        excluded_ids: Individual objects the user has hidden.
    """

    schema_filter: str = ALL_SCHEMAS
    object_types: frozenset[NodeKind] = OBJECT_KINDS
    edge_types: frozenset[EdgeType] = ALL_EDGE_TYPES
    search: str = ""
    excluded_ids: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True)
class FocusState:
    """Focus snapshot.

    Attributes:
        mode: Fade (de-emphasise) or hide everything outside the focus.
        node_id: Focused node, ``None`` when no focus session is active.
        expand_threshold: Maximum number of neighbours admitted in hide mode.
    """

    mode: FocusMode = FocusMode.FADE
    node_id: str | None = None
    expand_threshold: int = DEFAULT_FOCUS_EXPAND_THRESHOLD

    @property
    def is_active(self) -> bool:
        return bool(self.node_id)


# ------------------------------------------------------------------
# Node results
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NodeEmphasis:
    """Styling information for a fade-mode focus session.

    Attributes:
        focused_id: The focused node, or ``None``.
        neighbor_ids: Visible direct neighbours of the focused node.
        dimmed_ids: Visible nodes that are neither focused nor neighbours.
    """

    focused_id: str | None = None
    neighbor_ids: frozenset[str] = frozenset()
    dimmed_ids: frozenset[str] = frozenset()

    def is_dimmed(self, node_id: str) -> bool:
        return node_id in self.dimmed_ids


@dataclass(frozen=True, slots=True)
class FilteredCount:
    """Visible vs. total objects of one kind."""

    filtered: int
    total: int


# ------------------------------------------------------------------
# Edge results
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EdgeStyle:
    """Resolved stroke, marker and label colours for one edge."""

    stroke: str
    stroke_width: int
    opacity: float
    marker_color: str
    label_color: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "stroke": self.stroke,
            "stroke_width": self.stroke_width,
            "opacity": self.opacity,
            "marker_color": self.marker_color,
            "label_color": self.label_color,
        }


@dataclass(frozen=True, slots=True)
class EdgeRecord:
    """A renderable edge.

    Excluded edges are never emitted, so a record has no hidden flag.
    ``label`` is ``None`` when no label should be drawn.
    """

    id: str
    edge_type: EdgeType
    source: str
    target: str
    style: EdgeStyle
    source_handle: str | None = None
    target_handle: str | None = None
    source_column: str | None = None
    target_column: str | None = None
    label: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Renderer-agnostic shape; unset optional keys are omitted."""
        data: dict[str, Any] = {
            "id": self.id,
            "type": self.edge_type.value,
            "source": self.source,
            "target": self.target,
        }
        optional = {
            "source_handle": self.source_handle,
            "target_handle": self.target_handle,
            "source_column": self.source_column,
            "target_column": self.target_column,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        data["style"] = self.style.to_dict()
        if self.label is not None:
            data["label"] = self.label
        return data


@dataclass(frozen=True, slots=True)
class EdgeStateResult:
    """Output of edge-state derivation.

    Deeply immutable: ``edges`` is a tuple, ``handle_edge_types`` is a
    ``MappingProxyType``.
    """

    edges: tuple[EdgeRecord, ...] = ()
    visible_edge_ids: frozenset[str] = frozenset()
    handle_edge_types: MappingProxyType[str, frozenset[EdgeType]] = field(
        default_factory=lambda: MappingProxyType({})
    )


@dataclass(frozen=True, slots=True)
class RenderOutput:
    """Everything the renderer needs for one state snapshot."""

    node_ids: frozenset[str]
    emphasis: NodeEmphasis
    edge_state: EdgeStateResult

    @property
    def edges(self) -> tuple[EdgeRecord, ...]:
        return self.edge_state.edges
