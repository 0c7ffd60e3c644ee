"""Edge hover card content."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from monocle.graph.edges import EdgeMeta


@dataclass(frozen=True, slots=True)
class EdgeEndpoint:
    """One end of a hovered edge."""

    object_id: str
    column: str | None = None


@dataclass(frozen=True, slots=True)
class EdgeHoverCard:
    """Title and endpoints shown when hovering an edge."""

    title: str | None
    from_endpoint: EdgeEndpoint
    to_endpoint: EdgeEndpoint


def normalize_text(value: str | None) -> str | None:
    """Trim *value*; blank or missing text becomes ``None``."""
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


def build_edge_hover_card(edge: EdgeMeta) -> EdgeHoverCard:
    """Build hover card content for *edge*."""
    return EdgeHoverCard(
        title=normalize_text(edge.label),
        from_endpoint=EdgeEndpoint(edge.source, normalize_text(edge.source_column)),
        to_endpoint=EdgeEndpoint(edge.target, normalize_text(edge.target_column)),
    )
