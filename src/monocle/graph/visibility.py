"""Visibility resolver — which nodes are eligible to render for a filter/focus snapshot.

Resolution runs in two stages:

1. **Filters.**  A node is a candidate when the user has not excluded it,
   it is in the selected schema, its kind is in the object-type filter, and
   the search text (trimmed, case-insensitive) is a substring of its name
   or id.
2. **Focus.**  With a focused node present in the graph, hide mode narrows
   the result to the focused node plus up to ``expand_threshold`` direct
   non-excluded neighbours (ascending id order), whether or not those pass
   the other filters.
   Fade mode removes nothing; :func:`resolve_node_emphasis` reports which
   visible nodes should be de-emphasised instead.

Nothing here raises on stale input: a focus target missing from the graph
yields an empty set in hide mode and plain filter results in fade mode.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from monocle.graph._rustworkx import SchemaIndex
from monocle.graph.types import ALL_SCHEMAS, FilteredCount, FocusMode, NodeEmphasis
from monocle.schema.types import NodeKind

if TYPE_CHECKING:
    from collections.abc import Set as AbstractSet

    from monocle.graph.types import FocusState, GraphFilters
    from monocle.schema.types import SchemaGraph, SchemaObject

logger = logging.getLogger(__name__)

_COUNTED_KINDS: tuple[NodeKind, ...] = (
    NodeKind.TABLE,
    NodeKind.VIEW,
    NodeKind.TRIGGER,
    NodeKind.PROCEDURE,
    NodeKind.FUNCTION,
)


def matches_search(obj: SchemaObject, search: str) -> bool:
    """Case-insensitive substring match of *search* against name or id."""
    needle = search.strip().lower()
    if not needle:
        return True
    return needle in obj.name.lower() or needle in obj.id.lower()


def filter_candidates(graph: SchemaGraph, filters: GraphFilters) -> frozenset[str]:
    """Stage one: nodes passing the exclusion, schema, object-type and search filters."""
    result: set[str] = set()
    for obj in graph.objects():
        if obj.id in filters.excluded_ids:
            continue
        if filters.schema_filter != ALL_SCHEMAS and obj.schema != filters.schema_filter:
            continue
        if graph.kind_of(obj.id) not in filters.object_types:
            continue
        if not matches_search(obj, filters.search):
            continue
        result.add(obj.id)
    return frozenset(result)


def focus_neighbors(
    index: SchemaIndex,
    node_id: str,
    threshold: int,
    excluded: AbstractSet[str] = frozenset(),
) -> list[str]:
    """Direct neighbours of *node_id* admitted by the expansion threshold.

    Neighbours in *excluded* are dropped before truncation.  The rest are
    ordered by id and the first *threshold* are kept; a negative threshold
    admits none.
    """
    neighbors = [n for n in index.neighbors(node_id) if n not in excluded]
    limit = max(threshold, 0)
    if len(neighbors) > limit:
        logger.debug(
            "Truncating %d neighbours of %s to %d", len(neighbors), node_id, limit,
        )
        return neighbors[:limit]
    return neighbors


def resolve_visible_nodes(
    graph: SchemaGraph,
    filters: GraphFilters,
    focus: FocusState,
    *,
    index: SchemaIndex | None = None,
) -> frozenset[str]:
    """Return the set of node ids eligible to render.

    Parameters
    ----------
    index:
        Prebuilt index for *graph*.  Built on demand when a hide-mode focus
        session needs neighbours and none is given.
    """
    candidates = filter_candidates(graph, filters)
    focused = focus.node_id
    if not focused:
        return candidates

    if not graph.has_node(focused):
        logger.debug("Focus target %r not in schema", focused)
        return frozenset() if focus.mode is FocusMode.HIDE else candidates

    if focus.mode is FocusMode.FADE:
        return candidates | {focused}

    if index is None:
        index = SchemaIndex(graph)
    admitted = focus_neighbors(
        index, focused, focus.expand_threshold, filters.excluded_ids,
    )
    return frozenset((focused, *admitted))


def resolve_node_emphasis(
    graph: SchemaGraph,
    visible: AbstractSet[str],
    focus: FocusState,
    *,
    index: SchemaIndex | None = None,
) -> NodeEmphasis:
    """Split *visible* into focused, neighbour and dimmed nodes.

    Without an active focus on a known node nothing is dimmed.
    """
    focused = focus.node_id
    if not focused or not graph.has_node(focused):
        return NodeEmphasis()
    if index is None:
        index = SchemaIndex(graph)
    neighbor_ids = frozenset(n for n in index.neighbors(focused) if n in visible)
    dimmed = frozenset(n for n in visible if n != focused and n not in neighbor_ids)
    return NodeEmphasis(focused_id=focused, neighbor_ids=neighbor_ids, dimmed_ids=dimmed)


def count_visible(
    graph: SchemaGraph, visible: AbstractSet[str],
) -> MappingProxyType[NodeKind, FilteredCount]:
    """Visible vs. total object counts per kind."""
    totals = dict.fromkeys(_COUNTED_KINDS, 0)
    shown = dict.fromkeys(_COUNTED_KINDS, 0)
    for node_id in graph.node_ids():
        kind = graph.kind_of(node_id)
        totals[kind] += 1
        if node_id in visible:
            shown[kind] += 1
    return MappingProxyType({
        kind: FilteredCount(filtered=shown[kind], total=totals[kind]) for kind in _COUNTED_KINDS
    })
