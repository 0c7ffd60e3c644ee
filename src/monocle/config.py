"""GraphSettings — user preferences that seed the view state."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from monocle.graph.types import ALL_SCHEMAS, DEFAULT_FOCUS_EXPAND_THRESHOLD, FocusMode

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


class EdgeLabelMode(Enum):
    """When edge labels are drawn."""

    AUTO = "auto"
    NEVER = "never"
    ALWAYS = "always"


@dataclass(frozen=True, slots=True)
class GraphSettings:
    """Persisted graph preferences."""

    schema_filter: str = ALL_SCHEMAS
    """Preferred schema; falls back to ``"all"`` when the loaded schema lacks it."""

    focus_mode: FocusMode = FocusMode.FADE
    """Whether focus sessions fade or hide unrelated nodes."""

    focus_expand_threshold: int = DEFAULT_FOCUS_EXPAND_THRESHOLD
    """Maximum neighbours admitted around a focused node in hide mode."""

    edge_label_mode: EdgeLabelMode = EdgeLabelMode.AUTO
    """``auto`` shows labels only when zoomed in past ``edge_label_zoom``."""

    edge_label_zoom: float = 0.8
    """Zoom level at and above which ``auto`` labels appear."""

    search_debounce_ms: int = 300
    """Delay callers should wait after the last keystroke before searching."""

    def show_labels_at(self, zoom: float) -> bool:
        """Resolve the label mode for the current zoom level."""
        if self.edge_label_mode is EdgeLabelMode.ALWAYS:
            return True
        if self.edge_label_mode is EdgeLabelMode.NEVER:
            return False
        return zoom >= self.edge_label_zoom

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> GraphSettings:
        """Hydrate from a persisted camelCase settings document.

        Unknown keys are ignored.  Values of the wrong shape are logged and
        replaced by defaults.
        """
        settings = cls()
        updates: dict[str, Any] = {}

        schema_filter = data.get("schemaFilter")
        if isinstance(schema_filter, str) and schema_filter:
            updates["schema_filter"] = schema_filter

        focus_mode = data.get("focusMode")
        if focus_mode is not None:
            try:
                updates["focus_mode"] = FocusMode(focus_mode)
            except ValueError:
                logger.warning("Ignoring invalid focusMode %r", focus_mode)

        threshold = data.get("focusExpandThreshold")
        if threshold is not None:
            if isinstance(threshold, int) and not isinstance(threshold, bool) and threshold >= 0:
                updates["focus_expand_threshold"] = threshold
            else:
                logger.warning("Ignoring invalid focusExpandThreshold %r", threshold)

        label_mode = data.get("edgeLabelMode")
        if label_mode is not None:
            try:
                updates["edge_label_mode"] = EdgeLabelMode(label_mode)
            except ValueError:
                logger.warning("Ignoring invalid edgeLabelMode %r", label_mode)

        return replace(settings, **updates)

    def to_mapping(self) -> dict[str, Any]:
        """Persistable camelCase form of the user-facing settings."""
        return {
            "schemaFilter": self.schema_filter,
            "focusMode": self.focus_mode.value,
            "focusExpandThreshold": self.focus_expand_threshold,
            "edgeLabelMode": self.edge_label_mode.value,
        }
