"""Handle ids — anchor identifiers for node-level and column-level edge endpoints.

A handle is described by a structured :class:`HandleKey` (node id, optional
column name, optional direction).  Its string form percent-encodes each part
before joining node and column with ``|``, so identifiers that themselves
contain ``|``, ``%`` or ``-`` can never collide or be mistaken for a
direction suffix.

Examples::

    build_node_handle_base("dbo.orders")
    # 'dbo.orders'

    build_column_handle_base("dbo.orders", "customer_id")
    # 'dbo.orders|customer_id'

    with_direction(build_node_handle_base("dbo.orders"), HandleDirection.SOURCE)
    # 'dbo.orders-source'
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote, unquote

HANDLE_SEPARATOR = "|"


class HandleDirection(Enum):
    """Which end of an edge a handle anchors."""

    SOURCE = "source"
    TARGET = "target"

    @property
    def suffix(self) -> str:
        return f"-{self.value}"


def _encode_part(value: str) -> str:
    # "-" is reserved for the direction suffix
    return quote(value, safe="").replace("-", "%2D")


def _decode_part(value: str) -> str:
    return unquote(value)


@dataclass(frozen=True, slots=True)
class HandleKey:
    """Structured handle identity.

    Attributes:
        node_id: Id of the node the handle sits on.
        column: Column name for column-level handles, ``None`` for node-level.
        direction: Edge end the handle anchors, ``None`` for a bare base.
    """

    node_id: str
    column: str | None = None
    direction: HandleDirection | None = None

    @property
    def is_column_level(self) -> bool:
        return self.column is not None

    @property
    def base(self) -> str:
        """The direction-less string form."""
        if self.column is None:
            return _encode_part(self.node_id)
        return f"{_encode_part(self.node_id)}{HANDLE_SEPARATOR}{_encode_part(self.column)}"

    def encode(self) -> str:
        """The full string form stored on an edge."""
        if self.direction is None:
            return self.base
        return with_direction(self.base, self.direction)


def build_node_handle_base(node_id: str) -> str:
    """Base handle for a whole node."""
    return HandleKey(node_id).base


def build_column_handle_base(node_id: str, column_name: str) -> str:
    """Base handle for one column of a node."""
    return HandleKey(node_id, column_name).base


def with_direction(base: str, direction: HandleDirection) -> str:
    """Append the ``-source`` / ``-target`` suffix to a base handle."""
    return f"{base}{direction.suffix}"


def strip_direction(handle: str) -> tuple[str, HandleDirection | None]:
    """Split a handle into its base and direction.

    Encoded parts never contain ``-``, so a trailing suffix is always a
    direction and never part of an identifier.
    """
    for direction in HandleDirection:
        if handle.endswith(direction.suffix):
            return handle[: -len(direction.suffix)], direction
    return handle, None


def parse_handle(handle: str) -> HandleKey:
    """Decode a handle string (with or without direction) into a ``HandleKey``."""
    base, direction = strip_direction(handle)
    node_part, sep, column_part = base.partition(HANDLE_SEPARATOR)
    if not sep:
        return HandleKey(_decode_part(node_part), None, direction)
    return HandleKey(_decode_part(node_part), _decode_part(column_part), direction)


def node_handle(node_id: str, direction: HandleDirection) -> str:
    """Full node-level handle, e.g. ``"dbo.orders-source"``."""
    return HandleKey(node_id, None, direction).encode()


def column_handle(node_id: str, column_name: str, direction: HandleDirection) -> str:
    """Full column-level handle, e.g. ``"dbo.orders|customer_id-source"``."""
    return HandleKey(node_id, column_name, direction).encode()
