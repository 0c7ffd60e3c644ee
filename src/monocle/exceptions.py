"""Custom exception hierarchy for the monocle schema-graph core."""


class MonocleError(Exception):
    """Base exception for all monocle errors."""


class SchemaError(MonocleError):
    """Raised when a schema graph cannot be constructed from its parts."""


class DuplicateObjectIdError(SchemaError):
    """Raised when two schema objects share an identifier."""


class FilterError(MonocleError):
    """Raised at the state boundary when a filter snapshot is malformed."""


class UnknownEdgeTypeError(FilterError):
    """Raised when an edge-type filter names a tag outside the vocabulary."""


class UnknownObjectTypeError(FilterError):
    """Raised when an object-type filter names an unknown node kind."""
