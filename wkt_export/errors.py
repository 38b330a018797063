"""
Exceptions raised while converting geometries to Well-Known Text.
"""


class WktError(Exception):
    """Base error for the WKT export package."""


class NullGeometryError(WktError, ValueError):
    """A geometry reference was None where a value was required."""

    def __init__(self, context: str = "geometry"):
        super().__init__(f"Cannot write Well-Known Text: {context} was None")
        self.context = context


class UnsupportedGeometryKindError(WktError, TypeError):
    """The value is not one of the seven recognized geometry kinds."""

    def __init__(self, kind: str):
        super().__init__(f"Unsupported geometry implementation: {kind}")
        self.kind = kind


class NonFiniteOrdinateError(WktError, ValueError):
    """An ordinate is NaN or infinite and the policy forbids writing it."""

    def __init__(self, value: float):
        super().__init__(f"Cannot write non-finite ordinate: {value!r}")
        self.value = value


class GeometryConversionError(WktError, ValueError):
    """Input for a geometry adapter (GeoJSON, shapely) is malformed."""


class NestingTooDeepError(WktError, RecursionError):
    """Collections nest deeper than the recursive writer can follow."""
