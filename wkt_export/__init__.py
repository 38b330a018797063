"""
Well-Known Text export for vector geometries.
"""

from .config import DEFAULT_OPTIONS, NonFinitePolicy, RenderStrategy, WriterOptions
from .errors import (
    GeometryConversionError,
    NestingTooDeepError,
    NonFiniteOrdinateError,
    NullGeometryError,
    UnsupportedGeometryKindError,
    WktError,
)
from .geometry import (
    Geometry,
    GeometryCollection,
    GeometryType,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from .geometry_converter import from_geojson, from_shapely, geojson_to_wkt
from .number_format import format_coordinate, format_number
from .writer import render, render_iterative, to_wkt, write_wkt

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_OPTIONS",
    "NonFinitePolicy",
    "RenderStrategy",
    "WriterOptions",
    "WktError",
    "NullGeometryError",
    "UnsupportedGeometryKindError",
    "NonFiniteOrdinateError",
    "GeometryConversionError",
    "NestingTooDeepError",
    "Geometry",
    "GeometryType",
    "Point",
    "LineString",
    "Polygon",
    "MultiPoint",
    "MultiLineString",
    "MultiPolygon",
    "GeometryCollection",
    "from_geojson",
    "from_shapely",
    "geojson_to_wkt",
    "format_number",
    "format_coordinate",
    "render",
    "render_iterative",
    "to_wkt",
    "write_wkt",
]
