"""
Well-Known Text writer.

Converts a geometry to the <Geometry Tagged Text> form of the OpenGIS Simple
Features Specification, for example:

    POINT (15 20)
    LINESTRING (0 0, 10 10, 20 25, 50 60)
    POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0), (5 5, 7 5, 7 7, 5 7, 5 5))
    MULTIPOINT (0 0, 20 20, 60 60)
    MULTILINESTRING ((10 10, 20 20), (15 15, 30 15))
    MULTIPOLYGON (((0 0, 10 0, 10 10, 0 10, 0 0)), ((5 5, 7 5, 7 7, 5 7, 5 5)))
    GEOMETRYCOLLECTION (POINT (10 10), POINT (30 30), LINESTRING (15 15, 20 20))

Point coordinates are written with no separating comma; commas only separate
distinct points, rings and members.
"""

import io
from typing import Callable, Dict, List, Optional, Protocol, Union

from .config import DEFAULT_OPTIONS, RenderStrategy, WriterOptions
from .errors import NestingTooDeepError, NullGeometryError, UnsupportedGeometryKindError
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
from .number_format import format_coordinate

EMPTY = "EMPTY"
SEPARATOR = ", "


class TextSink(Protocol):
    """Append-only text destination (io.StringIO, an open text file, ...)."""

    def write(self, text: str) -> object: ...


def to_wkt(geometry: Geometry, options: Optional[WriterOptions] = None) -> str:
    """
    Convert a geometry to its Well-Known Text representation.

    Args:
        geometry: The geometry to write.
        options: Writer options, DEFAULT_OPTIONS when omitted.

    Returns:
        A <Geometry Tagged Text> string.
    """
    buffer = io.StringIO()
    write_wkt(geometry, buffer, options)
    return buffer.getvalue()


def write_wkt(
    geometry: Geometry, sink: TextSink, options: Optional[WriterOptions] = None
) -> None:
    """
    Append the Well-Known Text of a geometry to ``sink``.

    Errors abort the write; whatever was already appended to the sink must be
    discarded by the caller.
    """
    options = options or DEFAULT_OPTIONS
    if options.strategy is RenderStrategy.STACK:
        render_iterative(geometry, sink, options)
        return

    try:
        render(geometry, sink, options)
    except RecursionError as e:
        raise NestingTooDeepError(
            "geometry collections nest too deeply for the recursive strategy"
        ) from e


def render(
    geometry: Geometry, sink: TextSink, options: WriterOptions = DEFAULT_OPTIONS
) -> None:
    """Write <Geometry Tagged Text>, recursing into geometry collections."""
    _writer_for(geometry)(geometry, sink, options)


class _Text(str):
    """Literal output queued on the render_iterative stack."""


def render_iterative(
    geometry: Geometry, sink: TextSink, options: WriterOptions = DEFAULT_OPTIONS
) -> None:
    """
    Same output as render(), but collections are expanded on an explicit stack
    so nesting depth is not limited by the interpreter's recursion limit.
    """
    # Items are either literal text or geometries still to be written as tagged text.
    stack: List[Union[_Text, Geometry, None]] = [geometry]
    while stack:
        item = stack.pop()
        if isinstance(item, _Text):
            sink.write(item)
            continue

        writer = _writer_for(item)
        if item.geom_type is not GeometryType.GEOMETRYCOLLECTION or item.is_empty():
            # Every other kind has a fixed nesting depth.
            writer(item, sink, options)
            continue

        sink.write("GEOMETRYCOLLECTION (")
        stack.append(_Text(")"))
        for index in range(len(item.geometries) - 1, -1, -1):
            stack.append(item.geometries[index])
            if index > 0:
                stack.append(_Text(SEPARATOR))


def _writer_for(geometry) -> Callable[[Geometry, TextSink, WriterOptions], None]:
    if geometry is None:
        raise NullGeometryError()
    if not isinstance(geometry, Geometry):
        raise UnsupportedGeometryKindError(type(geometry).__name__)
    writer = _TAGGED_TEXT_WRITERS.get(getattr(geometry, "geom_type", None))
    if writer is None:
        raise UnsupportedGeometryKindError(type(geometry).__name__)
    return writer


# <Geometry Tagged Text>


def _append_point_tagged_text(point: Point, sink: TextSink, options: WriterOptions) -> None:
    sink.write("POINT ")
    _append_point_text(point, sink, options)


def _append_line_string_tagged_text(
    line_string: LineString, sink: TextSink, options: WriterOptions
) -> None:
    sink.write("LINESTRING ")
    _append_line_string_text(line_string, sink, options)


def _append_polygon_tagged_text(
    polygon: Polygon, sink: TextSink, options: WriterOptions
) -> None:
    sink.write("POLYGON ")
    _append_polygon_text(polygon, sink, options)


def _append_multi_point_tagged_text(
    multi_point: MultiPoint, sink: TextSink, options: WriterOptions
) -> None:
    sink.write("MULTIPOINT ")
    _append_multi_point_text(multi_point, sink, options)


def _append_multi_line_string_tagged_text(
    multi_line_string: MultiLineString, sink: TextSink, options: WriterOptions
) -> None:
    sink.write("MULTILINESTRING ")
    _append_multi_line_string_text(multi_line_string, sink, options)


def _append_multi_polygon_tagged_text(
    multi_polygon: MultiPolygon, sink: TextSink, options: WriterOptions
) -> None:
    sink.write("MULTIPOLYGON ")
    _append_multi_polygon_text(multi_polygon, sink, options)


def _append_geometry_collection_tagged_text(
    collection: GeometryCollection, sink: TextSink, options: WriterOptions
) -> None:
    sink.write("GEOMETRYCOLLECTION ")
    _append_geometry_collection_text(collection, sink, options)


_TAGGED_TEXT_WRITERS: Dict[GeometryType, Callable] = {
    GeometryType.POINT: _append_point_tagged_text,
    GeometryType.LINESTRING: _append_line_string_tagged_text,
    GeometryType.POLYGON: _append_polygon_tagged_text,
    GeometryType.MULTIPOINT: _append_multi_point_tagged_text,
    GeometryType.MULTILINESTRING: _append_multi_line_string_tagged_text,
    GeometryType.MULTIPOLYGON: _append_multi_polygon_tagged_text,
    GeometryType.GEOMETRYCOLLECTION: _append_geometry_collection_tagged_text,
}

_missing_kinds = set(GeometryType) - set(_TAGGED_TEXT_WRITERS)
if _missing_kinds:
    raise ImportError(
        "No WKT writer registered for: "
        + ", ".join(sorted(kind.value for kind in _missing_kinds))
    )


# <... Text> bodies: EMPTY or a parenthesized list


def _append_coordinate(point: Point, sink: TextSink, options: WriterOptions, context: str) -> None:
    if point is None:
        raise NullGeometryError(context)
    sink.write(format_coordinate(point, options))


def _append_point_text(point: Point, sink: TextSink, options: WriterOptions) -> None:
    if point is None or point.is_empty():
        sink.write(EMPTY)
        return
    sink.write("(")
    _append_coordinate(point, sink, options, "point")
    sink.write(")")


def _append_line_string_text(
    line_string: LineString, sink: TextSink, options: WriterOptions
) -> None:
    if line_string is None or line_string.is_empty():
        sink.write(EMPTY)
        return
    sink.write("(")
    for index, vertex in enumerate(line_string.vertices):
        if index > 0:
            sink.write(SEPARATOR)
        _append_coordinate(vertex, sink, options, "LineString vertex")
    sink.write(")")


def _append_polygon_text(polygon: Polygon, sink: TextSink, options: WriterOptions) -> None:
    if polygon is None or polygon.is_empty():
        sink.write(EMPTY)
        return
    sink.write("(")
    _append_line_string_text(polygon.exterior, sink, options)
    for ring in polygon.interiors:
        sink.write(SEPARATOR)
        _append_line_string_text(ring, sink, options)
    sink.write(")")


def _append_multi_point_text(
    multi_point: MultiPoint, sink: TextSink, options: WriterOptions
) -> None:
    if multi_point is None or multi_point.is_empty():
        sink.write(EMPTY)
        return
    sink.write("(")
    for index, point in enumerate(multi_point.points):
        if index > 0:
            sink.write(SEPARATOR)
        if point is not None and point.is_empty():
            sink.write(EMPTY)
        else:
            _append_coordinate(point, sink, options, "MultiPoint member")
    sink.write(")")


def _append_multi_line_string_text(
    multi_line_string: MultiLineString, sink: TextSink, options: WriterOptions
) -> None:
    if multi_line_string is None or multi_line_string.is_empty():
        sink.write(EMPTY)
        return
    sink.write("(")
    for index, line_string in enumerate(multi_line_string.line_strings):
        if index > 0:
            sink.write(SEPARATOR)
        _append_line_string_text(line_string, sink, options)
    sink.write(")")


def _append_multi_polygon_text(
    multi_polygon: MultiPolygon, sink: TextSink, options: WriterOptions
) -> None:
    if multi_polygon is None or multi_polygon.is_empty():
        sink.write(EMPTY)
        return
    sink.write("(")
    for index, polygon in enumerate(multi_polygon.polygons):
        if index > 0:
            sink.write(SEPARATOR)
        _append_polygon_text(polygon, sink, options)
    sink.write(")")


def _append_geometry_collection_text(
    collection: GeometryCollection, sink: TextSink, options: WriterOptions
) -> None:
    if collection is None or collection.is_empty():
        sink.write(EMPTY)
        return
    sink.write("(")
    for index, member in enumerate(collection.geometries):
        if index > 0:
            sink.write(SEPARATOR)
        # Members keep their own tag, unlike the Multi* containers.
        render(member, sink, options)
    sink.write(")")
