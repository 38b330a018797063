import io

import pytest

from wkt_export import writer
from wkt_export.config import NonFinitePolicy, RenderStrategy, WriterOptions
from wkt_export.errors import (
    NestingTooDeepError,
    NonFiniteOrdinateError,
    NullGeometryError,
    UnsupportedGeometryKindError,
    WktError,
)
from wkt_export.geometry import (
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
from wkt_export.writer import render_iterative, to_wkt, write_wkt

RECURSIVE = WriterOptions(strategy=RenderStrategy.RECURSIVE)

SHELL = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]
HOLE = [(5, 5), (7, 5), (7, 7), (5, 7), (5, 5)]


@pytest.mark.parametrize(
    "geometry, expected",
    [
        (Point(), "POINT EMPTY"),
        (LineString(), "LINESTRING EMPTY"),
        (Polygon(), "POLYGON EMPTY"),
        (MultiPoint(), "MULTIPOINT EMPTY"),
        (MultiLineString(), "MULTILINESTRING EMPTY"),
        (MultiPolygon(), "MULTIPOLYGON EMPTY"),
        (GeometryCollection(), "GEOMETRYCOLLECTION EMPTY"),
    ],
)
def test_empty_geometries(geometry, expected):
    assert to_wkt(geometry) == expected
    assert to_wkt(geometry, RECURSIVE) == expected


def test_point():
    assert to_wkt(Point((15, 20))) == "POINT (15 20)"


def test_point_with_z_and_m():
    assert to_wkt(Point((1, 2, 3))) == "POINT (1 2 3)"
    assert to_wkt(Point((1, 2, 3, 4))) == "POINT (1 2 3 4)"


def test_line_string_preserves_vertex_order():
    line = LineString.from_coords([(0, 0), (10, 10), (20, 25), (50, 60)])
    assert to_wkt(line) == "LINESTRING (0 0, 10 10, 20 25, 50 60)"


def test_polygon_with_interior_ring():
    polygon = Polygon.from_coords(SHELL, [HOLE])
    assert to_wkt(polygon) == (
        "POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0), (5 5, 7 5, 7 7, 5 7, 5 5))"
    )


def test_polygon_without_interior_rings():
    assert to_wkt(Polygon.from_coords(SHELL)) == "POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0))"


def test_polygon_absent_interior_ring_is_empty():
    polygon = Polygon(LineString.from_coords(SHELL), (None,))
    assert to_wkt(polygon) == "POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0), EMPTY)"


def test_multi_point():
    multi_point = MultiPoint.from_coords([(0, 0), (20, 20), (60, 60)])
    assert to_wkt(multi_point) == "MULTIPOINT (0 0, 20 20, 60 60)"


def test_multi_point_with_empty_member():
    multi_point = MultiPoint((Point(), Point((1, 2))))
    assert to_wkt(multi_point) == "MULTIPOINT (EMPTY, 1 2)"


def test_multi_line_string():
    lines = MultiLineString.from_coords([[(10, 10), (20, 20)], [(15, 15), (30, 15)]])
    assert to_wkt(lines) == "MULTILINESTRING ((10 10, 20 20), (15 15, 30 15))"


def test_multi_line_string_with_empty_member():
    lines = MultiLineString((LineString(), LineString.from_coords([(1, 2), (3, 4)])))
    assert to_wkt(lines) == "MULTILINESTRING (EMPTY, (1 2, 3 4))"


def test_multi_polygon_keeps_member_parentheses():
    polygons = MultiPolygon.from_coords([[SHELL], [HOLE]])
    assert to_wkt(polygons) == (
        "MULTIPOLYGON (((0 0, 10 0, 10 10, 0 10, 0 0)), ((5 5, 7 5, 7 7, 5 7, 5 5)))"
    )


def test_multi_polygon_with_empty_member():
    polygons = MultiPolygon((Polygon(), Polygon.from_coords(HOLE)))
    assert to_wkt(polygons) == "MULTIPOLYGON (EMPTY, ((5 5, 7 5, 7 7, 5 7, 5 5)))"


def test_geometry_collection_members_keep_their_tag():
    collection = GeometryCollection(
        (
            Point((10, 10)),
            Point((30, 30)),
            LineString.from_coords([(15, 15), (20, 20)]),
        )
    )
    assert to_wkt(collection) == (
        "GEOMETRYCOLLECTION (POINT (10 10), POINT (30 30), LINESTRING (15 15, 20 20))"
    )


def test_geometry_collection_with_empty_member():
    collection = GeometryCollection((LineString(), Point((3, 4))))
    assert to_wkt(collection) == "GEOMETRYCOLLECTION (LINESTRING EMPTY, POINT (3 4))"


def test_nested_geometry_collection():
    inner = GeometryCollection((Point((1, 2)), GeometryCollection()))
    outer = GeometryCollection((inner, MultiPoint.from_coords([(5, 6)])))
    expected = (
        "GEOMETRYCOLLECTION (GEOMETRYCOLLECTION (POINT (1 2), GEOMETRYCOLLECTION EMPTY), "
        "MULTIPOINT (5 6))"
    )
    assert to_wkt(outer) == expected
    assert to_wkt(outer, RECURSIVE) == expected


def test_negative_and_fractional_ordinates():
    assert to_wkt(Point((-12.5, 0.001))) == "POINT (-12.5 0.001)"


@pytest.mark.parametrize("value", [1e-20, 1e25, -3.2e-9, 6.02214076e23])
def test_no_exponent_marker(value):
    text = to_wkt(LineString.from_coords([(value, value), (0, 0)]))
    body = text.split(" ", 1)[1]
    assert "e" not in body.lower()


def test_output_is_deterministic():
    polygon = MultiPolygon.from_coords([[SHELL, HOLE], [HOLE]])
    assert to_wkt(polygon) == to_wkt(polygon)


ALL_KINDS = [
    Point((1.5, -2.25)),
    LineString.from_coords([(0, 0), (1, 1)]),
    Polygon.from_coords(SHELL, [HOLE]),
    MultiPoint.from_coords([(0, 0), (1, 1)]),
    MultiLineString.from_coords([[(0, 0), (1, 1)], []]),
    MultiPolygon.from_coords([[SHELL], []]),
    GeometryCollection(
        (Point(), GeometryCollection((Polygon.from_coords(HOLE), LineString())))
    ),
]


@pytest.mark.parametrize("geometry", ALL_KINDS)
def test_strategies_produce_identical_output(geometry):
    assert to_wkt(geometry, RECURSIVE) == to_wkt(geometry)


def nested_collection(depth):
    geometry = Point((1, 2))
    for _ in range(depth):
        geometry = GeometryCollection((geometry,))
    return geometry


@pytest.mark.parametrize("depth", [1000, 5000])
def test_default_options_handle_deep_nesting(depth):
    expected = "GEOMETRYCOLLECTION (" * depth + "POINT (1 2)" + ")" * depth
    assert to_wkt(nested_collection(depth)) == expected


def test_recursive_strategy_reports_deep_nesting_as_wkt_error():
    with pytest.raises(NestingTooDeepError) as excinfo:
        to_wkt(nested_collection(5000), RECURSIVE)
    assert isinstance(excinfo.value, WktError)


def test_write_wkt_appends_to_sink():
    sink = io.StringIO()
    sink.write("geom=")
    write_wkt(Point((1, 2)), sink)
    assert sink.getvalue() == "geom=POINT (1 2)"


class ChunkSink:
    def __init__(self):
        self.chunks = []

    def write(self, text):
        self.chunks.append(text)


@pytest.mark.parametrize("strategy", list(RenderStrategy))
def test_write_wkt_streams_to_any_writer(strategy):
    geometry = ALL_KINDS[-1]
    sink = ChunkSink()
    write_wkt(geometry, sink, WriterOptions(strategy=strategy))
    assert len(sink.chunks) > 1
    assert "".join(sink.chunks) == to_wkt(geometry)


def test_null_geometry():
    with pytest.raises(NullGeometryError):
        to_wkt(None)


@pytest.mark.parametrize("options", [None, RECURSIVE])
def test_null_collection_member(options):
    with pytest.raises(NullGeometryError):
        to_wkt(GeometryCollection((Point((1, 2)), None)), options)


def test_null_line_string_vertex():
    with pytest.raises(NullGeometryError):
        to_wkt(LineString((Point((0, 0)), None)))


def test_null_multi_point_member():
    with pytest.raises(NullGeometryError):
        to_wkt(MultiPoint((None,)))


class Circle(Geometry):
    def is_empty(self):
        return False


@pytest.mark.parametrize("value", ["POINT (1 2)", (1, 2), object(), Circle()])
def test_unsupported_geometry_kind(value):
    with pytest.raises(UnsupportedGeometryKindError):
        to_wkt(value)


def test_unsupported_collection_member():
    collection = GeometryCollection((Point((1, 2)), "POINT (3 4)"))
    with pytest.raises(UnsupportedGeometryKindError):
        to_wkt(collection)
    with pytest.raises(UnsupportedGeometryKindError):
        to_wkt(collection, RECURSIVE)


def test_non_finite_ordinate_raises_by_default():
    with pytest.raises(NonFiniteOrdinateError):
        to_wkt(Point((float("nan"), 1)))


def test_non_finite_ordinate_literals():
    options = WriterOptions(non_finite=NonFinitePolicy.LITERAL)
    point = Point((float("nan"), float("inf"), float("-inf")))
    assert to_wkt(point, options) == "POINT (NaN Inf -Inf)"


def test_precision_option():
    options = WriterOptions(precision=2)
    assert to_wkt(Point((1.23456, 10.0)), options) == "POINT (1.23 10)"


def test_every_geometry_type_has_a_writer():
    assert set(writer._TAGGED_TEXT_WRITERS) == set(GeometryType)


def test_render_iterative_matches_render():
    sink_a, sink_b = io.StringIO(), io.StringIO()
    writer.render(ALL_KINDS[-1], sink_a)
    render_iterative(ALL_KINDS[-1], sink_b)
    assert sink_a.getvalue() == sink_b.getvalue()


def test_point_with_many_ordinates():
    assert to_wkt(Point((1, 2, 3, 4, 5))) == "POINT (1 2 3 4 5)"
